# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Error taxonomy for Facebook Graph API and authentication failures."""

from enum import Enum
from typing import Any, Optional


class AuthErrorKind(str, Enum):
    """
    Closed set of error kinds that require the user to (re-)authenticate.

    Attributes:
        INVALID_ACCESS_TOKEN: The stored access token was rejected, usually expired.
        ACCESS_TOKEN_REQUIRED: A Graph API call was made without any access token.
        LOGIN_REQUIRED: The application explicitly asks for a Facebook login.
    """

    INVALID_ACCESS_TOKEN = "invalid-access-token"
    ACCESS_TOKEN_REQUIRED = "access-token-required"
    LOGIN_REQUIRED = "login-required"


class FacebookGraphError(Exception):
    """
    Raised by Graph API collaborators and application code.

    Args:
        error: An AuthErrorKind member, or any other value for unrelated errors
            (for example the provider's raw error type).
        detail: Optional provider-specific payload.
    """

    def __init__(self, error: Any, detail: Optional[dict] = None):
        super().__init__(error, detail)
        self.error = error
        self.detail = detail

    @property
    def is_auth_error(self) -> bool:
        """True when the error is one of the re-authentication kinds."""
        return isinstance(self.error, AuthErrorKind)

    def __str__(self) -> str:
        kind = self.error.value if self.is_auth_error else self.error
        if self.detail and self.detail.get("message"):
            return f"{kind}: {self.detail['message']}"
        return str(kind)


def error_from_response(status_code: int, payload: Any) -> FacebookGraphError:
    """
    Translates a Graph API error answer into a FacebookGraphError.

    Args:
        status_code: HTTP status code of the provider response.
        payload: Decoded JSON body, expected as {"error": {"type", "code", "message"}}.

    Returns:
        FacebookGraphError: An auth kind for recognized OAuth failures, otherwise
            an error carrying the provider's error type.
    """
    detail = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(detail, dict):
        return FacebookGraphError(
            f"http-{status_code}", {"status_code": status_code, "body": payload}
        )

    error_type = detail.get("type")
    code = detail.get("code")
    message = detail.get("message") or ""

    if error_type == "OAuthException":
        if code == 190 or message.startswith("Error validating access token"):
            return FacebookGraphError(AuthErrorKind.INVALID_ACCESS_TOKEN, detail)
        if code == 104 or message.startswith("An active access token must be used"):
            return FacebookGraphError(AuthErrorKind.ACCESS_TOKEN_REQUIRED, detail)

    return FacebookGraphError(error_type or f"http-{status_code}", detail)
