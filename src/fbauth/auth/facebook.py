# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Facebook OAuth collaborators: token exchange, login URL and the auth context."""

import contextvars
import logging
from collections.abc import Iterator, MutableMapping, Sequence
from contextlib import contextmanager
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode

import httpx

from fbauth.auth.errors import error_from_response

logger = logging.getLogger(__name__)

FACEBOOK_AUTH_KEY = "facebook-auth"
ACCESS_TOKEN_KEY = "access-token"

DEFAULT_GRAPH_URL = "https://graph.facebook.com"
DEFAULT_DIALOG_URL = "https://www.facebook.com/dialog/oauth"

FACEBOOK_AUTH_CTX: contextvars.ContextVar[dict | None] = contextvars.ContextVar(
    "facebook_auth", default=None
)


def get_facebook_auth() -> dict | None:
    """
    Returns the facebook-auth value bound to the current request, if any.
    """
    return FACEBOOK_AUTH_CTX.get()


@contextmanager
def with_facebook_auth(facebook_auth: dict) -> Iterator[dict]:
    """
    Binds facebook-auth for the dynamic extent of the with block.

    The previous binding is restored on exit, whether the block returns or raises.

    Args:
        facebook_auth: The session's facebook-auth value ({"access-token": ...}).
    """
    token = FACEBOOK_AUTH_CTX.set(facebook_auth)
    try:
        yield facebook_auth
    finally:
        FACEBOOK_AUTH_CTX.reset(token)


def add_facebook_auth(
    session: MutableMapping[str, Any], access_token: str
) -> MutableMapping[str, Any]:
    """
    Stores the access token in the session, replacing any earlier facebook-auth.
    """
    session[FACEBOOK_AUTH_KEY] = {ACCESS_TOKEN_KEY: access_token}
    return session


def facebook_auth_url(
    client_id: str,
    redirect_uri: str,
    permissions: Sequence[str],
    *,
    dialog_url: str = DEFAULT_DIALOG_URL,
) -> str:
    """
    Builds the URL of the Facebook login dialog.

    Args:
        client_id: The Facebook application id.
        redirect_uri: Where Facebook sends the user back to, with a code appended.
        permissions: Scopes to request, in order.
        dialog_url: Base URL of the OAuth dialog.

    Returns:
        str: The absolute authorization URL.
    """
    params = {"client_id": client_id, "redirect_uri": redirect_uri}
    if permissions:
        params["scope"] = ",".join(permissions)
    return f"{dialog_url}?{urlencode(params)}"


def _parse_token_body(response: httpx.Response) -> dict:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.json()
    # legacy Graph API versions answer with a form-encoded body
    return dict(parse_qsl(response.text))


async def get_access_token(
    client_id: str,
    redirect_uri: str,
    client_secret: str,
    code: str,
    *,
    graph_url: str = DEFAULT_GRAPH_URL,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Exchanges an authorization code for an access token.

    The redirect_uri must be identical to the one the login dialog was opened with.

    Args:
        client_id: The Facebook application id.
        redirect_uri: The redirect URI the code was issued for.
        client_secret: The Facebook application secret.
        code: The authorization code from the callback.
        graph_url: Base URL of the Graph API.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used to stub the provider.

    Raises:
        FacebookGraphError: The provider rejected the exchange.
        httpx.HTTPError: The provider could not be reached.

    Returns:
        str: The access token.
    """
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "client_secret": client_secret,
        "code": code,
    }
    async with httpx.AsyncClient(
        base_url=graph_url, timeout=timeout, transport=transport
    ) as client:
        response = await client.get("/oauth/access_token", params=params)

    if response.is_error:
        try:
            payload = response.json()
        except ValueError:
            payload = response.text
        logger.warning(f"Token exchange rejected with HTTP {response.status_code}")
        raise error_from_response(response.status_code, payload)

    body = _parse_token_body(response)
    access_token = body.get("access_token")
    if not access_token:
        raise error_from_response(response.status_code, body)

    logger.info(f"Exchanged authorization code for client_id={client_id}")
    return access_token
