# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Starlette middleware implementing the Facebook OAuth authorization-code flow.

Install them so that they run in this order, outside-in:

    SessionMiddleware
    -> FacebookCallbackMiddleware
    -> FacebookReAuthMiddleware
    -> FacebookAuthContextMiddleware
    -> application routes

Starlette runs the middleware added last first, so add them in reverse.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from fbauth.auth import facebook
from fbauth.auth.errors import FacebookGraphError
from fbauth.settings import FacebookAppSettings
from fbauth.utils import build_url, without_query_param

logger = logging.getLogger(__name__)

TokenExchange = Callable[[str, str, str, str], Awaitable[str]]
AuthUrlBuilder = Callable[[str, str, Sequence[str]], str]


class FacebookCallbackMiddleware(BaseHTTPMiddleware):
    """
    Completes the login by exchanging the callback code for an access token.

    Facebook sends the user back to redirect_uri with a "code" query parameter. When
    the request path equals the path of redirect_uri and a code is present, the code
    is exchanged for an access token, the token is stored in the session, and the
    user is redirected to the same URL without the code. Any other request passes
    through untouched.

    Only the path is compared; scheme, host and query of redirect_uri are ignored.
    The OAuth "state" parameter is not checked.

    Args:
        app: The next ASGI application.
        facebook_app: The Facebook application registration.
        get_access_token: Token exchange collaborator, called with
            (client_id, redirect_uri, client_secret, code).
    """

    def __init__(
        self,
        app: ASGIApp,
        facebook_app: FacebookAppSettings,
        get_access_token: TokenExchange = facebook.get_access_token,
    ):
        super().__init__(app)
        self.facebook_app = facebook_app
        self.get_access_token = get_access_token

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        code = request.query_params.get("code")
        if code is None or request.url.path != self.facebook_app.callback_path:
            return await call_next(request)

        redirect_uri = build_url(
            request, without_query_param(request.url.query, "code")
        )
        access_token = await self.get_access_token(
            self.facebook_app.client_id,
            redirect_uri,
            self.facebook_app.client_secret,
            code,
        )
        facebook.add_facebook_auth(request.session, access_token)
        logger.info(f"Stored Facebook access token, redirecting to {redirect_uri}")
        return RedirectResponse(redirect_uri, status_code=302)


class FacebookReAuthMiddleware(BaseHTTPMiddleware):
    """
    Redirects to the Facebook login dialog when authentication is required.

    A FacebookGraphError of kind invalid-access-token, access-token-required or
    login-required raised downstream turns into a redirect to the login dialog, with
    the current URL as redirect_uri so the user comes back to the same page. Any
    other exception is re-raised unchanged.

    Args:
        app: The next ASGI application.
        facebook_app: The Facebook application registration.
        auth_url: Builds the login URL from (client_id, redirect_uri, permissions).
    """

    def __init__(
        self,
        app: ASGIApp,
        facebook_app: FacebookAppSettings,
        auth_url: AuthUrlBuilder = facebook.facebook_auth_url,
    ):
        super().__init__(app)
        self.facebook_app = facebook_app
        self.auth_url = auth_url

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        try:
            return await call_next(request)
        except FacebookGraphError as exc:
            if not exc.is_auth_error:
                raise
            login_url = self.auth_url(
                self.facebook_app.client_id,
                build_url(request),
                self.facebook_app.permissions,
            )
            logger.info(
                f"Facebook login required ({exc.error.value}) for {request.url.path}"
            )
            return RedirectResponse(login_url, status_code=302)


class FacebookAuthContextMiddleware(BaseHTTPMiddleware):
    """
    Binds the session's facebook-auth to the request context.

    Graph API clients read it through get_facebook_auth() without it being passed
    along explicitly. The binding lives only while the downstream call runs.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        facebook_auth = request.session.get(facebook.FACEBOOK_AUTH_KEY)
        if facebook_auth is None:
            return await call_next(request)

        logger.debug(f"Binding Facebook auth context for {request.url.path}")
        with facebook.with_facebook_auth(facebook_auth):
            return await call_next(request)
