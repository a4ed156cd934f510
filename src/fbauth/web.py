# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""FastAPI application wired with the Facebook authentication middleware."""

import functools
import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from fbauth.auth import facebook
from fbauth.auth.errors import AuthErrorKind, FacebookGraphError
from fbauth.auth.middleware import (
    FacebookAuthContextMiddleware,
    FacebookCallbackMiddleware,
    FacebookReAuthMiddleware,
    TokenExchange,
)
from fbauth.graph import FacebookGraphClient
from fbauth.settings import AppSettings

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings,
    *,
    get_access_token: Optional[TokenExchange] = None,
    graph_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Builds the application and installs the middleware chain.

    Args:
        settings: The application settings.
        get_access_token: Token exchange override; defaults to the Graph API.
        graph_transport: Optional httpx transport for Graph API calls.

    Returns:
        FastAPI: The configured application.
    """
    if get_access_token is None:
        get_access_token = functools.partial(
            facebook.get_access_token,
            graph_url=settings.graph.base_url,
            timeout=settings.graph.timeout,
            transport=graph_transport,
        )
    auth_url = functools.partial(
        facebook.facebook_auth_url, dialog_url=settings.graph.dialog_url
    )

    app = FastAPI(title=settings.app_name)
    app.state.graph = FacebookGraphClient(
        base_url=settings.graph.base_url,
        timeout=settings.graph.timeout,
        transport=graph_transport,
    )

    # added innermost first
    app.add_middleware(FacebookAuthContextMiddleware)
    app.add_middleware(
        FacebookReAuthMiddleware,
        facebook_app=settings.facebook,
        auth_url=auth_url,
    )
    app.add_middleware(
        FacebookCallbackMiddleware,
        facebook_app=settings.facebook,
        get_access_token=get_access_token,
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
        max_age=settings.session.max_age,
        https_only=settings.session.https_only,
    )

    @app.get("/")
    async def index(request: Request) -> dict:
        """
        Reports whether the session holds a Facebook access token.
        """
        return {"authenticated": facebook.FACEBOOK_AUTH_KEY in request.session}

    @app.get("/me")
    async def me(request: Request) -> dict:
        """
        Returns the Facebook profile of the logged-in user.

        Without a valid token the Graph API call fails and the user is sent to the
        Facebook login dialog.
        """
        graph: FacebookGraphClient = request.app.state.graph
        return await graph.get("/me")

    @app.get("/login")
    async def login() -> dict:
        """
        Forces a Facebook login, whatever the state of the session.
        """
        raise FacebookGraphError(AuthErrorKind.LOGIN_REQUIRED)

    logger.info(f"Application {settings.app_name} created")
    return app
