# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Facebook Graph API client that authenticates with the request's bound token."""

import logging
from collections.abc import Generator
from typing import Any, Optional

import httpx

from fbauth.auth.errors import error_from_response
from fbauth.auth.facebook import (
    ACCESS_TOKEN_KEY,
    DEFAULT_GRAPH_URL,
    get_facebook_auth,
)

logger = logging.getLogger(__name__)


class FacebookContextAuth(httpx.Auth):
    """
    Adds the access token bound by FacebookAuthContextMiddleware to each request.

    Requests sent outside of a bound context go out without a token, and the Graph
    API answers them with an access-token-required error.
    """

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        facebook_auth = get_facebook_auth()
        if facebook_auth and facebook_auth.get(ACCESS_TOKEN_KEY):
            request.url = request.url.copy_merge_params(
                {"access_token": facebook_auth[ACCESS_TOKEN_KEY]}
            )
        yield request


class FacebookGraphClient:
    """
    Minimal async client for the Facebook Graph API.

    Args:
        base_url: Base URL of the Graph API.
        timeout: Timeout in seconds for each call.
        transport: Optional httpx transport, used to stub the API in tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GRAPH_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def get(self, path: str, **params: Any) -> Any:
        """
        Fetches a Graph API object or connection.

        Args:
            path: Graph path such as "/me" or "/me/friends".
            **params: Additional query parameters.

        Raises:
            FacebookGraphError: The Graph API answered with an error.

        Returns:
            Any: The decoded JSON body.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            auth=FacebookContextAuth(),
        ) as client:
            response = await client.get(path, params=params)

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            logger.debug(f"Graph API call to {path} failed: HTTP {response.status_code}")
            raise error_from_response(response.status_code, payload)

        return response.json()
