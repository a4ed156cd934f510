# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Unit tests for the Graph API client."""

import httpx
import pytest

from fbauth.auth.errors import AuthErrorKind, FacebookGraphError
from fbauth.auth.facebook import with_facebook_auth
from fbauth.graph import FacebookGraphClient


def graph_client(handler):
    return FacebookGraphClient(
        base_url="https://graph.test", transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_get_adds_bound_access_token():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json={"id": "1", "name": "Jane"})

    with with_facebook_auth({"access-token": "tok"}):
        result = await graph_client(handler).get("/me", fields="id,name")

    assert result == {"id": "1", "name": "Jane"}
    assert captured["params"] == {"fields": "id,name", "access_token": "tok"}


@pytest.mark.asyncio
async def test_get_without_bound_context_sends_no_token():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": []})

    await graph_client(handler).get("/search")

    assert "access_token" not in captured["params"]


@pytest.mark.asyncio
async def test_get_translates_missing_token_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "error": {
                    "type": "OAuthException",
                    "code": 2500,
                    "message": "An active access token must be used to query"
                    " information about the current user.",
                }
            },
        )

    with pytest.raises(FacebookGraphError) as excinfo:
        await graph_client(handler).get("/me")

    assert excinfo.value.error is AuthErrorKind.ACCESS_TOKEN_REQUIRED


@pytest.mark.asyncio
async def test_get_non_json_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(FacebookGraphError) as excinfo:
        await graph_client(handler).get("/me")

    assert excinfo.value.error == "http-503"
    assert not excinfo.value.is_auth_error
