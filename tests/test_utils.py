# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Unit tests for logging and utility helpers."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from fbauth.settings import AppSettings
from fbauth.utils import build_url, configure_logging, without_query_param


def make_app_settings():
    settings = MagicMock(spec=AppSettings)
    # Simulate settings.logging with loggers dict
    settings.logging = MagicMock()
    settings.logging.loggers = {"test_logger": {"level": "INFO"}}
    return settings


def make_request(path, query, host="app"):
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "https",
            "path": path,
            "query_string": query.encode(),
            "headers": [(b"host", host.encode())],
        }
    )


@patch("fbauth.utils.create_logging_config")
@patch("fbauth.utils.logging.config.dictConfig")
def test_configure_logging_applies_config(mock_dictConfig, mock_create_config):
    settings = make_app_settings()
    mock_create_config.return_value = {"version": 1}
    configure_logging(settings)
    mock_create_config.assert_called_once_with(settings.logging)
    mock_dictConfig.assert_called_once_with({"version": 1})


@patch("fbauth.utils.create_logging_config")
@patch("fbauth.utils.logging.config.dictConfig")
def test_configure_logging_sets_logger_levels(mock_dictConfig, mock_create_config):
    settings = make_app_settings()
    mock_create_config.return_value = {"version": 1}
    with patch("fbauth.utils.logging.getLogger") as mock_getLogger:
        mock_logger = MagicMock()
        mock_getLogger.return_value = mock_logger
        configure_logging(settings)
        mock_getLogger.assert_called_with("test_logger")
        mock_logger.setLevel.assert_called_with(20)  # logging.INFO


@pytest.mark.parametrize(
    "query,expected",
    [
        ("code=abc", ""),
        ("code=abc&foo=bar", "foo=bar"),
        ("foo=bar&code=abc&code=def&baz=", "foo=bar&baz="),
        ("q=a+b&code=x", "q=a+b"),
        ("q=a%20b&p=x/y&code=abc", "q=a%20b&p=x/y"),
        ("c%6Fde=abc&next=%2Fhome", "next=%2Fhome"),
        ("codex=1&code", "codex=1"),
        ("", ""),
    ],
)
def test_without_query_param(query, expected):
    assert without_query_param(query, "code") == expected


def test_build_url_keeps_request_url():
    request = make_request("/albums/1511", "code=1&x=2")
    assert build_url(request) == "https://app/albums/1511?code=1&x=2"


def test_build_url_replaces_query():
    request = make_request("/albums/1511", "code=1&x=2", host="example.com:8443")
    assert build_url(request, "x=2") == "https://example.com:8443/albums/1511?x=2"
    assert build_url(request, "") == "https://example.com:8443/albums/1511"
