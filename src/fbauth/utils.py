# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Logging setup and URL helpers shared by the middleware."""

import logging.config
from urllib.parse import unquote_plus

from nmtfast.logging.v1.config import create_logging_config
from starlette.requests import Request

from fbauth.settings import AppSettings


def configure_logging(settings: AppSettings) -> None:
    """
    Configures logging based on the provided settings.
    """
    logging_config: dict = create_logging_config(settings.logging)
    logging.config.dictConfig(logging_config)

    for logger_name, logger in settings.logging.loggers.items():
        log_level: int = getattr(logging, logger["level"].upper())
        logging.getLogger(logger_name).setLevel(log_level)


def without_query_param(query_string: str, name: str) -> str:
    """
    Removes every occurrence of a parameter from a query string.

    Args:
        query_string: The raw query string, without the leading "?".
        name: Parameter to drop.

    Returns:
        str: The remaining parameters, in order and with their original encoding.
    """
    kept = [
        segment
        for segment in query_string.split("&")
        if segment and unquote_plus(segment.split("=", 1)[0]) != name
    ]
    return "&".join(kept)


def build_url(request: Request, query_string: str | None = None) -> str:
    """
    Rebuilds the full URL of a request, optionally with another query string.

    Args:
        request: The incoming request; scheme, host and path are kept.
        query_string: Replacement query; the request's own query when omitted.

    Returns:
        str: The absolute URL.
    """
    if query_string is None:
        return str(request.url)
    return str(request.url.replace(query=query_string))
