# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Entrypoint for running the Facebook auth web application."""

import logging

import click
import uvicorn

from fbauth.settings import get_app_settings
from fbauth.utils import configure_logging
from fbauth.web import create_app

settings = get_app_settings()

configure_logging(settings)
logger = logging.getLogger(__name__)


@click.command()
@click.option("--host", "host", default=settings.server.host)
@click.option("--port", "port", default=settings.server.port)
def main(host: str, port: int) -> None:
    """
    Starts the uvicorn server.

    Args:
        host: Host address to bind the server to.
        port: Port number to bind the server to.

    Returns:
        None: This function does not return a value.
    """
    app = create_app(settings)
    logger.info(f"Serving {settings.app_name} on {host}:{port}")

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()  # pragma: no cover
