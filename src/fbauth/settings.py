# -*- coding: utf-8 -*-
# Copyright (c) 2025. All rights reserved.
# Licensed under the MIT License. See LICENSE file in the project root for details.

"""Application settings and defaults, defined with pydantic-settings."""

import logging
from urllib.parse import urlsplit

from nmtfast.settings.v1.config_files import get_config_files, load_config
from nmtfast.settings.v1.schemas import LoggingSettings
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from fbauth.auth.facebook import DEFAULT_DIALOG_URL, DEFAULT_GRAPH_URL

logger = logging.getLogger(__name__)


class FacebookAppSettings(BaseModel):
    """
    Registration of the Facebook application. Immutable once loaded.

    Attributes:
        client_id: The Facebook application id.
        client_secret: The Facebook application secret.
        redirect_uri: Callback URI registered with Facebook; only its path is
            used to detect callback requests.
        permissions: Scopes requested from the user, in order.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    redirect_uri: str
    permissions: tuple[str, ...] = ()

    @property
    def callback_path(self) -> str:
        """Path component of redirect_uri, matched against incoming requests."""
        return urlsplit(self.redirect_uri).path


class GraphSettings(BaseModel):
    """
    Settings for the Facebook Graph API endpoints.

    Attributes:
        base_url: Base URL for Graph API and token exchange calls.
        dialog_url: URL of the OAuth login dialog.
        timeout: Timeout in seconds for outbound calls.
    """

    base_url: str = DEFAULT_GRAPH_URL
    dialog_url: str = DEFAULT_DIALOG_URL
    timeout: float = 10.0


class SessionSettings(BaseModel):
    """
    Settings for the signed session cookie.

    Attributes:
        secret_key: Key used to sign the session cookie.
        cookie_name: Name of the session cookie.
        max_age: Cookie lifetime in seconds.
        https_only: Only send the cookie over HTTPS.
    """

    secret_key: str
    cookie_name: str = "session"
    max_age: int = 3600 * 24 * 14
    https_only: bool = False


class ServerSettings(BaseModel):
    """
    Settings for the uvicorn server.

    Attributes:
        host: Host address to bind to.
        port: Port to bind to.
    """

    host: str = "localhost"
    port: int = 8000


class AppSettings(BaseSettings):
    """
    Application settings model.

    Attributes:
        version (int): Version of the settings schema.
        app_name (str): Name of the FastAPI application.
        facebook (FacebookAppSettings): Facebook application registration.
        graph (GraphSettings): Graph API endpoints.
        session (SessionSettings): Session cookie configuration.
        server (ServerSettings): Server bind address.
        logging (LoggingSettings): Logging configuration.
        model_config (SettingsConfigDict): pydantic settings model configuration (extra handling).
    """

    version: int = 1
    app_name: str = "Facebook Auth App"
    facebook: FacebookAppSettings = FacebookAppSettings(
        client_id="FIXME",
        client_secret="FIXME",
        redirect_uri="http://localhost:8000/",
        permissions=("email",),
    )
    graph: GraphSettings = GraphSettings()
    session: SessionSettings = SessionSettings(secret_key="FIXME")
    server: ServerSettings = ServerSettings()
    logging: LoggingSettings = LoggingSettings()
    model_config = SettingsConfigDict(extra="ignore")


def get_app_settings() -> AppSettings:
    """
    Dependency function to provide settings.

    Returns:
        AppSettings: The application settings.
    """
    return _settings


_config_data: dict = load_config(get_config_files())
_settings: AppSettings = AppSettings(**_config_data)
