# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
websubclient package entrypoint.

This package implements the subscriber side of WebSub: it asks a hub to
subscribe or unsubscribe a callback to a topic, classifies the hub's answer,
and follows a bounded number of 307/308 redirects. HTTP behavior is abstracted
behind an injectable client interface, and domain objects are modeled with
typed dataclasses.
"""

from .config import AuthConfig, ClientConfig, FollowRedirects, HttpSettings, load_client_config, load_http_settings
from .errors import (
    ClientInitializationError,
    ErrorCategory,
    SubscriptionInitiationFailedError,
    UrlEncodingError,
    WebSubClientError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .version import __version__
from .websub import (
    Mode,
    SubscriptionChangeRequest,
    SubscriptionChangeResponse,
    SubscriptionClient,
    SubscriptionOutcome,
)

__all__ = [
    "AuthConfig",
    "ClientConfig",
    "ClientInitializationError",
    "ErrorCategory",
    "FollowRedirects",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "Mode",
    "StubHttpClient",
    "SubscriptionChangeRequest",
    "SubscriptionChangeResponse",
    "SubscriptionClient",
    "SubscriptionInitiationFailedError",
    "SubscriptionOutcome",
    "UrlEncodingError",
    "WebSubClientError",
    "create_default_http_client",
    "load_client_config",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
