# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .websub.models import Mode


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    REDIRECT_REFUSED = "REDIRECT_REFUSED"
    HUB_REJECTED = "HUB_REJECTED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


_ERROR_TYPE_CATEGORIES = {
    "TimeoutException": ErrorCategory.TIMEOUT,
    "ConnectTimeout": ErrorCategory.TIMEOUT,
    "ReadTimeout": ErrorCategory.TIMEOUT,
    "WriteTimeout": ErrorCategory.TIMEOUT,
    "PoolTimeout": ErrorCategory.TIMEOUT,
    "ConnectError": ErrorCategory.CONNECTION_ERROR,
    "ReadError": ErrorCategory.CONNECTION_ERROR,
    "WriteError": ErrorCategory.CONNECTION_ERROR,
    "NetworkError": ErrorCategory.CONNECTION_ERROR,
    "RemoteProtocolError": ErrorCategory.CONNECTION_ERROR,
    "ProxyError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionRefusedError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionResetError": ErrorCategory.CONNECTION_ERROR,
    "SSLError": ErrorCategory.SSL_ERROR,
    "SSLCertVerificationError": ErrorCategory.SSL_ERROR,
    "CertificateError": ErrorCategory.SSL_ERROR,
    "gaierror": ErrorCategory.DNS_ERROR,
    "herror": ErrorCategory.DNS_ERROR,
}


def categorize_error_type(error_type: str | None) -> ErrorCategory:
    """Map the exception class name recorded on a failed HttpResponse to ErrorCategory."""
    if not error_type:
        return ErrorCategory.UNKNOWN_ERROR
    return _ERROR_TYPE_CATEGORIES.get(error_type, ErrorCategory.UNKNOWN_ERROR)


class WebSubClientError(Exception):
    """Base class for websubclient errors."""


class ClientInitializationError(WebSubClientError, ValueError):
    """Raised when a transport client cannot be built for a hub URL."""


class UrlEncodingError(WebSubClientError):
    """Raised by the URL encoder when a value cannot be percent-encoded."""


class SubscriptionInitiationFailedError(WebSubClientError):
    """Terminal failure of a subscribe/unsubscribe exchange with a hub."""

    def __init__(
        self,
        mode: Mode,
        hub: str,
        cause: str,
        *,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        self.mode = mode
        self.hub = hub
        self.cause = cause
        self.status_code = status_code
        self.category = category
        super().__init__(f"{mode.phrase.capitalize()} initiation failed for hub {hub}: {cause}")

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "hub": self.hub,
            "cause": self.cause,
            "status_code": self.status_code,
            "category": self.category.value,
        }


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while contacting the hub",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.REDIRECT_REFUSED: "Hub redirect could not be followed",
        ErrorCategory.HUB_REJECTED: "Hub rejected the request",
        ErrorCategory.UNKNOWN_ERROR: "Network error while contacting the hub",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")
