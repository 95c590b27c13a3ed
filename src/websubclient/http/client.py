# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from .models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from ..config import ClientConfig


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


TransportFactory = Callable[[str, "ClientConfig"], HttpClient]
"""Builds a transport client bound to a hub URL; raises ClientInitializationError on bad URLs."""


def create_default_http_client(url: str, config: ClientConfig | None = None) -> HttpClient:
    """Factory for the default httpx-backed client bound to `url`."""
    from .httpx_client import HttpxClient

    return HttpxClient(url, config)
