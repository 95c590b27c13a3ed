# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

from collections.abc import Iterable

from ..config import ClientConfig
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are keyed by request URL. A list value is consumed in order and its
    last entry repeats once exhausted.
    """

    def __init__(self, responses: dict[str, HttpResponse | list[HttpResponse]] | None = None):
        self._responses: dict[str, list[HttpResponse]] = {}
        for url, response in (responses or {}).items():
            self.add(url, response)
        self.requests: list[HttpRequest] = []
        self.closed = False
        self.bound: list[tuple[str, ClientConfig]] = []

    def add(self, url: str, response: HttpResponse | Iterable[HttpResponse]) -> None:
        if isinstance(response, HttpResponse):
            self._responses[url] = [response]
        else:
            self._responses[url] = list(response)

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._responses.get(request.url)
        if not queue:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured", error_type="LookupError")
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def close(self) -> None:
        self.closed = True

    def factory(self, url: str, config: ClientConfig) -> "StubHttpClient":
        """TransportFactory that hands out this stub for every hub URL."""
        self.bound.append((url, config))
        return self
