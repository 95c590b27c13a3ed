# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level subscription client facade."""

from __future__ import annotations

from contextlib import suppress

from ..config import ClientConfig, load_client_config
from ..http.client import TransportFactory, create_default_http_client
from .models import Mode, SubscriptionChangeRequest, SubscriptionOutcome
from .redirect import exchange


class SubscriptionClient:
    """
    Sends WebSub subscribe/unsubscribe requests to one hub.

    The hub URL, transport and configuration are fixed at construction; calls do
    not share any per-request state, so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        url: str,
        config: ClientConfig | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ):
        self.config = config or load_client_config()
        self.transport_factory: TransportFactory = transport_factory or create_default_http_client
        self.http_client = self.transport_factory(url, self.config)
        self.url = url

    @property
    def redirect_budget(self) -> int:
        return self.config.redirect_budget

    def subscribe(self, request: SubscriptionChangeRequest) -> SubscriptionOutcome:
        return self._change(Mode.SUBSCRIBE, request)

    def unsubscribe(self, request: SubscriptionChangeRequest) -> SubscriptionOutcome:
        return self._change(Mode.UNSUBSCRIBE, request)

    def _change(self, mode: Mode, request: SubscriptionChangeRequest) -> SubscriptionOutcome:
        return exchange(
            self.http_client,
            self.url,
            mode,
            request,
            config=self.config,
            transport_factory=self.transport_factory,
        )

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> SubscriptionClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
