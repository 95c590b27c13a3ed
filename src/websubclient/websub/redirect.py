# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded redirect following for hub subscription changes."""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import replace

from ..config import AuthConfig, ClientConfig
from ..errors import (
    ClientInitializationError,
    ErrorCategory,
    SubscriptionInitiationFailedError,
)
from ..http.client import HttpClient, TransportFactory
from ..http.models import HttpResponse
from .classifier import classify_response
from .models import Mode, Redirect, SubscriptionChangeRequest, SubscriptionOutcome
from .request_builder import build_request

logger = logging.getLogger(__name__)


def send_and_classify(
    client: HttpClient,
    hub: str,
    mode: Mode,
    request: SubscriptionChangeRequest,
    redirect_budget: int,
    *,
    config: ClientConfig,
) -> SubscriptionOutcome | Redirect:
    """Send one subscription change to `hub` and classify the answer."""
    wire_request = build_request(hub, mode, request, settings=config.http)
    try:
        response = client.request(wire_request)
    except Exception as exc:  # noqa: BLE001
        response = HttpResponse(
            ok=False,
            url=hub,
            error_message=str(exc),
            error_type=exc.__class__.__name__,
        )
    return classify_response(hub, mode, request, response, redirect_budget)


def follow_redirect(
    new_hub: str,
    mode: Mode,
    request: SubscriptionChangeRequest,
    auth: AuthConfig | None,
    remaining_budget: int,
    *,
    config: ClientConfig,
    transport_factory: TransportFactory,
) -> SubscriptionOutcome | Redirect:
    """
    Repeat a subscription change against the hub a redirect pointed at.

    A fresh transport client is bound to `new_hub` with the caller's credentials
    and closed once the hop is classified.
    """
    hop_config = replace(config, auth=auth)
    try:
        hop_client = transport_factory(new_hub, hop_config)
    except ClientInitializationError as exc:
        return SubscriptionOutcome.failure(
            SubscriptionInitiationFailedError(
                mode,
                new_hub,
                f"cannot follow redirect: {exc}",
                category=ErrorCategory.REDIRECT_REFUSED,
            )
        )
    try:
        return send_and_classify(hop_client, new_hub, mode, request, remaining_budget, config=hop_config)
    finally:
        with suppress(Exception):
            hop_client.close()


def exchange(
    client: HttpClient,
    hub: str,
    mode: Mode,
    request: SubscriptionChangeRequest,
    *,
    config: ClientConfig,
    transport_factory: TransportFactory,
) -> SubscriptionOutcome:
    """
    Run a subscription change to completion.

    Each followed redirect consumes one unit of the budget, so at most
    `config.redirect_budget + 1` requests are sent.
    """
    budget = config.redirect_budget
    attempts = 1
    decision = send_and_classify(client, hub, mode, request, budget, config=config)
    while isinstance(decision, Redirect):
        budget -= 1
        attempts += 1
        logger.info("Following %s redirect to %s (%d redirect(s) left)", mode.phrase, decision.location, budget)
        decision = follow_redirect(
            decision.location,
            mode,
            request,
            config.auth,
            budget,
            config=config,
            transport_factory=transport_factory,
        )
    return replace(decision, attempts=attempts)


__all__ = ["exchange", "follow_redirect", "send_and_classify"]
