# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire-level request construction for hub subscription changes."""

from __future__ import annotations

import logging

from ..config import HttpSettings
from ..errors import UrlEncodingError
from ..http.encoding import encode_url
from ..http.models import HttpRequest
from .models import Mode, SubscriptionChangeRequest

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _encoded_callback(callback: str) -> str:
    try:
        return encode_url(callback)
    except UrlEncodingError as exc:
        logger.debug("Sending unencoded callback %s; the transport may be unable to send it: %s", callback, exc)
        return callback


def build_form_body(mode: Mode, request: SubscriptionChangeRequest) -> str:
    """
    Serialize a subscription change into the hub form body.

    Parameter order is fixed: mode, topic, callback, then secret and lease for
    subscribe requests that carry them.
    """
    params = [
        f"hub.mode={mode.value}",
        f"hub.topic={request.topic}",
        f"hub.callback={_encoded_callback(request.callback)}",
    ]
    if mode is Mode.SUBSCRIBE:
        secret = request.effective_secret
        if secret is not None:
            params.append(f"hub.secret={secret}")
        if request.lease_seconds != 0:
            params.append(f"hub.lease_seconds={request.lease_seconds}")
    return "&".join(params)


def build_request(
    hub: str,
    mode: Mode,
    request: SubscriptionChangeRequest,
    *,
    settings: HttpSettings | None = None,
) -> HttpRequest:
    """Build the POST sent to `hub` for a subscription change."""
    headers = {"Content-Type": FORM_CONTENT_TYPE}
    if settings is not None:
        headers["User-Agent"] = settings.user_agent
    return HttpRequest(
        url=hub,
        method="POST",
        headers=headers,
        body=build_form_body(mode, request),
        timeout=settings.timeout if settings is not None else None,
        allow_redirects=False,
    )


__all__ = ["FORM_CONTENT_TYPE", "build_form_body", "build_request"]
