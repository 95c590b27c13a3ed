# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Classification of hub responses into success, redirect or terminal failure."""

from __future__ import annotations

import logging
from urllib.parse import urljoin

from ..errors import ErrorCategory, SubscriptionInitiationFailedError, categorize_error_type
from ..http.headers import header_value
from ..http.models import HttpResponse
from .models import (
    Mode,
    Redirect,
    SubscriptionChangeRequest,
    SubscriptionChangeResponse,
    SubscriptionOutcome,
)

logger = logging.getLogger(__name__)

HTTP_STATUS_ACCEPTED = 202
REDIRECT_STATUSES = frozenset({307, 308})
UNKNOWN_CAUSE = "cause could not be determined"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _fail(
    hub: str,
    mode: Mode,
    cause: str,
    *,
    status_code: int | None = None,
    category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
) -> SubscriptionOutcome:
    return SubscriptionOutcome.failure(
        SubscriptionInitiationFailedError(mode, hub, cause, status_code=status_code, category=category)
    )


def _transport_category(response: HttpResponse) -> ErrorCategory:
    recorded = response.meta.get("error_category")
    if recorded:
        try:
            return ErrorCategory(recorded)
        except ValueError:
            pass
    return categorize_error_type(response.error_type)


def _readable_body(response: HttpResponse) -> str | None:
    text = (response.text or "").strip()
    return text or None


def classify_response(
    hub: str,
    mode: Mode,
    request: SubscriptionChangeRequest,
    response: HttpResponse,
    redirect_budget: int,
) -> SubscriptionOutcome | Redirect:
    """
    Decide what a hub response means for a subscription change.

    Returns a settled SubscriptionOutcome, or a Redirect when the hub answered
    307/308 with a usable Location and `redirect_budget` allows following it.
    """
    if response.is_transport_failure:
        message = response.error_message or "transport failed without a response"
        return _fail(hub, mode, message, category=_transport_category(response))

    status = response.status_code

    if status in REDIRECT_STATUSES:
        if redirect_budget <= 0:
            return _fail(
                hub,
                mode,
                f"hub responded with redirect status {status} but following redirects is disabled or the redirect limit was reached",
                status_code=status,
                category=ErrorCategory.REDIRECT_REFUSED,
            )
        location = header_value(response.headers, "Location")
        if not location:
            return _fail(
                hub,
                mode,
                f"hub responded with redirect status {status} without a Location header",
                status_code=status,
                category=ErrorCategory.REDIRECT_REFUSED,
            )
        try:
            resolved = urljoin(hub, location)
        except ValueError:
            return _fail(
                hub,
                mode,
                f"hub responded with redirect status {status} with an unusable Location {location!r}",
                status_code=status,
                category=ErrorCategory.REDIRECT_REFUSED,
            )
        return Redirect(location=resolved)

    if not _is_success(status):
        body = _readable_body(response)
        detail = body if body is not None else UNKNOWN_CAUSE
        return _fail(
            hub,
            mode,
            f"hub responded with status {status}: {detail}",
            status_code=status,
            category=ErrorCategory.HUB_REJECTED,
        )

    if status != HTTP_STATUS_ACCEPTED:
        logger.warning(
            "Hub %s answered the %s request for %s with status %s instead of 202; treating it as accepted",
            hub,
            mode.phrase,
            request.topic,
            status,
        )
    return SubscriptionOutcome.success(SubscriptionChangeResponse(hub=hub, topic=request.topic, raw_response=response))


__all__ = ["HTTP_STATUS_ACCEPTED", "REDIRECT_STATUSES", "UNKNOWN_CAUSE", "classify_response"]
