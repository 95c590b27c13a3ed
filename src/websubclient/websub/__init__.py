# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""WebSub subscriber-side protocol: request building, response classification, redirects."""

from .classifier import classify_response
from .client import SubscriptionClient
from .models import (
    Mode,
    Redirect,
    SubscriptionChangeRequest,
    SubscriptionChangeResponse,
    SubscriptionOutcome,
)
from .redirect import exchange, follow_redirect
from .request_builder import build_form_body, build_request

__all__ = [
    "Mode",
    "Redirect",
    "SubscriptionChangeRequest",
    "SubscriptionChangeResponse",
    "SubscriptionClient",
    "SubscriptionOutcome",
    "build_form_body",
    "build_request",
    "classify_response",
    "exchange",
    "follow_redirect",
]
