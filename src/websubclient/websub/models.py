# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Subscription request/result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import SubscriptionInitiationFailedError
from ..http.models import HttpResponse


class Mode(str, Enum):
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"

    @property
    def phrase(self) -> str:
        """Noun used in log lines and error messages."""
        return "subscription" if self is Mode.SUBSCRIBE else "unsubscription"


@dataclass(frozen=True)
class SubscriptionChangeRequest:
    """
    A subscribe/unsubscribe intent for one topic.

    - `secret` is only sent on subscribe, and only when it holds non-whitespace text.
    - `lease_seconds` of 0 leaves the lease to the hub default.
    """

    callback: str
    topic: str
    secret: str | None = None
    lease_seconds: int = 0

    def __post_init__(self) -> None:
        if self.lease_seconds < 0:
            raise ValueError("lease_seconds must be >= 0")

    @property
    def effective_secret(self) -> str | None:
        if self.secret is None or not self.secret.strip():
            return None
        return self.secret


@dataclass(frozen=True)
class SubscriptionChangeResponse:
    """Hub acknowledgement of a subscription change."""

    hub: str
    topic: str
    raw_response: HttpResponse

    @property
    def status_code(self) -> int | None:
        return self.raw_response.status_code

    def to_dict(self) -> dict[str, Any]:
        return {"hub": self.hub, "topic": self.topic, "status_code": self.status_code}


@dataclass(frozen=True)
class Redirect:
    """Hub asked for the request to be repeated against `location`."""

    location: str


@dataclass(frozen=True)
class SubscriptionOutcome:
    """Settled result of a subscribe/unsubscribe call: a response or an error, never both."""

    response: SubscriptionChangeResponse | None = None
    error: SubscriptionInitiationFailedError | None = None
    attempts: int = 1

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("SubscriptionOutcome needs exactly one of response or error")

    @classmethod
    def success(cls, response: SubscriptionChangeResponse) -> SubscriptionOutcome:
        return cls(response=response)

    @classmethod
    def failure(cls, error: SubscriptionInitiationFailedError) -> SubscriptionOutcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.response is not None

    def unwrap(self) -> SubscriptionChangeResponse:
        """Return the response, raising the stored error for failed outcomes."""
        if self.error is not None:
            raise self.error
        return self.response

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "attempts": self.attempts,
            "response": self.response.to_dict() if self.response else None,
            "error": self.error.to_dict() if self.error else None,
        }
