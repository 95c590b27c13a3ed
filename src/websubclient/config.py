# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for websubclient."""

import os
from dataclasses import dataclass, field

from .version import __version__

DEFAULT_USER_AGENT = f"websubclient/{__version__} (+https://www.w3.org/TR/websub/)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP transport defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("WEBSUB_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("WEBSUB_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("WEBSUB_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("WEBSUB_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass(frozen=True)
class AuthConfig:
    """
    Opaque hub credentials.

    Either `username`/`password` (HTTP Basic) or `bearer_token` may be set; `headers`
    are sent verbatim with every hub request.
    """

    username: str | None = None
    password: str | None = None
    bearer_token: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def __repr__(self) -> str:
        return f"AuthConfig(username={self.username!r}, password=***, bearer_token=***, headers=<{len(self.headers)}>)"


@dataclass(frozen=True)
class FollowRedirects:
    """Hub redirect (307/308) policy."""

    enabled: bool = False
    max_count: int = 5

    @classmethod
    def from_env(cls) -> "FollowRedirects":
        return cls(
            enabled=_bool_env("WEBSUB_FOLLOW_REDIRECTS", cls.enabled),
            max_count=_int_env("WEBSUB_MAX_REDIRECTS", cls.max_count),
        )

    @property
    def budget(self) -> int:
        if not self.enabled:
            return 0
        return max(0, self.max_count)


@dataclass
class ClientConfig:
    """
    Transport configuration for a SubscriptionClient.

    `auth` is handed unchanged to every transport client the subscription
    client creates, including the ones bound to redirected hubs.
    """

    http: HttpSettings = field(default_factory=HttpSettings)
    follow_redirects: FollowRedirects | None = None
    auth: AuthConfig | None = None

    @property
    def redirect_budget(self) -> int:
        if self.follow_redirects is None:
            return 0
        return self.follow_redirects.budget


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_client_config(auth: AuthConfig | None = None) -> ClientConfig:
    """Load a full client configuration from environment variables."""
    return ClientConfig(
        http=load_http_settings(),
        follow_redirects=FollowRedirects.from_env(),
        auth=auth,
    )
