# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL encoding helpers."""

from __future__ import annotations

from urllib.parse import quote

from ..errors import UrlEncodingError


def encode_url(value: str, *, encoding: str = "utf-8") -> str:
    """
    Percent-encode a value for use inside a form body.

    Every reserved character is escaped, so `https://a/b?c=d` becomes
    `https%3A%2F%2Fa%2Fb%3Fc%3Dd`.
    """
    try:
        return quote(value, safe="", encoding=encoding, errors="strict")
    except (TypeError, UnicodeError, LookupError) as exc:
        raise UrlEncodingError(f"Cannot URL-encode {value!r}: {exc}") from exc


__all__ = ["encode_url"]
