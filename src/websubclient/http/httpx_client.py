# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import AuthConfig, ClientConfig
from ..errors import ClientInitializationError, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


def _validate_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ClientInitializationError(f"Invalid hub URL {url!r}: {exc}") from exc
    if parsed.scheme not in {"http", "https"} or not parsed.host:
        raise ClientInitializationError(f"Invalid hub URL {url!r}: expected an absolute http(s) URL")
    return parsed


def _build_auth(auth: AuthConfig | None) -> tuple[httpx.Auth | None, dict[str, str]]:
    if auth is None:
        return None, {}
    headers = {str(name): str(value) for name, value in auth.headers}
    if auth.bearer_token:
        headers["Authorization"] = f"Bearer {auth.bearer_token}"
    if auth.username is not None:
        return httpx.BasicAuth(auth.username, auth.password or ""), headers
    return None, headers


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper bound to a single hub URL."""

    def __init__(self, url: str, config: ClientConfig | None = None, client: httpx.Client | None = None):
        self.config = config or ClientConfig()
        self.settings = self.config.http
        self.url = str(_validate_url(url))
        auth, self._auth_headers = _build_auth(self.config.auth)
        self._client = client or httpx.Client(
            auth=auth,
            follow_redirects=False,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(self._auth_headers)
        headers.update(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        url = request.url or self.url
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = 1024 * 1024

            with self._client.stream(
                request.method,
                url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=200 <= resp.status_code < 300,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "body_bytes_limit": max_body_bytes,
                },
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc).value},
            )

    def close(self) -> None:
        self._client.close()
