"""Authentication providers for the Messages API.

Two schemes are supported:
- Basic: `Authorization: Basic base64(key:secret)`.
- HMAC: a `Date` header (and `x-Content-MD5` when there is a body) signed with
  HMAC-SHA1 together with the request line.

Both raise `ConfigurationError` before anything is sent when a credential is
missing.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable

import httpx

from core.config import AppSettings
from core.domain.errors import ConfigurationError
from core.interfaces.auth import AuthProvider


def _require(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"Missing required credential: {name}")
    return value.strip()


class BasicAuthProvider(AuthProvider):
    def __init__(self, username: str | None, password: str | None) -> None:
        self._username = username
        self._password = password

    def apply(self, request: httpx.Request) -> httpx.Request:
        username = _require(self._username, "basic_auth_user_name")
        password = _require(self._password, "basic_auth_password")
        token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        request.headers["Authorization"] = f"Basic {token}"
        return request


class HmacAuthProvider(AuthProvider):
    """Signs each request with HMAC-SHA1.

    Signing string, one line per signed header:
        date: <Date header>
        x-Content-MD5: <hex md5 of the body>      (only when there is a body)
        <METHOD> <path?query> HTTP/1.1
    """

    def __init__(
        self,
        username: str | None,
        secret: str | None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._username = username
        self._secret = secret
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def apply(self, request: httpx.Request) -> httpx.Request:
        username = _require(self._username, "hmac_auth_user_name")
        secret = _require(self._secret, "hmac_auth_password")

        date_header = format_datetime(self._clock(), usegmt=True)
        request.headers["Date"] = date_header

        signed_headers = ["date"]
        lines = [f"date: {date_header}"]

        body = request.content
        if body:
            content_md5 = hashlib.md5(body).hexdigest()  # nosec - required by the API
            request.headers["x-Content-MD5"] = content_md5
            signed_headers.append("x-Content-MD5")
            lines.append(f"x-Content-MD5: {content_md5}")

        target = request.url.raw_path.decode("ascii")
        lines.append(f"{request.method} {target} HTTP/1.1")
        signed_headers.append("request-line")

        digest = hmac.new(
            secret.encode("utf-8"),
            "\n".join(lines).encode("utf-8"),
            hashlib.sha1,
        ).digest()
        signature = base64.b64encode(digest).decode("ascii")

        request.headers["Authorization"] = (
            f'hmac username="{username}", algorithm="hmac-sha1", '
            f'headers="{" ".join(signed_headers)}", signature="{signature}"'
        )
        return request


def build_auth_provider(settings: AppSettings) -> AuthProvider:
    """Pick the provider configured in `settings` (HMAC when enabled, Basic otherwise)."""

    if settings.use_hmac_authentication:
        return HmacAuthProvider(settings.hmac_auth_user_name, settings.hmac_auth_password)
    return BasicAuthProvider(settings.basic_auth_user_name, settings.basic_auth_password)
