"""httpx wrapper.

- Standardizes timeout and transport for every controller call.
- Accepts an injected transport so tests can substitute `httpx.MockTransport`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from core.config import AppSettings


@dataclass(frozen=True)
class HttpContext:
    """Request/response pair of one exchange. `response` is None on transport failure."""

    request: httpx.Request
    response: httpx.Response | None = None


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` for a single call.

    Headers are not set here: controllers build complete requests (user agent,
    accept, account, auth) and send them with `client.send`.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        transport=transport,
    )


async def send_request(
    request: httpx.Request,
    *,
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Send one request and return the fully read response."""

    async with build_async_client(settings, transport=transport) as client:
        response = await client.send(request)
        await response.aread()
    return response
