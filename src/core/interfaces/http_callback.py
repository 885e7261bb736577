"""Observability hook around each HTTP exchange."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

if TYPE_CHECKING:
    from adapters.http_client import HttpContext


@runtime_checkable
class HttpCallBack(Protocol):
    """Invoked before a request is sent and after its exchange ends.

    `on_after_response` also fires on transport failures; the context then has
    no response.
    """

    def on_before_request(self, request: httpx.Request) -> None: ...

    def on_after_response(self, context: HttpContext) -> None: ...
