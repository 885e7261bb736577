"""Error taxonomy of the client.

- `ConfigurationError`: raised before any network I/O (bad base URI, missing credentials).
- `APIException`: the server answered with a status outside the success range.
- `DeserializationError`: the status was a success but the body did not match the model.

Transport failures are not wrapped: `httpx.HTTPError` subclasses reach the caller as-is.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from adapters.http_client import HttpContext


class MessageMediaError(Exception):
    """Base class for every error raised by this client."""


class ConfigurationError(MessageMediaError):
    pass


class APIException(MessageMediaError):
    """Non-success HTTP response.

    Carries the status code and the response body verbatim; `api_message` is the
    `message` field of the JSON error body when there is one.
    """

    def __init__(self, reason: str, context: HttpContext | None = None) -> None:
        self.reason = reason
        self.context = context
        self.status_code: int | None = None
        self.body: str = ""
        if context is not None and context.response is not None:
            self.status_code = context.response.status_code
            self.body = context.response.text
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.body:
            return self.reason
        if not self.reason:
            return self.body
        return f"{self.reason}. {self.body}"

    @property
    def api_message(self) -> str | None:
        payload = _json_or_none(self.body)
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return payload["message"]
        return None


class SendMessages400ResponseException(APIException):
    """Validation failure reported by the send messages endpoint."""

    @property
    def details(self) -> list[str]:
        payload = _json_or_none(self.body)
        if not isinstance(payload, dict):
            return []
        raw = payload.get("details")
        if not isinstance(raw, list):
            return []
        return [str(d) for d in raw]


class DeserializationError(MessageMediaError):
    """A success response whose body does not match the expected schema."""

    def __init__(self, message: str, *, status_code: int, body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _json_or_none(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None
