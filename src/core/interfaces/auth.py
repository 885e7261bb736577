"""Authentication contract.

A provider receives a fully built request and returns it with credentials
applied (Basic header, HMAC signature, ...). It raises `ConfigurationError`
when it cannot produce credentials, before anything is sent.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class AuthProvider(Protocol):
    def apply(self, request: httpx.Request) -> httpx.Request:
        """Return `request` with authentication headers set."""

        ...
