"""Replies resource group.

Replies are messages sent from a handset in response to a message, or to a
dedicated inbound number. They follow the same check -> process -> confirm
cycle as delivery reports.
"""

from __future__ import annotations

from adapters.controllers.base import BaseController, api_error
from core.domain.models import (
    CheckRepliesResponse,
    ConfirmRepliesAsReceivedRequest,
    DynamicResponse,
)


class RepliesController(BaseController):
    async def check_replies(
        self,
        account_header_value: str | None = None,
    ) -> CheckRepliesResponse:
        return await self._call(
            "GET",
            "/v1/replies",
            CheckRepliesResponse,
            account_header_value=account_header_value,
        )

    def check_replies_sync(
        self,
        account_header_value: str | None = None,
    ) -> CheckRepliesResponse:
        return self._blocking.call(self.check_replies, account_header_value)

    async def confirm_replies_as_received(
        self,
        body: ConfirmRepliesAsReceivedRequest,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        return await self._call(
            "POST",
            "/v1/replies/confirmed",
            None,
            account_header_value=account_header_value,
            body=body,
            status_errors={400: api_error("")},
        )

    def confirm_replies_as_received_sync(
        self,
        body: ConfirmRepliesAsReceivedRequest,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        return self._blocking.call(self.confirm_replies_as_received, body, account_header_value)
