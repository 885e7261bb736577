"""Messages resource group: send, look up status, cancel a scheduled message."""

from __future__ import annotations

from adapters.controllers.base import BaseController, api_error
from core.domain.errors import SendMessages400ResponseException
from core.domain.models import (
    CancelScheduledMessageRequest,
    DynamicResponse,
    GetMessageStatusResponse,
    SendMessagesRequest,
    SendMessagesResponse,
)

_RESOURCE_NOT_FOUND = api_error("Resource not found")


class MessagesController(BaseController):
    async def send_messages(
        self,
        body: SendMessagesRequest,
        account_header_value: str | None = None,
    ) -> SendMessagesResponse:
        """Submit up to 100 messages in one request.

        A 400 is raised as `SendMessages400ResponseException`, whose `details`
        lists the validation problems reported by the API.
        """

        return await self._call(
            "POST",
            "/v1/messages",
            SendMessagesResponse,
            account_header_value=account_header_value,
            body=body,
            status_errors={
                400: lambda context: SendMessages400ResponseException("Unexpected error in API call", context),
            },
        )

    def send_messages_sync(
        self,
        body: SendMessagesRequest,
        account_header_value: str | None = None,
    ) -> SendMessagesResponse:
        return self._blocking.call(self.send_messages, body, account_header_value)

    async def get_message_status(
        self,
        message_id: str,
        account_header_value: str | None = None,
    ) -> GetMessageStatusResponse:
        return await self._call(
            "GET",
            "/v1/messages/{messageId}",
            GetMessageStatusResponse,
            account_header_value=account_header_value,
            template_parameters={"messageId": message_id},
            status_errors={404: _RESOURCE_NOT_FOUND},
        )

    def get_message_status_sync(
        self,
        message_id: str,
        account_header_value: str | None = None,
    ) -> GetMessageStatusResponse:
        return self._blocking.call(self.get_message_status, message_id, account_header_value)

    async def update_cancel_scheduled_message(
        self,
        message_id: str,
        body: CancelScheduledMessageRequest | None = None,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        """Cancel a message that is still scheduled."""

        return await self._call(
            "PUT",
            "/v1/messages/{messageId}",
            None,
            account_header_value=account_header_value,
            body=body or CancelScheduledMessageRequest(),
            template_parameters={"messageId": message_id},
            status_errors={
                400: api_error("Message is not scheduled or cannot be cancelled"),
                404: _RESOURCE_NOT_FOUND,
            },
        )

    def update_cancel_scheduled_message_sync(
        self,
        message_id: str,
        body: CancelScheduledMessageRequest | None = None,
        account_header_value: str | None = None,
    ) -> DynamicResponse:
        return self._blocking.call(
            self.update_cancel_scheduled_message,
            message_id,
            body,
            account_header_value,
        )
