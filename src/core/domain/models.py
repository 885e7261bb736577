"""Domain models (Pydantic v2).

Request models validate their fields at construction; response models mirror the
JSON payloads of the Messages API and are frozen once deserialized.

Note:
- These models describe *what* the API exchanges, not *how* it is fetched.
- Unknown response fields are ignored so new server fields do not break clients.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class MessageFormat(str, Enum):
    """Delivery format of a message."""

    SMS = "SMS"
    MMS = "MMS"
    TTS = "TTS"


class SourceNumberType(str, Enum):
    INTERNATIONAL = "INTERNATIONAL"
    ALPHANUMERIC = "ALPHANUMERIC"
    SHORTCODE = "SHORTCODE"


class MessageStatus(str, Enum):
    """Statuses reported for messages and delivery reports."""

    QUEUED = "queued"
    PROCESSED = "processed"
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    ENROUTE = "enroute"
    DELIVERED = "delivered"
    EXPIRED = "expired"
    REJECTED = "rejected"
    UNDELIVERABLE = "undeliverable"
    FAILED = "failed"
    SUBMITTED = "submitted"
    HELD = "held"


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class VendorAccountId(_ResponseModel):
    """Vendor id + account id pair used to route across providers."""

    vendor_id: str = Field(
        ...,
        description="Vendor that owns the account (e.g. 'MessageMedia').",
    )
    account_id: str = Field(
        ...,
        description="Account identifier within the vendor.",
    )


class DeliveryReport(_ResponseModel):
    """A status change notification for a previously sent message."""

    delivery_report_id: str = Field(
        ...,
        description="Unique id, used with the confirm delivery reports endpoint.",
    )
    message_id: str | None = Field(
        default=None,
        description="Id of the message the report relates to.",
    )
    source_number: str | None = Field(
        default=None,
        description="Destination number of the original message.",
    )
    status: MessageStatus | str | None = Field(
        default=None,
        union_mode="left_to_right",
        description="New status of the message.",
    )
    delay: int | None = Field(
        default=None,
        ge=0,
        description="Delay between submission and the status change (seconds).",
    )
    date_received: datetime | None = None
    submitted_date: datetime | None = None
    original_text: str | None = None
    callback_url: str | None = None
    vendor_account_id: VendorAccountId | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class Reply(_ResponseModel):
    """An inbound message correlated to an outbound message or inbound number."""

    reply_id: str = Field(
        ...,
        description="Unique id, used with the confirm replies endpoint.",
    )
    message_id: str | None = Field(
        default=None,
        description="Id of the message the reply was sent in response to.",
    )
    content: str | None = Field(
        default=None,
        description="Text of the reply.",
    )
    source_number: str | None = None
    destination_number: str | None = None
    date_received: datetime | None = None
    callback_url: str | None = None
    vendor_account_id: VendorAccountId | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class CheckDeliveryReportsResponse(_ResponseModel):
    delivery_reports: list[DeliveryReport] = Field(
        default_factory=list,
        description="Up to 100 delivery reports not yet confirmed.",
    )


class CheckRepliesResponse(_ResponseModel):
    replies: list[Reply] = Field(
        default_factory=list,
        description="Up to 100 replies not yet confirmed.",
    )


class ConfirmDeliveryReportsAsReceivedRequest(BaseModel):
    delivery_report_ids: list[str] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Ids of the delivery reports to confirm (1..100).",
    )


class ConfirmRepliesAsReceivedRequest(BaseModel):
    reply_ids: list[str] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Ids of the replies to confirm (1..100).",
    )


class Message(BaseModel):
    """A message to send.

    Outbound messages need `content` and `destination_number`; `message_id` and
    `status` are filled in by the server on the `SentMessage` records it returns.
    """

    model_config = ConfigDict(extra="ignore", use_enum_values=False)

    content: str | None = Field(
        default=None,
        max_length=5000,
        description="Message text.",
    )
    destination_number: str | None = Field(
        default=None,
        description="Recipient number (E.164 recommended).",
    )
    source_number: str | None = None
    source_number_type: SourceNumberType | None = None
    format: MessageFormat | None = None
    callback_url: str | None = None
    delivery_report: bool | None = None
    media: list[str] | None = Field(
        default=None,
        description="Media URLs (MMS only).",
    )
    subject: str | None = Field(
        default=None,
        max_length=64,
        description="Subject line (MMS only).",
    )
    message_expiry_timestamp: datetime | None = None
    scheduled: datetime | None = None
    metadata: dict[str, str] | None = None

    message_id: str | None = None
    status: MessageStatus | str | None = Field(default=None, union_mode="left_to_right")


class SendMessagesRequest(BaseModel):
    messages: list[Message] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Messages to submit in one request (1..100).",
    )


class SentMessage(Message):
    """A message record returned by the API; read-only once deserialized."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class SendMessagesResponse(_ResponseModel):
    messages: list[SentMessage] = Field(default_factory=list)


class GetMessageStatusResponse(SentMessage):
    pass


class CancelScheduledMessageRequest(BaseModel):
    status: str = Field(
        default=MessageStatus.CANCELLED.value,
        description="Target status; only 'cancelled' is accepted by the API.",
    )


class DynamicResponse(_ResponseModel):
    """Raw status/headers/body of an endpoint with no typed response body."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""

    def parse_as_dict(self) -> dict[str, Any]:
        if not self.body.strip():
            return {}
        data = json.loads(self.body)
        return data if isinstance(data, dict) else {"value": data}
