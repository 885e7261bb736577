"""
Shared pytest fixtures for the MessageMedia client tests.

This module provides:
- FakeMessagesApi: in-memory stand-in for the Messages API, served through
  `httpx.MockTransport` so no network is used
- RecordingCallBack: an HttpCallBack that keeps every request/context it sees
- settings/client fixtures wired to the fake
"""

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import pytest

from adapters.http_client import HttpContext
from core.config import AppSettings
from core.services.client import MessageMediaClient

VALID_ACCOUNT = "MyAccount"
BASE_URI = "https://api.test.local"


def _json(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload, separators=(",", ":")).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


def make_delivery_report(report_id: str, status: str = "delivered") -> Dict[str, Any]:
    return {
        "callback_url": "https://my.callback.url.com",
        "delivery_report_id": report_id,
        "source_number": "+61491570157",
        "date_received": "2017-05-20T06:30:37.642Z",
        "status": status,
        "delay": 0,
        "submitted_date": "2017-05-20T06:30:37.639Z",
        "original_text": "My first message!",
        "message_id": "d781dcab-d9d8-4fb2-9e03-872f07ae94ba",
        "vendor_account_id": {"vendor_id": "MessageMedia", "account_id": VALID_ACCOUNT},
        "metadata": {"key1": "value1"},
    }


def make_reply(reply_id: str, content: str = "My first reply!") -> Dict[str, Any]:
    return {
        "metadata": {"key1": "value1"},
        "message_id": "877c19ef-fa2e-4cec-827a-e1df9b5509f7",
        "reply_id": reply_id,
        "date_received": "2016-12-07T08:43:00.850Z",
        "callback_url": "https://my.callback.url.com",
        "destination_number": "+61491570156",
        "source_number": "+61491570157",
        "vendor_account_id": {"vendor_id": "MessageMedia", "account_id": VALID_ACCOUNT},
        "content": content,
    }


class FakeMessagesApi:
    """
    Minimal behavioural fake of the Messages API.

    Pending delivery reports and replies stay pending until confirmed, at most
    100 are returned per check, and an unknown Account header gets the API's 403.
    """

    def __init__(self) -> None:
        self.delivery_reports: Dict[str, Dict[str, Any]] = {}
        self.replies: Dict[str, Dict[str, Any]] = {}
        self.messages: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[Exception] = None
        self.override: Optional[httpx.Response] = None

    def add_delivery_reports(self, count: int) -> List[str]:
        ids = [str(uuid.uuid4()) for _ in range(count)]
        for report_id in ids:
            self.delivery_reports[report_id] = make_delivery_report(report_id)
        return ids

    def add_replies(self, count: int) -> List[str]:
        ids = [str(uuid.uuid4()) for _ in range(count)]
        for reply_id in ids:
            self.replies[reply_id] = make_reply(reply_id)
        return ids

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.override is not None:
            return self.override

        if "authorization" not in request.headers:
            return _json(401, {"message": "Missing credentials"})

        account = request.headers.get("Account")
        if account is not None and account != VALID_ACCOUNT:
            return _json(403, {"message": f"Invalid account '{account}' in header Account"})

        path = request.url.path
        method = request.method

        if path == "/v1/delivery_reports" and method == "GET":
            return _json(200, {"delivery_reports": list(self.delivery_reports.values())[:100]})
        if path == "/v1/delivery_reports/confirmed" and method == "POST":
            return self._confirm(request, self.delivery_reports, "delivery_report_ids")
        if path == "/v1/replies" and method == "GET":
            return _json(200, {"replies": list(self.replies.values())[:100]})
        if path == "/v1/replies/confirmed" and method == "POST":
            return self._confirm(request, self.replies, "reply_ids")
        if path == "/v1/messages" and method == "POST":
            return self._send(request)
        if path.startswith("/v1/messages/"):
            message_id = path.rsplit("/", 1)[-1]
            message = self.messages.get(message_id)
            if message is None:
                return _json(404, {"message": "Resource not found"})
            if method == "GET":
                return _json(200, message)
            if method == "PUT":
                if message.get("status") != "scheduled":
                    return _json(400, {"message": "Message is not scheduled"})
                message["status"] = json.loads(request.content)["status"]
                return httpx.Response(200, content=b"")

        return _json(404, {"message": "Not found"})

    def _confirm(self, request: httpx.Request, store: Dict[str, Any], key: str) -> httpx.Response:
        payload = json.loads(request.content or b"{}")
        ids = payload.get(key)
        if not isinstance(ids, list) or not ids:
            return _json(400, {"message": f"'{key}' is required"})
        for item in ids:
            store.pop(item, None)
        return httpx.Response(202, content=b"")

    def _send(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        details = []
        for index, message in enumerate(payload.get("messages", [])):
            if not message.get("destination_number"):
                details.append(f"messages[{index}].destination_number is required")
        if details:
            return _json(400, {"message": "Invalid message request", "details": details})

        accepted = []
        for message in payload["messages"]:
            record = dict(message)
            record["message_id"] = str(uuid.uuid4())
            record["status"] = "scheduled" if "scheduled" in message else "queued"
            self.messages[record["message_id"]] = record
            accepted.append(record)
        return _json(202, {"messages": accepted})


@dataclass
class RecordingCallBack:
    """HttpCallBack that records what it observes."""

    before: List[httpx.Request] = field(default_factory=list)
    after: List[HttpContext] = field(default_factory=list)

    def on_before_request(self, request: httpx.Request) -> None:
        self.before.append(request)

    def on_after_response(self, context: HttpContext) -> None:
        self.after.append(context)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        base_uri=BASE_URI,
        basic_auth_user_name="test-key",
        basic_auth_password="test-secret",
        max_workers=2,
    )


@pytest.fixture
def fake_api() -> FakeMessagesApi:
    return FakeMessagesApi()


@pytest.fixture
def recorder() -> RecordingCallBack:
    return RecordingCallBack()


@pytest.fixture
def client(settings, fake_api, recorder):
    client = MessageMediaClient(
        settings,
        http_callback=recorder,
        transport=httpx.MockTransport(fake_api.handler),
    )
    yield client
    client.close()
