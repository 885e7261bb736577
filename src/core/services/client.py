"""Client entry point.

`MessageMediaClient` is an explicit object built once from `AppSettings` and
passed to whoever needs it. It owns every shared collaborator of a call:
- the authentication provider;
- the optional observability hook;
- the optional transport (tests inject `httpx.MockTransport`);
- the worker pool behind the blocking and callback-style calls.

Usage:
    with MessageMediaClient(AppSettings()) as client:
        reports = client.delivery_reports.check_delivery_reports_sync()

    async with MessageMediaClient(settings) as client:
        replies = await client.replies.check_replies()
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from adapters.auth import build_auth_provider
from adapters.controllers import DeliveryReportsController, MessagesController, RepliesController
from adapters.controllers.base import BaseController
from core.config import AppSettings
from core.interfaces.auth import AuthProvider
from core.interfaces.http_callback import HttpCallBack
from core.services.blocking import BlockingAdapter

T = TypeVar("T")
ControllerT = TypeVar("ControllerT", bound=BaseController)


class MessageMediaClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        auth: AuthProvider | None = None,
        http_callback: HttpCallBack | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        blocking: BlockingAdapter | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._auth = auth or build_auth_provider(self._settings)
        self._http_callback = http_callback
        self._transport = transport
        self._blocking = blocking or BlockingAdapter(max_workers=self._settings.max_workers)
        self._controllers: dict[type[BaseController], BaseController] = {}

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def delivery_reports(self) -> DeliveryReportsController:
        return self._controller(DeliveryReportsController)

    @property
    def replies(self) -> RepliesController:
        return self._controller(RepliesController)

    @property
    def messages(self) -> MessagesController:
        return self._controller(MessagesController)

    def submit(
        self,
        call: Callable[..., Awaitable[T]],
        *args: Any,
        on_success: Callable[[T], None] | None = None,
        on_failure: Callable[[BaseException], None] | None = None,
        **kwargs: Any,
    ) -> Future[T]:
        """Run a controller coroutine off the caller's thread.

        Example:
            client.submit(client.replies.check_replies, on_success=handle, on_failure=log)
        """

        return self._blocking.submit(
            call,
            *args,
            on_success=on_success,
            on_failure=on_failure,
            **kwargs,
        )

    def close(self) -> None:
        self._blocking.shutdown(wait=True)

    def __enter__(self) -> MessageMediaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> MessageMediaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def _controller(self, controller_cls: type[ControllerT]) -> ControllerT:
        controller = self._controllers.get(controller_cls)
        if controller is None:
            controller = controller_cls(
                settings=self._settings,
                auth=self._auth,
                blocking=self._blocking,
                http_callback=self._http_callback,
                transport=self._transport,
            )
            self._controllers[controller_cls] = controller
        return controller  # type: ignore[return-value]
