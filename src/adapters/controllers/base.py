"""Shared request pipeline for every controller.

One call = build request -> hook -> send -> hook -> map response:
- `_build_request`: URL cleaning, fixed headers, account header, JSON body, auth.
- `_execute`: one `httpx.AsyncClient` exchange; transport errors propagate as-is.
- `_map_response`: endpoint status shortcuts, then generic validation, then
  deserialization into the declared model (or a `DynamicResponse`).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, TypeVar

import httpx
from pydantic import BaseModel

from adapters.api_helper import append_template_parameters, clean_url, deserialize, serialize
from adapters.http_client import HttpContext, send_request
from core.config import AppSettings
from core.domain.errors import APIException
from core.domain.models import DynamicResponse
from core.interfaces.auth import AuthProvider
from core.interfaces.http_callback import HttpCallBack
from core.services.blocking import BlockingAdapter

logger = logging.getLogger(__name__)

ACCOUNT_HEADER = "Account"
SUCCESS_STATUS_RANGE = range(200, 209)

ModelT = TypeVar("ModelT", bound=BaseModel)
ErrorFactory = Callable[[HttpContext], Exception]


def api_error(reason: str) -> ErrorFactory:
    """Status shortcut raising a plain `APIException` with a fixed reason.

    An empty reason leaves the response body as the whole message.
    """

    def factory(context: HttpContext) -> Exception:
        return APIException(reason, context)

    return factory


def _completed(context: HttpContext) -> httpx.Response:
    if context.response is None:
        raise ValueError(f"No response to map for {context.request.method} {context.request.url}")
    return context.response


def validate_response(context: HttpContext) -> None:
    """Raise `APIException` for any status outside 200..208."""

    if _completed(context).status_code not in SUCCESS_STATUS_RANGE:
        raise APIException("HTTP Response Not OK", context)


class BaseController:
    def __init__(
        self,
        *,
        settings: AppSettings,
        auth: AuthProvider,
        blocking: BlockingAdapter,
        http_callback: HttpCallBack | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._auth = auth
        self._blocking = blocking
        self._http_callback = http_callback
        self._transport = transport

    @property
    def http_callback(self) -> HttpCallBack | None:
        return self._http_callback

    def _build_request(
        self,
        method: str,
        path: str,
        *,
        account_header_value: str | None = None,
        body: BaseModel | None = None,
        template_parameters: Mapping[str, Any] | None = None,
    ) -> httpx.Request:
        if template_parameters:
            path = append_template_parameters(path, dict(template_parameters))
        url = clean_url(f"{self._settings.base_uri}{path}")

        headers: dict[str, str] = {
            "user-agent": self._settings.user_agent,
            "accept": "application/json",
        }
        content: bytes | None = None
        if body is not None:
            headers["content-type"] = "application/json"
            content = serialize(body)
        if account_header_value is not None:
            headers[ACCOUNT_HEADER] = account_header_value

        request = httpx.Request(method, url, headers=headers, content=content)
        return self._auth.apply(request)

    async def _execute(self, request: httpx.Request) -> HttpContext:
        self._notify_before(request)
        logger.debug("%s %s", request.method, request.url)
        context = HttpContext(request=request)
        try:
            response = await send_request(
                request,
                settings=self._settings,
                transport=self._transport,
            )
            context = HttpContext(request=request, response=response)
        finally:
            self._notify_after(context)

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return context

    def _map_response(
        self,
        context: HttpContext,
        model: type[ModelT] | None,
        *,
        status_errors: Mapping[int, ErrorFactory] | None = None,
    ) -> ModelT | DynamicResponse:
        response = _completed(context)

        factory = (status_errors or {}).get(response.status_code)
        if factory is not None:
            logger.warning(
                "%s %s returned documented error status %s",
                context.request.method,
                context.request.url,
                response.status_code,
            )
            raise factory(context)

        try:
            validate_response(context)
        except APIException:
            logger.warning(
                "%s %s returned HTTP %s",
                context.request.method,
                context.request.url,
                response.status_code,
            )
            raise

        if model is None:
            return DynamicResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=response.text,
            )
        return deserialize(response.text, model, status_code=response.status_code)

    async def _call(
        self,
        method: str,
        path: str,
        model: type[ModelT] | None,
        *,
        account_header_value: str | None = None,
        body: BaseModel | None = None,
        template_parameters: Mapping[str, Any] | None = None,
        status_errors: Mapping[int, ErrorFactory] | None = None,
    ) -> Any:
        request = self._build_request(
            method,
            path,
            account_header_value=account_header_value,
            body=body,
            template_parameters=template_parameters,
        )
        context = await self._execute(request)
        return self._map_response(context, model, status_errors=status_errors)

    def _notify_before(self, request: httpx.Request) -> None:
        if self._http_callback is None:
            return
        try:
            self._http_callback.on_before_request(request)
        except Exception:
            logger.exception("HTTP callback on_before_request failed")

    def _notify_after(self, context: HttpContext) -> None:
        if self._http_callback is None:
            return
        try:
            self._http_callback.on_after_response(context)
        except Exception:
            logger.exception("HTTP callback on_after_response failed")
