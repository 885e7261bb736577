"""Blocking and callback-style access to the coroutine API.

Each unit of work is one coroutine run to completion (`asyncio.run`) on a
shared `ThreadPoolExecutor`, so it also works when the caller already runs an
event loop. The returned `concurrent.futures.Future` is the single-slot result
holder: it settles exactly once, either with a result or with an exception.

No retry, timeout or cancellation is added here; timeouts belong to the HTTP
transport.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


def _run_to_completion(call: Callable[..., Awaitable[T]], args: tuple[Any, ...], kwargs: dict[str, Any]) -> T:
    async def runner() -> T:
        return await call(*args, **kwargs)

    return asyncio.run(runner())


def _settle(
    future: Future[T],
    call: Callable[..., Awaitable[T]],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> None:
    try:
        result = _run_to_completion(call, args, kwargs)
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


class BlockingAdapter:
    def __init__(
        self,
        *,
        max_workers: int = 4,
        executor: Executor | None = None,
    ) -> None:
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="messagemedia",
        )

    def submit(
        self,
        call: Callable[..., Awaitable[T]],
        *args: Any,
        on_success: Callable[[T], None] | None = None,
        on_failure: Callable[[BaseException], None] | None = None,
        **kwargs: Any,
    ) -> Future[T]:
        """Schedule `call(*args, **kwargs)` on the worker pool.

        The returned future is already running, so `cancel()` is refused and
        it always ends with a result or an exception. At most one of
        `on_success` / `on_failure` is invoked, once, from the thread that
        settles the future.
        """

        future: Future[T] = Future()
        future.set_running_or_notify_cancel()
        if on_success is not None or on_failure is not None:
            future.add_done_callback(
                lambda done: _dispatch(done, on_success=on_success, on_failure=on_failure)
            )
        self._executor.submit(_settle, future, call, args, kwargs)
        return future

    def call(self, call: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Run `call` on the worker pool and wait: return its result or re-raise its error."""

        return self.submit(call, *args, **kwargs).result()

    def shutdown(self, *, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)


def _dispatch(
    future: Future[T],
    *,
    on_success: Callable[[T], None] | None,
    on_failure: Callable[[BaseException], None] | None,
) -> None:
    error = future.exception()
    if error is None:
        if on_success is not None:
            on_success(future.result())
    elif on_failure is not None:
        on_failure(error)
