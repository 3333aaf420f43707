"""Cooperative cancellation for suspending search steps."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from ducksearch.engine.errors import SearchCancelledError

T = TypeVar("T")


class CancellationToken:
    """Caller-owned cancel signal passed through every suspending call."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelledError("search was cancelled")

    async def wait(self) -> None:
        await self._event.wait()


async def run_cancellable(awaitable: Awaitable[T], token: CancellationToken | None) -> T:
    """Await `awaitable`, aborting it if `token` fires first."""
    if token is None:
        return await awaitable

    if token.cancelled:
        # Close the coroutine so it is not reported as never awaited.
        close = getattr(awaitable, "close", None)
        if close is not None:
            close()
        token.raise_if_cancelled()

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise

    if task in done:
        waiter.cancel()
        return task.result()

    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
    raise SearchCancelledError("search was cancelled")


async def sleep_cancellable(seconds: float, token: CancellationToken | None, sleep=asyncio.sleep) -> None:
    """Sleep for `seconds` unless `token` fires first."""
    if seconds <= 0:
        if token is not None:
            token.raise_if_cancelled()
        return
    await run_cancellable(sleep(seconds), token)
