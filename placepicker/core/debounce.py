from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_DEBOUNCE_S = 0.5


class DebounceToken:
    """
    One pending wait. Completes with True when the delay elapses, or with
    False when cancelled first. `cancel()` is idempotent and is a no-op once
    the wait has fired.
    """

    def __init__(self, delay_s: float, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future = self._loop.create_future()
        self._handle = self._loop.call_later(delay_s, self._fire)

    def _fire(self) -> None:
        if not self._future.done():
            self._future.set_result(True)

    def cancel(self) -> None:
        if self._future.done():
            return
        self._handle.cancel()
        self._future.set_result(False)

    @property
    def is_completed(self) -> bool:
        return self._future.done()

    @property
    def is_cancelled(self) -> bool:
        return self._future.done() and not self._future.cancelled() and self._future.result() is False

    async def wait(self) -> bool:
        return await self._future


class Debouncer(Generic[T, R]):
    """
    Wraps a unary coroutine function so that only the last call of a burst runs.

    Each call cancels the pending wait (if any) and starts a new one of
    `delay_s`. Calls whose wait is superseded resolve to None instead of
    raising.
    """

    def __init__(self, func: Callable[[T], Awaitable[R]], delay_s: float = DEFAULT_DEBOUNCE_S):
        self.func = func
        self.delay_s = delay_s
        self._token: Optional[DebounceToken] = None

    @property
    def pending(self) -> bool:
        return self._token is not None and not self._token.is_completed

    def cancel(self) -> None:
        if self._token is not None:
            self._token.cancel()

    async def __call__(self, arg: T) -> Optional[R]:
        if self._token is not None:
            self._token.cancel()
        token = DebounceToken(self.delay_s)
        self._token = token

        if not await token.wait():
            logger.debug("debounce cancelled for %r", arg)
            return None
        return await self.func(arg)
