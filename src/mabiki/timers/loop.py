"""Timer backend that defers work onto an asyncio event loop."""

import asyncio
from asyncio import AbstractEventLoop, Handle, get_running_loop
from collections.abc import Callable
from typing import Any

from mabiki.timers.base import BaseTimer


class LoopTimer(BaseTimer):
    """Schedules callbacks with ``loop.call_later``.

    The loop is resolved lazily from the first call made inside a running
    loop, unless one is passed explicitly. With ``next_tick=True`` the
    delay is ignored and callbacks go through ``loop.call_soon``, i.e. the
    next iteration of the loop.

    Awaitables returned by the wrapped callable are wrapped in tasks on the
    same loop, so trailing-edge coroutines actually run.

    Must only be driven from the loop's own thread.
    """

    __slots__ = ("_loop", "next_tick")

    runs_coroutines = True

    def __init__(self, loop: AbstractEventLoop | None = None, *, next_tick: bool = False) -> None:
        self._loop = loop
        self.next_tick = next_tick

    def _get_loop(self) -> AbstractEventLoop:
        if self._loop is None:
            self._loop = get_running_loop()
        return self._loop

    def schedule(self, delay: float, callback: Callable[[], Any]) -> Handle:
        loop = self._get_loop()
        if self.next_tick:
            return loop.call_soon(callback)
        return loop.call_later(delay, callback)

    def cancel(self, handle: Handle) -> None:
        handle.cancel()

    def spawn(self, awaitable: Any) -> asyncio.Future[Any]:
        return asyncio.ensure_future(awaitable, loop=self._get_loop())

    def __repr__(self) -> str:
        return f"LoopTimer(next_tick={self.next_tick})"
