"""Shared fixtures for mabiki tests.

Timing tests run against a manual clock and timer so they are exact.
Durations are powers of two so float arithmetic stays exact too.
"""

import itertools
from collections.abc import Callable
from typing import Any

import pytest

from mabiki.timers.base import BaseTimer


class ManualClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class ManualTimer(BaseTimer):
    """Timer whose callbacks fire only when the test advances the clock."""

    __slots__ = ("_clock", "_ids", "_queue")

    def __init__(self, clock: ManualClock) -> None:
        self._clock = clock
        self._ids = itertools.count(1)
        self._queue: dict[int, tuple[float, Callable[[], Any]]] = {}

    @property
    def outstanding(self) -> int:
        return len(self._queue)

    def schedule(self, delay: float, callback: Callable[[], Any]) -> int:
        handle = next(self._ids)
        self._queue[handle] = (self._clock.now + delay, callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._queue.pop(handle, None)

    def advance(self, seconds: float = 0.0) -> None:
        """Move the clock forward, firing due callbacks in order."""
        target = self._clock.now + seconds
        while True:
            due = [(at, handle) for handle, (at, _) in self._queue.items() if at <= target]
            if not due:
                break
            at, handle = min(due)
            _, callback = self._queue.pop(handle)
            self._clock.now = max(self._clock.now, at)
            callback()
        self._clock.now = target


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def timer(clock):
    return ManualTimer(clock)


@pytest.fixture
def counter():
    """A callable that counts invocations and records their arguments."""

    class Counter:
        def __init__(self) -> None:
            self.calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = []

        @property
        def count(self) -> int:
            return len(self.calls)

        def __call__(self, *args: Any, **kwargs: Any) -> Any:
            self.calls.append((args, kwargs))
            return args[0] if args else len(self.calls)

    return Counter()
