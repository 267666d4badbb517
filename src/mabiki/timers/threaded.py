"""Timer backend built on ``threading.Timer``."""

import threading
from collections.abc import Callable
from typing import Any

from mabiki.timers.base import BaseTimer


class ThreadTimer(BaseTimer):
    """Runs each deferred callback on its own daemon ``threading.Timer``.

    Callbacks run off the caller's thread, so the scheduler serializes
    them against direct calls with its own lock.

    Complexity:
        Time:   O(1) per schedule/cancel
        Memory: one idle thread per outstanding timer
    """

    __slots__ = ("_name",)

    def __init__(self, name: str = "mabiki-timer") -> None:
        self._name = name

    def schedule(self, delay: float, callback: Callable[[], Any]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.name = self._name
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()
