from mabiki.timers.base import BaseTimer
from mabiki.timers.loop import LoopTimer
from mabiki.timers.registry import build_timer, resolve_backend
from mabiki.timers.threaded import ThreadTimer

__all__ = [
    "BaseTimer",
    "LoopTimer",
    "ThreadTimer",
    "build_timer",
    "resolve_backend",
]
