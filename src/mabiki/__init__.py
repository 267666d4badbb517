"""Mabiki — debounce and throttle for Python callables.

Rate-limits calls to any function by elapsed time. ``debounce`` waits for
a quiet period; ``throttle`` invokes at most once per interval. Both run
deferred invocations on a timer thread, or on the asyncio event loop for
coroutine functions.

Basic usage:

    from mabiki import debounce, throttle

    save = debounce(write_to_disk, 0.5)
    save(doc)
    save(doc)      # only the last call is written, 0.5s later
    save.flush()   # ...or right now

Decorator usage:

    from mabiki import throttle

    @throttle(wait=0.1)
    def on_scroll(offset: int) -> None:
        render(offset)
"""

import logging

from mabiki.config import DebounceConfig, DebounceOptions, Mode, TimerBackend
from mabiki.core import InvocationScheduler, PendingCall
from mabiki.decorator import DebouncedFunc, debounce, throttle
from mabiki.timers.base import BaseTimer
from mabiki.timers.loop import LoopTimer
from mabiki.timers.threaded import ThreadTimer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BaseTimer",
    "DebounceConfig",
    "DebounceOptions",
    "DebouncedFunc",
    "InvocationScheduler",
    "LoopTimer",
    "Mode",
    "PendingCall",
    "ThreadTimer",
    "TimerBackend",
    "debounce",
    "throttle",
]

__version__ = "0.1.0"
