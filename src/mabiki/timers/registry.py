"""Maps each ``TimerBackend`` enum member to a callable that builds a ``BaseTimer``.

When you add a new backend:

1. Add a variant to the ``TimerBackend`` enum in ``config.py``.
2. Add an entry to ``REGISTRY`` pointing to a factory function or lambda
   that constructs the concrete timer from a :class:`DebounceConfig`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from mabiki.config import DebounceConfig, TimerBackend
from mabiki.timers.base import BaseTimer
from mabiki.timers.loop import LoopTimer
from mabiki.timers.threaded import ThreadTimer

TimerFactory = Callable[[DebounceConfig], BaseTimer]

REGISTRY: dict[TimerBackend, TimerFactory] = {
    TimerBackend.THREAD: lambda cfg: ThreadTimer(),
    TimerBackend.LOOP: lambda cfg: LoopTimer(next_tick=cfg.next_tick),
}


def resolve_backend(func: Callable[..., Any], backend: TimerBackend | str | None = None) -> TimerBackend:
    """Pick a backend for *func*: coroutine functions need the event loop."""
    if backend is not None:
        return TimerBackend(backend)
    if inspect.iscoroutinefunction(func):
        return TimerBackend.LOOP
    return TimerBackend.THREAD


def build_timer(config: DebounceConfig) -> BaseTimer:
    """Resolve *config.backend* to a concrete ``BaseTimer`` instance."""
    factory = REGISTRY.get(config.backend)
    if not factory:
        raise ValueError(
            f"Unknown timer backend: {config.backend!r}. Registered: {', '.join(b.value for b in REGISTRY)}"
        )
    return factory(config)
