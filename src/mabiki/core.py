"""Core InvocationScheduler class — the state machine behind debounce and throttle."""

from __future__ import annotations

import inspect
import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NamedTuple

from mabiki.config import DebounceConfig
from mabiki.timers.registry import build_timer

if TYPE_CHECKING:
    from mabiki.timers.base import BaseTimer

logger = logging.getLogger(__name__)


class PendingCall(NamedTuple):
    """Arguments of a call that has not been passed to the callable yet."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any]


class InvocationScheduler:
    """Decides, for every call, when the wrapped callable actually runs.

    Each call is recorded and then either invoked right away (leading edge,
    or a burst that ran past ``max_wait``), or left to a single trailing
    timer that fires once calls have been quiet for ``wait`` seconds. Only
    the most recent call's arguments are kept; every call returns the
    result of the most recent real invocation, which may be stale.

    Example::

        delay=3s, leading=False, trailing=True

        t=0.0s call("a")   -> start timer (3s), returns None
        t=2.0s call("b")   -> timer pushed out, returns None
        t=5.0s timer fires -> func("b")

    Args:
        func: The callable to rate-limit.
        config: Timing configuration. Defaults to ``DebounceConfig()``.
        timer: Timer backend. Defaults to the one named by *config*.
        clock: Returns the current time in seconds. Defaults to
            ``time.monotonic``.

    Raises:
        TypeError: If *func* is not callable, or is a coroutine function
            and *timer* cannot run coroutines.
    """

    __slots__ = (
        "_clock",
        "_config",
        "_func",
        "_generation",
        "_last_call_time",
        "_last_invoke_time",
        "_lock",
        "_pending_call",
        "_result",
        "_timer",
        "_timer_id",
    )

    def __init__(
        self,
        func: Callable[..., Any],
        config: DebounceConfig | None = None,
        *,
        timer: BaseTimer | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if not callable(func):
            raise TypeError("Expected a function")

        self._func = func
        self._config = config or DebounceConfig()
        self._timer: BaseTimer = timer or build_timer(self._config)
        self._clock = clock or time.monotonic

        if inspect.iscoroutinefunction(func) and not self._timer.runs_coroutines:
            raise TypeError(f"{type(self._timer).__name__} cannot run coroutine functions")

        self._pending_call: PendingCall | None = None
        self._result: Any = None
        self._last_call_time: float | None = None
        self._last_invoke_time = 0.0
        self._timer_id: Any = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def config(self) -> DebounceConfig:
        return self._config

    @property
    def func(self) -> Callable[..., Any]:
        return self._func

    @property
    def result(self) -> Any:
        """Return value of the most recent invocation, or None."""
        return self._result

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            now = self._clock()
            is_invoking = self._should_invoke(now)

            self._pending_call = PendingCall(args, kwargs)
            self._last_call_time = now

            if is_invoking:
                if self._timer_id is None:
                    return self._leading_edge(now)
                if self._config.max_wait is not None:
                    # Calls arriving in a tight loop past max_wait.
                    self._start_timer(self._config.wait)
                    return self._invoke(now)

            if self._timer_id is None:
                self._start_timer(self._config.wait)
            return self._result

    def cancel(self) -> None:
        """Drop any pending invocation and forget call history."""
        with self._lock:
            if self._timer_id is not None:
                logger.debug("Cancelling pending invocation of %r", self._func)
            self._clear_timer()
            self._pending_call = None
            self._last_call_time = None
            self._last_invoke_time = 0.0

    def flush(self) -> Any:
        """Run a pending invocation now and return the latest result."""
        with self._lock:
            if self._timer_id is None:
                return self._result
            return self._trailing_edge(self._clock())

    def pending(self) -> bool:
        with self._lock:
            return self._timer_id is not None

    def _should_invoke(self, now: float) -> bool:
        if self._last_call_time is None:
            return True

        since_call = now - self._last_call_time
        since_invoke = now - self._last_invoke_time
        max_wait = self._config.max_wait

        # A negative interval means the clock went backwards; treat it as
        # the trailing edge.
        return (
            since_call >= self._config.wait
            or since_call < 0
            or (max_wait is not None and since_invoke >= max_wait)
        )

    def _remaining_wait(self, now: float) -> float:
        if self._last_call_time is None:
            return 0.0

        since_call = now - self._last_call_time
        since_invoke = now - self._last_invoke_time
        waiting = self._config.wait - since_call
        max_wait = self._config.max_wait

        if max_wait is not None:
            waiting = min(waiting, max_wait - since_invoke)
        return max(0.0, waiting)

    def _leading_edge(self, now: float) -> Any:
        # Restart the max_wait window.
        self._last_invoke_time = now
        self._start_timer(self._config.wait)
        return self._invoke(now) if self._config.leading else self._result

    def _trailing_edge(self, now: float) -> Any:
        self._clear_timer()

        if self._config.trailing and self._pending_call is not None:
            return self._invoke(now)

        if self._pending_call is not None:
            logger.debug("Dropping trailing call to %r (trailing disabled)", self._func)
        self._pending_call = None
        return self._result

    def _invoke(self, now: float) -> Any:
        call = self._pending_call
        assert call is not None
        self._pending_call = None
        self._last_invoke_time = now

        result = self._func(*call.args, **call.kwargs)
        if inspect.isawaitable(result):
            result = self._timer.spawn(result)
        self._result = result
        return result

    def _timer_expired(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Ignoring stale timer callback for %r", self._func)
                return

            now = self._clock()
            if self._should_invoke(now):
                self._trailing_edge(now)
                return

            self._start_timer(self._remaining_wait(now))

    def _start_timer(self, delay: float) -> None:
        self._clear_timer()
        generation = self._generation
        self._timer_id = self._timer.schedule(delay, lambda: self._timer_expired(generation))

    def _clear_timer(self) -> None:
        if self._timer_id is not None:
            self._timer.cancel(self._timer_id)
            self._timer_id = None
        self._generation += 1

    def __enter__(self) -> InvocationScheduler:
        return self

    def __exit__(self, *_: Any) -> None:
        self.flush()

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return (
            f"InvocationScheduler(func={name}, "
            f"wait={self._config.wait}, "
            f"max_wait={self._config.max_wait}, "
            f"leading={self._config.leading}, "
            f"trailing={self._config.trailing}, "
            f"mode={self._config.mode.value}, "
            f"pending={self._timer_id is not None})"
        )
