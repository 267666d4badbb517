"""Configuration types for the invocation scheduler."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypedDict

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """Call-site contracts built on the scheduler.

    DEBOUNCE: Invoke once calls have been quiet for ``wait`` seconds.
    THROTTLE: Invoke at most once per ``wait`` seconds. Same engine,
              with ``leading`` on by default and ``max_wait == wait``.
    """

    DEBOUNCE = "debounce"
    THROTTLE = "throttle"


class TimerBackend(StrEnum):
    """Where deferred invocations run.

    THREAD: ``threading.Timer`` daemon threads.
    LOOP:   The running asyncio event loop.
    """

    THREAD = "thread"
    LOOP = "loop"


class DebounceOptions(TypedDict, total=False):
    leading: bool
    trailing: bool
    maxWait: float
    max_wait: float


def coerce_duration(value: Any) -> float:
    """Coerce *value* into a non-negative, finite number of seconds.

    Anything that cannot be read as such a number becomes ``0.0``.
    """
    if value is None:
        return 0.0
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        logger.debug("Coercing non-numeric duration %r to 0", value)
        return 0.0
    if not math.isfinite(seconds) or seconds < 0:
        logger.debug("Coercing out-of-range duration %r to 0", value)
        return 0.0
    return seconds


@dataclass(frozen=True, slots=True)
class DebounceConfig:
    """Configuration for an InvocationScheduler.

    Attributes:
        wait: Quiet period in seconds. For throttle, the interval.
        leading: Invoke on the first call of a burst.
        trailing: Invoke once more, with the latest arguments, when a
                  burst settles.
        max_wait: Upper bound in seconds on how long an invocation may be
                  deferred while calls keep arriving. None means unbounded.
        mode: Which contract this config was built for.
        backend: Timer backend used for deferred invocations.
        next_tick: Defer to the backend's next-tick primitive instead of a
                   fixed timer. Only set when no ``wait`` was given.
    """

    wait: float = 0.0
    leading: bool = False
    trailing: bool = True
    max_wait: float | None = None
    mode: Mode = Mode.DEBOUNCE
    backend: TimerBackend = TimerBackend.THREAD
    next_tick: bool = False

    def __post_init__(self) -> None:
        if self.wait < 0:
            raise ValueError(f"wait must be non-negative, got {self.wait}")

        if self.max_wait is not None and self.max_wait < self.wait:
            raise ValueError(f"max_wait ({self.max_wait}) must be >= wait ({self.wait})")

        if self.mode is Mode.THROTTLE and self.max_wait != self.wait:
            raise ValueError(f"throttle requires max_wait == wait, got {self.max_wait} != {self.wait}")

    @classmethod
    def from_options(
        cls,
        wait: Any = None,
        options: Any = None,
        *,
        mode: Mode = Mode.DEBOUNCE,
        backend: TimerBackend = TimerBackend.THREAD,
        leading: bool | None = None,
        trailing: bool | None = None,
        max_wait: Any = None,
    ) -> DebounceConfig:
        """Build a config from loosely-typed call-site arguments.

        Unlike the constructor, this never raises for bad values: durations
        are coerced, ``max_wait`` is clamped to ``wait``, and *options* that
        are not a mapping are ignored. Explicit keyword overrides win over
        keys found in *options*.
        """
        wait_value = coerce_duration(wait)

        if options is not None and not isinstance(options, Mapping):
            logger.debug("Ignoring non-mapping options %r", options)
            options = None
        opts: Mapping[str, Any] = options or {}

        if leading is None:
            leading = bool(opts.get("leading", mode is Mode.THROTTLE))
        if trailing is None:
            trailing = bool(opts.get("trailing", True))

        if mode is Mode.THROTTLE:
            max_wait_value: float | None = wait_value
        else:
            if max_wait is None:
                max_wait = opts.get("maxWait", opts.get("max_wait"))
            has_max_wait = max_wait is not None or "maxWait" in opts or "max_wait" in opts
            max_wait_value = max(coerce_duration(max_wait), wait_value) if has_max_wait else None

        return cls(
            wait=wait_value,
            leading=leading,
            trailing=trailing,
            max_wait=max_wait_value,
            mode=mode,
            backend=backend,
            next_tick=wait is None,
        )
