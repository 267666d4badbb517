"""Decorator API: ``debounce`` and ``throttle``."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, Protocol, TypeVar, cast, overload

from mabiki.config import DebounceConfig, Mode, TimerBackend
from mabiki.core import InvocationScheduler
from mabiki.timers.registry import resolve_backend

if TYPE_CHECKING:
    from mabiki.timers.base import BaseTimer

P = ParamSpec("P")
R = TypeVar("R", covariant=True)


class DebouncedFunc(Protocol[P, R]):
    """A rate-limited callable as returned by :func:`debounce` and :func:`throttle`."""

    scheduler: InvocationScheduler

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R | None:
        """Call through the scheduler; returns the latest result, possibly stale."""

    def cancel(self) -> None:
        """Throw away any pending invocation."""

    def flush(self) -> R | None:
        """Invoke a pending call now and return the latest result."""

    def pending(self) -> bool:
        """Whether an invocation is waiting on a timer."""


def _wrap(
    func: Any,
    mode: Mode,
    wait: Any,
    options: Any,
    *,
    leading: bool | None,
    trailing: bool | None,
    max_wait: Any,
    backend: TimerBackend | str | None,
    timer: BaseTimer | None,
    clock: Callable[[], float] | None,
) -> Any:
    if not callable(func):
        raise TypeError("Expected a function")

    config = DebounceConfig.from_options(
        wait,
        options,
        mode=mode,
        backend=resolve_backend(func, backend),
        leading=leading,
        trailing=trailing,
        max_wait=max_wait,
    )
    scheduler = InvocationScheduler(func, config, timer=timer, clock=clock)

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return scheduler(*args, **kwargs)

    wrapper.scheduler = scheduler  # type: ignore[attr-defined]
    wrapper.cancel = scheduler.cancel  # type: ignore[attr-defined]
    wrapper.flush = scheduler.flush  # type: ignore[attr-defined]
    wrapper.pending = scheduler.pending  # type: ignore[attr-defined]

    return wrapper


@overload
def debounce(
    func: Callable[P, R],
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    max_wait: float | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> DebouncedFunc[P, R]: ...


@overload
def debounce(
    func: None = None,
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    max_wait: float | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> Callable[[Callable[P, R]], DebouncedFunc[P, R]]: ...


def debounce(
    func: Callable[P, R] | None = None,
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    max_wait: float | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> DebouncedFunc[P, R] | Callable[[Callable[P, R]], DebouncedFunc[P, R]]:
    """Delay calls to a function until they have been quiet for *wait* seconds.

    The returned function records each call and invokes *func* with the
    arguments of the most recent one, on the leading and/or trailing edge
    of the quiet period. It always returns the result of the latest real
    invocation (``None`` before the first), and exposes ``cancel()``,
    ``flush()`` and ``pending()``.

    When *wait* is omitted and the event-loop backend is in use, the
    invocation is deferred to the loop's next iteration. Passing any
    explicit *wait*, including ``0``, uses a fixed timer instead.

    Args:
        func: The function to debounce (omit to get a decorator).
        wait: Quiet period in seconds. Invalid values become ``0``.
        options: Mapping with ``leading``, ``trailing`` and ``maxWait`` /
            ``max_wait`` keys. Anything else is ignored.
        leading: Invoke on the leading edge. Defaults to ``False``.
        trailing: Invoke on the trailing edge. Defaults to ``True``.
        max_wait: Maximum seconds an invocation may be deferred while calls
            keep arriving. Clamped to be at least *wait*.
        backend: ``"thread"`` or ``"loop"``. Defaults to ``"loop"`` for
            coroutine functions and ``"thread"`` otherwise.
        timer: A ready-made timer, overriding *backend*.
        clock: Time source in seconds. Defaults to ``time.monotonic``.

    Raises:
        TypeError: If *func* is not callable.

    Examples:
    ```python
        save = debounce(write_to_disk, 0.5)

        @debounce(wait=0.25, max_wait=2.0)
        def refresh(query: str) -> None: ...

        @debounce(wait=1.0, leading=True, trailing=False)
        def send_mail() -> None: ...
    ```
    """

    def decorator(fn: Callable[P, R]) -> DebouncedFunc[P, R]:
        wrapper = _wrap(
            fn,
            Mode.DEBOUNCE,
            wait,
            options,
            leading=leading,
            trailing=trailing,
            max_wait=max_wait,
            backend=backend,
            timer=timer,
            clock=clock,
        )
        return cast("DebouncedFunc[P, R]", wrapper)

    if func is not None:
        return decorator(func)

    return decorator


@overload
def throttle(
    func: Callable[P, R],
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> DebouncedFunc[P, R]: ...


@overload
def throttle(
    func: None = None,
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> Callable[[Callable[P, R]], DebouncedFunc[P, R]]: ...


def throttle(
    func: Callable[P, R] | None = None,
    /,
    wait: float | None = None,
    options: Any = None,
    *,
    leading: bool | None = None,
    trailing: bool | None = None,
    backend: TimerBackend | str | None = None,
    timer: BaseTimer | None = None,
    clock: Callable[[], float] | None = None,
) -> DebouncedFunc[P, R] | Callable[[Callable[P, R]], DebouncedFunc[P, R]]:
    """Invoke a function at most once every *wait* seconds.

    A debounce whose ``max_wait`` is pinned to *wait* and whose leading
    edge is on by default. Any ``maxWait`` in *options* is ignored.

    Args:
        func: The function to throttle (omit to get a decorator).
        wait: Interval in seconds. Invalid values become ``0``.
        options: Mapping with ``leading`` and ``trailing`` keys.
        leading: Invoke on the leading edge. Defaults to ``True``.
        trailing: Invoke on the trailing edge. Defaults to ``True``.
        backend: See :func:`debounce`.
        timer: See :func:`debounce`.
        clock: See :func:`debounce`.

    Examples:
    ```python
        @throttle(wait=0.1)
        def on_scroll(offset: int) -> None: ...
    ```
    """

    def decorator(fn: Callable[P, R]) -> DebouncedFunc[P, R]:
        wrapper = _wrap(
            fn,
            Mode.THROTTLE,
            wait,
            options,
            leading=leading,
            trailing=trailing,
            max_wait=None,
            backend=backend,
            timer=timer,
            clock=clock,
        )
        return cast("DebouncedFunc[P, R]", wrapper)

    if func is not None:
        return decorator(func)

    return decorator
