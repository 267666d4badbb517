"""Abstract timer capability that every scheduler backend implements."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar


class BaseTimer(ABC):
    """Base class for timer backends.

    A scheduler owns exactly one timer, chosen when it is built, and uses
    it for every deferred invocation. Backends only need to start and
    cancel single-shot callbacks; all timing decisions stay in the
    scheduler.

    Subclasses must implement :meth:`schedule` and :meth:`cancel`.
    Backends able to drive coroutines set :attr:`runs_coroutines` and
    override :meth:`spawn`.
    """

    __slots__ = ()

    runs_coroutines: ClassVar[bool] = False

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], Any]) -> Any:
        """Run *callback* once after *delay* seconds and return a handle."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a handle returned by :meth:`schedule`. Must tolerate fired handles."""

    def spawn(self, awaitable: Any) -> Any:
        """Adopt an awaitable returned by the wrapped callable."""
        return awaitable

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
