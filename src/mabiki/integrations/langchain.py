"""LangChain callback integration for the mabiki library.

Provides :class:`ThrottledStreamHandler` — a LangChain callback handler
that batches streamed tokens and hands them to a sink at most once per
interval, so a UI or chat message is not re-rendered on every token.

Example::

    from langchain_openai import ChatOpenAI
    from mabiki.integrations.langchain import ThrottledStreamHandler

    handler = ThrottledStreamHandler(message.append_text, interval=0.5)
    llm = ChatOpenAI(streaming=True, callbacks=[handler])
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from langchain_core.callbacks import BaseCallbackHandler

from mabiki.decorator import throttle

if TYPE_CHECKING:
    from collections.abc import Callable

    from langchain_core.outputs import LLMResult

    from mabiki.timers.base import BaseTimer


class ThrottledStreamHandler(BaseCallbackHandler):
    """Forward streamed tokens to *sink* in throttled chunks.

    Tokens from ``on_llm_new_token`` are buffered. The buffer is drained
    through :func:`mabiki.throttle`, so *sink* receives the text that
    accumulated since its previous call, at most once per *interval*.
    Whatever is left when the run ends is flushed by ``on_llm_end``; on
    ``on_llm_error`` the buffer is dropped.

    Args:
        sink: Called with each chunk of joined token text.
        interval: Minimum seconds between calls to *sink*.
        leading: Emit the first token immediately.
        trailing: Emit buffered tokens when the interval closes.
        timer: Timer backend for the underlying throttle.
        clock: Time source for the underlying throttle.
    """

    def __init__(
        self,
        sink: Callable[[str], Any],
        interval: float = 0.25,
        *,
        leading: bool = True,
        trailing: bool = True,
        timer: BaseTimer | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__()
        self._sink = sink
        self._buffer: list[str] = []
        self._lock = threading.Lock()
        self._emit = throttle(
            self._drain,
            interval,
            leading=leading,
            trailing=trailing,
            backend="thread",
            timer=timer,
            clock=clock,
        )

    @property
    def buffered(self) -> str:
        """Text received but not yet handed to the sink."""
        with self._lock:
            return "".join(self._buffer)

    def _drain(self) -> str:
        with self._lock:
            text = "".join(self._buffer)
            self._buffer.clear()
        if text:
            self._sink(text)
        return text

    def on_llm_new_token(self, token: str, **kwargs: Any) -> None:
        with self._lock:
            self._buffer.append(token)
        self._emit()

    def on_llm_end(self, response: LLMResult, **kwargs: Any) -> None:
        self._emit.flush()
        # With trailing disabled the last chunk is never pending.
        self._drain()

    def on_llm_error(self, error: BaseException, **kwargs: Any) -> None:
        self._emit.cancel()
        with self._lock:
            self._buffer.clear()
