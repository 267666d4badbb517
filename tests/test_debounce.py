"""Behavioral tests for debounce()."""

import pytest

from mabiki.core import InvocationScheduler
from mabiki.decorator import debounce


class TestDebounceDecorator:
    def test_non_callable_raises(self):
        with pytest.raises(TypeError, match="Expected a function"):
            debounce(0.5)  # type: ignore[call-overload]

    def test_without_parentheses(self):
        @debounce
        def handler() -> None:
            pass

        assert isinstance(handler.scheduler, InvocationScheduler)
        assert callable(handler.cancel)
        assert callable(handler.flush)
        assert callable(handler.pending)

    def test_with_parentheses(self, timer, clock):
        @debounce(wait=0.5, max_wait=2.0, timer=timer, clock=clock)
        def handler() -> None:
            pass

        assert handler.scheduler.config.wait == 0.5
        assert handler.scheduler.config.max_wait == 2.0

    def test_preserves_function_name(self):
        @debounce(wait=1.0)
        def my_handler() -> None:
            pass

        assert my_handler.__name__ == "my_handler"

    def test_each_wrapper_has_its_own_state(self, counter, timer, clock):
        first = debounce(counter, 0.25, timer=timer, clock=clock)
        second = debounce(counter, 0.25, timer=timer, clock=clock)
        first("a")
        assert first.pending() is True
        assert second.pending() is False


class TestDebounceBehavior:
    def test_debounces_a_burst(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, timer=timer, clock=clock)

        assert [debounced("a"), debounced("b"), debounced("c")] == [None, None, None]
        assert counter.count == 0

        timer.advance(0.5)
        assert counter.calls == [(("c",), {})]

        assert [debounced("d"), debounced("e"), debounced("f")] == ["c", "c", "c"]
        assert counter.count == 1

        timer.advance(0.5)
        assert counter.count == 2
        assert counter.calls[-1] == (("f",), {})

    def test_subsequent_calls_return_last_result(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, timer=timer, clock=clock)
        debounced("a")
        timer.advance(0.5)
        assert debounced("b") == "a"
        timer.advance(0.5)
        assert debounced("c") == "b"

    def test_zero_wait_does_not_invoke_synchronously(self, counter, timer, clock):
        debounced = debounce(counter, 0, timer=timer, clock=clock)
        debounced()
        debounced()
        assert counter.count == 0
        timer.advance(0.0)
        assert counter.count == 1

    def test_default_options(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, {}, timer=timer, clock=clock)
        debounced()
        assert counter.count == 0
        timer.advance(0.5)
        assert counter.count == 1

    def test_leading_option(self, timer, clock):
        counts = [0, 0]

        def with_leading():
            counts[0] += 1

        def with_leading_and_trailing():
            counts[1] += 1

        first = debounce(with_leading, 0.25, {"leading": True}, timer=timer, clock=clock)
        second = debounce(with_leading_and_trailing, 0.25, {"leading": True}, timer=timer, clock=clock)

        first()
        assert counts[0] == 1

        second()
        second()
        assert counts[1] == 1

        timer.advance(0.5)
        assert counts == [1, 2]

        first()
        assert counts[0] == 2

    def test_leading_without_trailing_returns_stale_result(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, leading=True, trailing=False, timer=timer, clock=clock)
        assert [debounced("a"), debounced("b")] == ["a", "a"]

        timer.advance(0.5)
        assert counter.count == 1
        assert [debounced("c"), debounced("d")] == ["c", "c"]

    def test_trailing_option(self, timer, clock):
        counts = {"with": 0, "without": 0}

        def with_trailing():
            counts["with"] += 1

        def without_trailing():
            counts["without"] += 1

        first = debounce(with_trailing, 0.25, {"trailing": True}, timer=timer, clock=clock)
        second = debounce(without_trailing, 0.25, {"trailing": False}, timer=timer, clock=clock)

        first()
        second()
        assert counts == {"with": 0, "without": 0}

        timer.advance(0.5)
        assert counts == {"with": 1, "without": 0}

    def test_max_wait_option(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, {"maxWait": 0.5}, timer=timer, clock=clock)
        debounced(None)
        debounced(None)
        assert counter.count == 0

        timer.advance(1.0)
        assert counter.count == 1
        debounced(None)
        debounced(None)
        assert counter.count == 1

        timer.advance(1.0)
        assert counter.count == 2

    def test_queues_trailing_call_after_max_wait(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, max_wait=0.25, timer=timer, clock=clock)
        debounced()
        timer.advance(0.1875)
        debounced()
        timer.advance(0.0625)
        debounced()
        timer.advance(0.0625)
        debounced()
        timer.advance(1.0)
        assert counter.count == 2

    def test_new_burst_after_max_wait_flush(self, counter, timer, clock):
        debounced = debounce(counter, 0.25, max_wait=0.5, timer=timer, clock=clock)
        debounced()
        timer.advance(1.0)
        debounced()
        assert counter.count == 1
        timer.advance(0.5)
        assert counter.count == 2
