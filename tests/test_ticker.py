"""Relative time refresh timer tests."""

import threading

import pendulum
import pytest

from pydevutils import RelativeTimeTicker


class Counter:
    def __init__(self, target: int = 1) -> None:
        self.calls = 0
        self.reached = threading.Event()
        self._target = target

    def __call__(self) -> None:
        self.calls += 1
        if self.calls >= self._target:
            self.reached.set()


class TestRelativeTimeTicker:
    def test_ticks_until_stopped(self):
        counter = Counter(target=3)
        ticker = RelativeTimeTicker(counter, interval=0.01)
        ticker.start()
        try:
            assert counter.reached.wait(2)
        finally:
            ticker.stop()
        assert not ticker.running
        calls = counter.calls
        threading.Event().wait(0.05)
        assert counter.calls == calls

    def test_start_twice_is_noop(self):
        ticker = RelativeTimeTicker(Counter(), interval=0.01)
        ticker.start()
        try:
            first = ticker._thread
            ticker.start()
            assert ticker._thread is first
        finally:
            ticker.stop()

    def test_stop_without_start(self):
        ticker = RelativeTimeTicker(Counter())
        ticker.stop()
        assert not ticker.running

    def test_sync_follows_instant(self):
        ticker = RelativeTimeTicker(Counter(), interval=0.01)
        ticker.sync(pendulum.now("UTC"))
        assert ticker.running
        ticker.sync(None)
        assert not ticker.running

    def test_restart_after_stop(self):
        counter = Counter(target=1)
        ticker = RelativeTimeTicker(counter, interval=0.01)
        ticker.start()
        ticker.stop()
        ticker.start()
        try:
            assert counter.reached.wait(2)
        finally:
            ticker.stop()

    def test_context_manager_stops(self):
        with RelativeTimeTicker(Counter(), interval=0.01) as ticker:
            ticker.start()
            assert ticker.running
        assert not ticker.running

    def test_callback_errors_do_not_stop_ticker(self):
        counter = Counter(target=2)

        def flaky():
            counter()
            if counter.calls == 1:
                raise RuntimeError("boom")

        with RelativeTimeTicker(flaky, interval=0.01) as ticker:
            ticker.start()
            assert counter.reached.wait(2)

    @pytest.mark.parametrize("interval", [0, -1])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValueError):
            RelativeTimeTicker(Counter(), interval=interval)
