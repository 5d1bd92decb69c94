"""
Unit tests for the call rate limiter.

A fake clock whose sleep advances time keeps these tests instantaneous
and exact.
"""
import threading
import time

import pytest

from core.rate_limiter import CallRateLimiter, MIN_TIME_BETWEEN_CALLS


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return CallRateLimiter(clock=clock, sleep=clock.sleep)


class TestCallRateLimiter:

    def test_default_spacing_is_one_second(self):
        assert CallRateLimiter().min_interval == MIN_TIME_BETWEEN_CALLS == 1.0

    def test_first_call_does_not_wait(self, limiter, clock):
        assert limiter.call_throttled(lambda: "result") == "result"
        assert clock.sleeps == []
        assert limiter.last_call == 100.0

    def test_back_to_back_calls_are_spaced(self, limiter, clock):
        starts = []
        for _ in range(5):
            limiter.call_throttled(lambda: starts.append(clock()))

        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert all(gap >= 1.0 for gap in gaps)
        assert clock.sleeps == [1.0, 1.0, 1.0, 1.0]

    def test_waits_only_the_remaining_delta(self, limiter, clock):
        limiter.acquire()
        clock.now += 0.4

        waited = limiter.acquire()

        assert waited == pytest.approx(0.6)
        assert clock.sleeps == [pytest.approx(0.6)]

    def test_no_wait_after_interval_elapsed(self, limiter, clock):
        limiter.acquire()
        clock.now += 5

        assert limiter.acquire() == 0.0
        assert clock.sleeps == []

    def test_timestamp_recorded_at_start_not_completion(self, limiter, clock):
        def slow_operation():
            clock.now += 3

        limiter.call_throttled(slow_operation)

        assert limiter.last_call == 100.0

    def test_operation_errors_propagate(self, limiter):
        def failing():
            raise RuntimeError("api down")

        with pytest.raises(RuntimeError):
            limiter.call_throttled(failing)
        assert limiter.last_call is not None

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            CallRateLimiter(-1)

    def test_concurrent_callers_are_serialized(self):
        """Real clock: N parallel callers need at least (N - 1) intervals."""
        interval = 0.05
        limiter = CallRateLimiter(interval)
        results = []

        threads = [
            threading.Thread(target=lambda: results.append(limiter.call_throttled(lambda: 1)))
            for _ in range(4)
        ]
        started = time.monotonic()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        elapsed = time.monotonic() - started

        assert results == [1, 1, 1, 1]
        assert elapsed >= 3 * interval
