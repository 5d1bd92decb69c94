"""
Call Rate Limiter - Minimum spacing between outbound model calls.

One instance is built per process (see AppContext) and shared by every
request that talks to the generative model.
"""
import logging
import threading
import time
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

MIN_TIME_BETWEEN_CALLS = 1.0  # seconds


class CallRateLimiter:
    """Serialize call *starts* to at least ``min_interval`` seconds apart.

    The last-start timestamp is read, the wait computed and the timestamp
    written under one lock, so concurrent callers cannot both see a stale
    value. The wrapped operation itself runs outside the lock; calls may
    overlap in execution.
    """

    def __init__(
        self,
        min_interval: float = MIN_TIME_BETWEEN_CALLS,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._lock = threading.Lock()
        self._last_call: Optional[float] = None

    def acquire(self) -> float:
        """Block until the caller may start, then record the start time.

        Returns:
            Seconds spent waiting
        """
        with self._lock:
            now = self._clock()
            waited = 0.0
            if self._last_call is not None:
                remaining = self.min_interval - (now - self._last_call)
                if remaining > 0:
                    logger.debug(f"Throttling model call for {remaining:.3f}s")
                    self._sleep(remaining)
                    waited = remaining
                    now = self._clock()
            self._last_call = now
            return waited

    def call_throttled(self, operation: Callable[[], T]) -> T:
        """Run ``operation`` once the minimum spacing has elapsed."""
        self.acquire()
        return operation()

    @property
    def last_call(self) -> Optional[float]:
        with self._lock:
            return self._last_call
