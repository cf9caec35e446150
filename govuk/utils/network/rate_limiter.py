"""
Rate limiting utilities for GOV.UK API requests.

The Content API allows 10 requests per second per client, and the limit is
enforced upstream per source rather than per client object. A single
process-wide limiter is therefore shared by every ContentClient and
SearchClient, regardless of which one created the request.

CANONICAL SOURCE: `global_rate_limiter` is the one limiter instance for the
process. Pass it (or your own AsyncRateLimiter) to RequestExecutor explicitly.
"""

import asyncio
import threading
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, Optional, Tuple

from ...core.config import RATE_LIMIT
from ...core.errors import ConfigError
from ...core.logging import get_logger


logger = get_logger(__name__)


class AsyncRateLimiter:
    """
    Sliding window rate limiter for async callers.

    Every caller reserves an admission slot under a lock, then sleeps
    outside the lock until that slot. A slot is never closer than
    `window_size` seconds to the slot reserved `max_calls` admissions
    earlier, so no window of `window_size` seconds ever holds more than
    `max_calls` admissions. Slots are handed out in call order, so later
    callers cannot be starved.

    The critical section never awaits, so a plain threading lock is enough
    and the limiter can be shared across event loops.

    Attributes:
        max_calls: Maximum admissions per window
        window_size: Window length in seconds
        call_times: Reserved admission times still inside the window
    """

    def __init__(
        self,
        max_calls: Optional[int] = None,
        window_size: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the rate limiter.

        Args:
            max_calls: Maximum admissions per window (default: from config)
            window_size: Window length in seconds (default: from config)
            clock: Monotonic clock used to timestamp admissions
        """
        self.max_calls = RATE_LIMIT["MAX_CALLS"] if max_calls is None else max_calls
        self.window_size = RATE_LIMIT["WINDOW_SIZE"] if window_size is None else window_size
        if self.max_calls <= 0 or self.window_size <= 0:
            raise ConfigError(
                "Rate limiter needs a positive max_calls and window_size",
                {"max_calls": self.max_calls, "window_size": self.window_size},
            )

        self._clock = clock
        self.call_times: Deque[float] = deque()
        self.lock = threading.Lock()

        # Metrics
        self.total_calls = 0
        self.delayed_calls = 0
        self.total_wait_time = 0.0
        self.max_wait_time = 0.0

        logger.debug(
            f"Initialized AsyncRateLimiter: max_calls={self.max_calls}, "
            f"window={self.window_size}s"
        )

    def _reserve(self) -> Tuple[float, float]:
        """Reserve the next admission slot, returning (slot, seconds until slot)."""
        with self.lock:
            now = self._clock()

            # Drop admissions that have left the window
            window_start = now - self.window_size
            while self.call_times and self.call_times[0] <= window_start:
                self.call_times.popleft()

            if len(self.call_times) < self.max_calls:
                slot = now
            else:
                slot = max(now, self.call_times[-self.max_calls] + self.window_size)

            self.call_times.append(slot)

            wait_time = slot - now
            self.total_calls += 1
            if wait_time > 0:
                self.delayed_calls += 1
                self.total_wait_time += wait_time
                self.max_wait_time = max(self.max_wait_time, wait_time)

            return slot, wait_time

    async def wait(self) -> float:
        """
        Wait until a request may be sent.

        Never raises and never rejects; when the window is full the caller
        is suspended until its slot opens.

        Returns:
            The admission time (on the limiter's clock) reserved for this call
        """
        slot, wait_time = self._reserve()
        if wait_time > 0:
            logger.debug(f"Rate limit reached. Waiting {wait_time:.3f}s")
            await asyncio.sleep(wait_time)
        return slot

    # Admission is the same operation under its domain name
    admit = wait

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get performance metrics for the rate limiter.

        Returns:
            Dictionary of metrics
        """
        with self.lock:
            return {
                "max_calls": self.max_calls,
                "window_size": self.window_size,
                "total_calls": self.total_calls,
                "delayed_calls": self.delayed_calls,
                "avg_wait_time": round(self.total_wait_time / max(self.total_calls, 1), 3),
                "max_wait_time": round(self.max_wait_time, 3),
                "window_utilization": round(len(self.call_times) / self.max_calls * 100, 1),
            }

    def reset(self) -> None:
        """Forget all reservations and metrics."""
        with self.lock:
            self.call_times.clear()
            self.total_calls = 0
            self.delayed_calls = 0
            self.total_wait_time = 0.0
            self.max_wait_time = 0.0


# Process-wide limiter shared by every client; lives for the life of the process
global_rate_limiter = AsyncRateLimiter()


def get_rate_limiter() -> AsyncRateLimiter:
    """
    Get the process-wide rate limiter.

    Returns:
        The shared AsyncRateLimiter instance
    """
    return global_rate_limiter
