"""
Retry mechanisms for async operations.

This module provides retry logic with exponential backoff and jitter for
async operations. Requests made by the clients are read-only, so every
failure is treated as retryable and re-running an operation is always safe.
"""

import asyncio
import secrets
from typing import Any, Awaitable, Callable, Coroutine, Optional, Tuple, TypeVar

from ...core.config import RETRY
from ...core.errors import ConfigError
from ...core.logging import get_logger


# Type variables for generics
T = TypeVar("T")

logger = get_logger(__name__)


def _calculate_backoff_delay(
    attempt: int, base_delay: float, max_delay: float, jitter_factor: float = 0.0
) -> float:
    """
    Calculate exponential backoff delay.

    Args:
        attempt: Number of the attempt that just failed (1-based)
        base_delay: Base delay in seconds
        max_delay: Maximum delay in seconds
        jitter_factor: Random spread applied to the delay (0.25 = +/-25%)

    Returns:
        Delay time in seconds
    """
    delay = min(max_delay, base_delay * (2 ** (attempt - 1)))
    if jitter_factor > 0:
        # Secure random value between 1 - jitter_factor and 1 + jitter_factor
        spread = (secrets.randbits(32) / (2**32 - 1)) * 2 - 1
        delay = delay * (1 + jitter_factor * spread)
    return max(0.0, delay)


class RetryPolicy:
    """
    Re-run a failing async operation with exponential backoff.

    Only the terminal outcome is visible to the caller: the first successful
    result, or the error raised by the last permitted attempt. Attempts are
    strictly sequential.

    Attributes:
        max_attempts: Total number of invocations allowed (at least 1)
        base_delay: Delay before the first retry in seconds
        max_delay: Upper bound for a single delay in seconds
        jitter_factor: Random spread applied to each delay
        retry_exceptions: Exception types that trigger a retry
    """

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        jitter_factor: Optional[float] = None,
        retry_exceptions: Tuple[type, ...] = (Exception,),
    ):
        self.max_attempts = RETRY["MAX_ATTEMPTS"] if max_attempts is None else max_attempts
        self.base_delay = RETRY["BASE_DELAY"] if base_delay is None else base_delay
        self.max_delay = RETRY["MAX_DELAY"] if max_delay is None else max_delay
        self.jitter_factor = RETRY["JITTER_FACTOR"] if jitter_factor is None else jitter_factor
        self.retry_exceptions = retry_exceptions

        if self.max_attempts < 1:
            raise ConfigError("Retry policy needs at least one attempt", {"max_attempts": self.max_attempts})

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Invoke `operation` until it succeeds or the attempt budget is spent.

        Args:
            operation: Parameterless async callable; must be idempotent

        Returns:
            Result of the first successful invocation

        Raises:
            Exception: The error from the final attempt
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except asyncio.CancelledError:
                raise
            except self.retry_exceptions as e:
                if attempt >= self.max_attempts:
                    if self.max_attempts > 1:
                        logger.warning(f"Max attempts ({self.max_attempts}) exceeded: {str(e)}")
                    raise

                delay = _calculate_backoff_delay(
                    attempt, self.base_delay, self.max_delay, self.jitter_factor
                )
                logger.debug(
                    f"Attempt {attempt}/{self.max_attempts} failed: {str(e)}. Waiting {delay:.2f}s"
                )
                await asyncio.sleep(delay)


async def retry_async_with_backoff(
    func: Callable[..., Coroutine[Any, Any, T]],
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    retry_exceptions: Optional[Tuple[type, ...]] = None,
    **kwargs,
) -> T:
    """
    Retry an async function with exponential backoff.

    Args:
        func: Async function to retry
        *args: Positional arguments for function
        max_retries: Maximum number of retries after the first call
        base_delay: Initial delay between retries
        max_delay: Maximum delay between retries
        retry_exceptions: Exceptions to retry on (default: all)
        **kwargs: Keyword arguments for function

    Returns:
        Result of the function

    Raises:
        Exception: If all retries fail
    """
    policy = RetryPolicy(
        max_attempts=max_retries + 1,
        base_delay=base_delay,
        max_delay=max_delay,
        retry_exceptions=retry_exceptions or (Exception,),
    )
    return await policy.run(lambda: func(*args, **kwargs))
