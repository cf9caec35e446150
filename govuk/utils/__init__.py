"""
Utility modules for GOV.UK API access.

This package provides various utilities organized by category:
- async_utils: Retry utilities for async operations
- network: Rate limiting, request execution, pagination and sessions
"""

from .async_utils import RetryPolicy, retry_async_with_backoff
from .network import (
    AsyncRateLimiter,
    PaginatedResults,
    RequestExecutor,
    close_shared_session,
    global_rate_limiter,
    paginate,
    plan_offsets,
)


__all__ = [
    "RetryPolicy",
    "retry_async_with_backoff",
    "AsyncRateLimiter",
    "global_rate_limiter",
    "RequestExecutor",
    "PaginatedResults",
    "paginate",
    "plan_offsets",
    "close_shared_session",
]
