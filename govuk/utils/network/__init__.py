"""
Network utilities for GOV.UK API access.

This module provides utilities for network communication, including
rate limiting, request execution, pagination and session management.
"""

from .executor import RequestExecutor, fetch_json
from .pagination import PaginatedResults, paginate, plan_offsets

# Import global rate limiter from module
from .rate_limiter import AsyncRateLimiter, get_rate_limiter, global_rate_limiter
from .session_manager import (
    SharedSessionManager,
    close_shared_session,
    get_session_manager,
    get_shared_session,
)


__all__ = [
    # Rate limiting
    "AsyncRateLimiter",
    "global_rate_limiter",
    "get_rate_limiter",
    # Request execution
    "RequestExecutor",
    "fetch_json",
    # Pagination
    "plan_offsets",
    "PaginatedResults",
    "paginate",
    # Session management
    "SharedSessionManager",
    "get_session_manager",
    "get_shared_session",
    "close_shared_session",
]
