"""
GOV.UK API clients

Asynchronous clients for the GOV.UK Content API and Search API.

This package features:
- Process-wide rate limiting shared by every client
- Transparent retries with exponential backoff
- Concurrent pagination over complete search result sets
"""

import logging

# Import our standardized logging configuration
from .core.config import LOGGING
from .core.logging import configure_logging, enable_debug_for_module, get_logger, set_log_level


# Library default is to leave logging to the application; a log file opts in
if LOGGING["FILE"] and not logging.root.handlers:
    configure_logging(
        level=LOGGING["LEVEL"],
        log_file=LOGGING["FILE"],
        console=False,
    )

# Import and re-export the main API components
from .api import ContentClient, DataObservers, SearchClient

# Import and re-export error types
from .core.errors import (
    APIError,
    ConfigError,
    ConnectionError,
    DataError,
    GovUKError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    TimeoutError,
    ValidationError,
)

# Import and re-export core data types
from .core.types import FacetCategory, SearchQuery
from .utils.network import (
    AsyncRateLimiter,
    RequestExecutor,
    close_shared_session,
    global_rate_limiter,
)
from .utils.async_utils import RetryPolicy


__version__ = "0.1.0"

__all__ = [
    # Clients
    "ContentClient",
    "SearchClient",
    "DataObservers",
    # Types
    "SearchQuery",
    "FacetCategory",
    # Request execution
    "RequestExecutor",
    "AsyncRateLimiter",
    "RetryPolicy",
    "global_rate_limiter",
    "close_shared_session",
    # Errors
    "GovUKError",
    "APIError",
    "ValidationError",
    "RateLimitError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
    "ResourceNotFoundError",
    "DataError",
    "ConfigError",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    "enable_debug_for_module",
]
