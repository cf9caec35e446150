"""
Core functionality for GOV.UK API access.

This module contains the foundational components of the package:
- Config: Centralized configuration settings
- Errors: Error hierarchy and handling utilities
- Types: Search query and content path types
- Logging: Logging configuration and utilities
"""

from .errors import (
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
    classify_api_error,
    format_error_details,
)
from .logging import configure_logging, get_logger
from .types import FacetCategory, SearchQuery, normalize_path


__all__ = [
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
    "format_error_details",
    "classify_api_error",
    # Logging
    "configure_logging",
    "get_logger",
    # Types
    "SearchQuery",
    "FacetCategory",
    "normalize_path",
]
