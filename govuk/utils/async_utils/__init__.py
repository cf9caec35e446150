"""
Asynchronous utilities for GOV.UK API access.

This module provides retry with exponential backoff for async operations.
"""

from .retry import RetryPolicy, retry_async_with_backoff


__all__ = [
    "RetryPolicy",
    "retry_async_with_backoff",
]
