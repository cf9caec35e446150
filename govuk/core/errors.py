"""
Error handling module for GOV.UK API access.

This module defines the exception hierarchy shared by the Content and
Search clients, so that calling code can tell validation problems apart
from network and decoding failures.
"""

from typing import Any, Dict, Optional


# Stable validation messages, relied on by callers and tests
NO_CONTENT_PATH_MESSAGE = "No content item path"
NO_SEARCH_QUERY_MESSAGE = "No search query"
FIELDS_NOT_LIST_MESSAGE = "Fields parameter must be a list"


class GovUKError(Exception):
    """
    Base class for all GOV.UK API related errors.

    All exceptions raised by the package inherit from this class.

    Attributes:
        message: Error message
        details: Additional error details
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a GovUKError.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message

        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class APIError(GovUKError):
    """
    Error related to API requests.

    Raised for unexpected HTTP statuses and as the parent of network
    and rate limit errors.
    """

    pass


class ValidationError(GovUKError):
    """
    Error related to validation.

    Raised before any network call for an empty content path, an empty
    search query or malformed search options. Never retried.
    """

    pass


class RateLimitError(APIError):
    """
    Upstream rejected a request with HTTP 429.

    Attributes:
        message: Error message
        retry_after: Suggested retry delay in seconds
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, details)

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.retry_after is not None:
            return f"{base_str} (retry after {self.retry_after} seconds)"
        return base_str


class NetworkError(APIError):
    """Error related to network issues."""

    pass


class ConnectionError(NetworkError):
    """Error related to network connection issues."""

    pass


class TimeoutError(NetworkError):
    """Error related to request timeouts."""

    pass


class ResourceNotFoundError(APIError):
    """Error related to resources not found (404)."""

    pass


class DataError(GovUKError):
    """
    Error related to data handling.

    Raised when a response body cannot be decoded as JSON.
    """

    pass


class ConfigError(GovUKError):
    """Error related to configuration issues."""

    pass


def format_error_details(error: Exception) -> str:
    """
    Format error details for logging.

    Args:
        error: Exception object

    Returns:
        Formatted error details string
    """
    if isinstance(error, GovUKError):
        if error.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
            return f"{error.__class__.__name__}: {error.message} ({detail_str})"
        return f"{error.__class__.__name__}: {error.message}"

    return f"{error.__class__.__name__}: {str(error)}"


def classify_api_error(status_code: int, response_text: str) -> APIError:
    """
    Classify API error based on status code and response text.

    Args:
        status_code: HTTP status code
        response_text: Response text

    Returns:
        Appropriate APIError subclass instance
    """
    details = {
        "status_code": status_code,
        "response_text": response_text[:100] + ("..." if len(response_text) > 100 else ""),
    }

    if status_code == 404:
        return ResourceNotFoundError(f"Resource not found (status code: {status_code})", details)
    elif status_code == 429:
        return RateLimitError(f"Rate limit exceeded (status code: {status_code})", None, details)
    elif status_code >= 500:
        return APIError(f"Server error (status code: {status_code})", details)
    elif status_code >= 400:
        return APIError(f"Client error (status code: {status_code})", details)
    else:
        return APIError(f"Unexpected API error (status code: {status_code})", details)
