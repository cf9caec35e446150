"""
Unit tests for the govuk error hierarchy.
"""

import pytest

from govuk.core.errors import (
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


class TestErrorHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "error_class",
        [APIError, ValidationError, RateLimitError, NetworkError, DataError, ConfigError],
    )
    def test_all_errors_are_govuk_errors(self, error_class):
        assert issubclass(error_class, GovUKError)

    def test_network_errors_are_api_errors(self):
        assert issubclass(NetworkError, APIError)
        assert issubclass(ConnectionError, NetworkError)
        assert issubclass(TimeoutError, NetworkError)
        assert issubclass(ResourceNotFoundError, APIError)

    def test_validation_error_is_not_an_api_error(self):
        assert not issubclass(ValidationError, APIError)


class TestErrorFormatting:
    """Tests for error messages and details."""

    def test_message_without_details(self):
        error = ValidationError("No search query")
        assert str(error) == "No search query"
        assert error.details == {}

    def test_message_with_details(self):
        error = APIError("Server error", {"status_code": 500})
        assert str(error) == "Server error (status_code=500)"

    def test_rate_limit_error_includes_retry_after(self):
        error = RateLimitError("Rate limit exceeded", retry_after=30)
        assert error.retry_after == 30
        assert str(error) == "Rate limit exceeded (retry after 30 seconds)"

    def test_format_error_details(self):
        error = DataError("Invalid JSON", {"status_code": 200})
        assert format_error_details(error) == "DataError: Invalid JSON (status_code=200)"
        assert format_error_details(ValidationError("No content item path")) == (
            "ValidationError: No content item path"
        )
        assert format_error_details(ValueError("boom")) == "ValueError: boom"


class TestClassifyApiError:
    """Tests for mapping HTTP statuses to errors."""

    @pytest.mark.parametrize(
        "status, error_class, prefix",
        [
            (404, ResourceNotFoundError, "Resource not found"),
            (429, RateLimitError, "Rate limit exceeded"),
            (503, APIError, "Server error"),
            (400, APIError, "Client error"),
            (302, APIError, "Unexpected API error"),
        ],
    )
    def test_classification(self, status, error_class, prefix):
        error = classify_api_error(status, "body")
        assert type(error) is error_class
        assert error.message.startswith(prefix)
        assert error.details["status_code"] == status

    def test_long_response_text_is_truncated(self):
        error = classify_api_error(500, "x" * 250)
        assert error.details["response_text"] == "x" * 100 + "..."
