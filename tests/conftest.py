"""
Global pytest fixtures for govuk tests.

This file contains test fixtures that can be used across all test files.
"""

import pytest

from govuk.utils.network.rate_limiter import AsyncRateLimiter


# Import common fixtures to make them available globally
# This allows us to use fixtures defined in the fixture modules throughout the test suite
# without needing to import them directly in each test file
pytest_plugins = [
    "tests.fixtures.api_responses",
    "tests.fixtures.async_fixtures",
]


@pytest.fixture
def unlimited_rate_limiter():
    """
    Create a rate limiter that never delays.

    Returns:
        AsyncRateLimiter: Limiter with a budget far above any test's request count
    """
    return AsyncRateLimiter(max_calls=100000, window_size=1.0)
