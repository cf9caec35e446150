"""
Request execution for GOV.UK API clients.

RequestExecutor is the only path from the clients to the network. Every
attempt first passes the shared rate limiter and then fetches and decodes
one JSON document; the retry policy wraps the whole attempt, so a retried
request consumes one rate limit slot per attempt.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import aiohttp

from ...core.errors import (
    ConnectionError,
    DataError,
    NetworkError,
    TimeoutError,
    classify_api_error,
)
from ...core.logging import get_logger
from ..async_utils.retry import RetryPolicy
from .rate_limiter import AsyncRateLimiter, get_rate_limiter
from .session_manager import get_shared_session


logger = get_logger(__name__)

# A fetcher takes a fully built URL and returns the decoded JSON body
Fetcher = Callable[[str], Awaitable[Any]]


async def fetch_json(url: str) -> Any:
    """
    GET a URL through the shared session and decode the JSON body.

    Args:
        url: Fully built request URL

    Returns:
        Decoded JSON body

    Raises:
        APIError: For any non-200 status (see classify_api_error)
        ConnectionError: When the connection to the host fails
        NetworkError: On other client failures
        TimeoutError: When the request times out
        DataError: When the body is not valid JSON
    """
    session = await get_shared_session()
    try:
        async with session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise classify_api_error(response.status, text)
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise DataError(
                    f"Invalid JSON in response from {url}: {str(e)}", {"status_code": response.status}
                ) from e
    except asyncio.TimeoutError as e:
        raise TimeoutError(f"Request timed out while fetching {url}") from e
    except aiohttp.ClientConnectionError as e:
        raise ConnectionError(f"Connection error while fetching {url}: {str(e)}") from e
    except aiohttp.ClientError as e:
        raise NetworkError(f"Network error while fetching {url}: {str(e)}") from e


class RequestExecutor:
    """
    Rate limited, retried fetch-and-decode of a single request.

    Attributes:
        rate_limiter: Limiter consulted before every attempt
        retry_policy: Policy wrapping each logical request
        fetcher: Coroutine function performing one network fetch
    """

    def __init__(
        self,
        rate_limiter: Optional[AsyncRateLimiter] = None,
        retry_policy: Optional[RetryPolicy] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        """
        Initialize the executor.

        Args:
            rate_limiter: Rate limiter (default: the process-wide limiter)
            retry_policy: Retry policy (default: configured RetryPolicy)
            fetcher: Fetch function (default: fetch_json over aiohttp)
        """
        self.rate_limiter = rate_limiter or get_rate_limiter()
        self.retry_policy = retry_policy or RetryPolicy()
        self.fetcher = fetcher or fetch_json

    async def execute(self, url: str) -> Any:
        """
        Fetch a URL and return its decoded JSON body.

        Args:
            url: Fully built request URL

        Returns:
            Decoded JSON body; its shape is not validated

        Raises:
            Exception: The terminal error once the retry budget is spent
        """

        async def attempt() -> Any:
            await self.rate_limiter.wait()
            logger.debug(f"Fetching {url}")
            return await self.fetcher(url)

        return await self.retry_policy.run(attempt)
