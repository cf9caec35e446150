"""
Pagination utilities for offset based API requests.

The Search API returns one page per call and reports the total number of
matching results. This module turns that total into the list of page
offsets, fetches every page concurrently and reassembles the results in
offset order.
"""

import asyncio
import math
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, List, Optional, TypeVar

from ...core.config import PAGINATION
from ...core.logging import get_logger


logger = get_logger(__name__)

# Define type variables for generic types
T = TypeVar("T")

# Returns the total number of results, or None if the API reports none
TotalFetcher = Callable[[], Awaitable[Optional[int]]]
# Fetches one page given (start, count)
PageFetcher = Callable[[int, int], Awaitable[List[T]]]


def plan_offsets(total: Optional[int], page_size: Optional[int]) -> List[int]:
    """
    Work out where each page starts.

    Args:
        total: Total number of results
        page_size: Number of results per page

    Returns:
        Offsets [0, page_size, 2 * page_size, ...] covering all results, or
        an empty list when total or page_size is zero or missing
    """
    if not total or not page_size:
        return []
    pages_needed = math.ceil(total / page_size)
    return [index * page_size for index in range(pages_needed)]


class PaginatedResults(Generic[T]):
    """
    Handler for offset paginated API results.

    Attributes:
        fetch_total: Coroutine function returning the total result count
        fetch_page: Coroutine function fetching one page by (start, count)
        page_size: Number of results per page
    """

    def __init__(
        self,
        fetch_total: TotalFetcher,
        fetch_page: PageFetcher,
        page_size: Optional[int] = None,
    ):
        """
        Initialize the paginated results handler.

        Args:
            fetch_total: Coroutine function returning the total result count
            fetch_page: Coroutine function fetching one page by (start, count)
            page_size: Number of results per page (default: from config)
        """
        self.fetch_total = fetch_total
        self.fetch_page = fetch_page
        self.page_size = PAGINATION["MAX_PAGE_SIZE"] if page_size is None else page_size

    async def _plan(self, total: Optional[int]) -> List[int]:
        if total is None:
            logger.debug("Getting total results...")
            total = await self.fetch_total()
        offsets = plan_offsets(total, self.page_size)
        logger.debug(
            f"Total results found: {total}, per page: {self.page_size}, "
            f"paginating using {len(offsets)} request(s)"
        )
        return offsets

    def _start_pages(self, offsets: List[int]) -> List["asyncio.Task[List[T]]"]:
        return [
            asyncio.ensure_future(self.fetch_page(start, self.page_size)) for start in offsets
        ]

    async def fetch_all(self, total: Optional[int] = None) -> List[T]:
        """
        Fetch every page concurrently and flatten the results.

        Args:
            total: Known total; skips the count probe when given

        Returns:
            All results in ascending offset order, whatever order the
            pages completed in

        Raises:
            Exception: The first page failure; remaining pages are cancelled
        """
        offsets = await self._plan(total)
        if not offsets:
            return []

        tasks = self._start_pages(offsets)
        try:
            # gather keeps results in task order, i.e. offset order
            pages = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        results: List[T] = []
        for page in pages:
            results.extend(page)
        logger.debug(f"Fetched {len(pages)} pages with {len(results)} total results")
        return results

    async def iter_pages(self, total: Optional[int] = None) -> AsyncIterator[List[T]]:
        """
        Yield each page in offset order.

        All pages are requested up front; each is yielded as soon as it and
        every page before it have arrived.

        Args:
            total: Known total; skips the count probe when given

        Yields:
            List of results for each page
        """
        offsets = await self._plan(total)
        tasks = self._start_pages(offsets)
        try:
            for task in tasks:
                yield await task
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


async def paginate(
    fetch_total: TotalFetcher,
    fetch_page: PageFetcher,
    page_size: Optional[int] = None,
    total: Optional[int] = None,
) -> List[Any]:
    """
    Fetch all pages of an offset paginated API.

    Convenience wrapper around PaginatedResults.fetch_all.

    Args:
        fetch_total: Coroutine function returning the total result count
        fetch_page: Coroutine function fetching one page by (start, count)
        page_size: Number of results per page (default: from config)
        total: Known total; skips the count probe when given

    Returns:
        All results in ascending offset order
    """
    paginator = PaginatedResults(fetch_total, fetch_page, page_size=page_size)
    return await paginator.fetch_all(total=total)
