"""
GOV.UK Content API client.

The Content API returns the published content item for a GOV.UK path:
https://content-api.publishing.service.gov.uk/
"""

import asyncio
from typing import Any, Callable, Iterable, List, Optional

from ..core.config import API
from ..core.logging import get_logger
from ..core.types import normalize_path
from ..utils.network.executor import RequestExecutor
from .events import DataCallback, DataObservers


logger = get_logger(__name__)


class ContentClient:
    """
    Client for the GOV.UK Content API.

    Attributes:
        executor: Executor used for every request
        base_url: Site root, e.g. "https://www.gov.uk"
    """

    def __init__(
        self, executor: Optional[RequestExecutor] = None, base_url: Optional[str] = None
    ):
        """
        Initialize the Content API client.

        Args:
            executor: Request executor (default: shared rate limiter, default retries)
            base_url: Site root (default: from config)
        """
        self.executor = executor or RequestExecutor()
        self.base_url = (base_url or API["BASE_URL"]).rstrip("/")
        self.observers = DataObservers()

    def subscribe(self, callback: DataCallback) -> Callable[[], None]:
        """Register a callback receiving each content item; returns an unsubscribe function."""
        return self.observers.subscribe(callback)

    def url_for(self, path: str) -> str:
        """
        Build the Content API URL for a path.

        Raises:
            ValidationError: If the path is empty
        """
        return f"{self.base_url}{API['CONTENT_PATH']}{normalize_path(path)}"

    async def get(self, path: str) -> Any:
        """
        Get a content item.

        Args:
            path: GOV.UK path, with or without the leading "/"

        Returns:
            Decoded content item

        Raises:
            ValidationError: If the path is empty (no request is made)
        """
        url = self.url_for(path)
        item = await self.executor.execute(url)
        self.observers.emit(item)
        return item

    async def get_many(self, paths: Iterable[str]) -> List[Any]:
        """
        Get several content items concurrently.

        The shared rate limiter paces the requests.

        Args:
            paths: GOV.UK paths

        Returns:
            Decoded content items in the order of `paths`

        Raises:
            ValidationError: If any path is empty (no request is made)
        """
        paths = list(paths)
        # Validate everything before the first request goes out
        for path in paths:
            normalize_path(path)

        logger.debug(f"Fetching {len(paths)} content items")
        return list(await asyncio.gather(*(self.get(path) for path in paths)))
