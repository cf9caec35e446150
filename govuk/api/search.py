"""
GOV.UK Search API client.

Queries the site search index:
https://docs.publishing.service.gov.uk/repos/search-api/using-the-search-api.html

Every query method accepts a text query, a SearchQuery or nothing, plus
Search API options as keyword arguments, e.g.

    client = SearchClient(fields=["title", "link"], filter_format="guide")
    results = await client.get_all("Register to vote", order="-public_timestamp")
"""

import dataclasses
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import urlencode

from ..core.config import API, PAGINATION
from ..core.errors import NO_SEARCH_QUERY_MESSAGE, ValidationError
from ..core.logging import get_logger
from ..core.types import FacetCategory, SearchQuery, normalize_path
from ..utils.network.executor import RequestExecutor
from ..utils.network.pagination import PaginatedResults
from .events import DataCallback, DataObservers


logger = get_logger(__name__)

QueryArg = Union[str, SearchQuery, Mapping[str, Any], None]


class SearchClient:
    """
    Client for the GOV.UK Search API.

    Attributes:
        defaults: Query applied under every call; per-call values win
        executor: Executor used for every request
        base_url: Site root, e.g. "https://www.gov.uk"
    """

    def __init__(
        self,
        defaults: QueryArg = None,
        executor: Optional[RequestExecutor] = None,
        base_url: Optional[str] = None,
        **options: Any,
    ):
        """
        Initialize the Search API client.

        Args:
            defaults: Default query (text, SearchQuery or option mapping)
            executor: Request executor (default: shared rate limiter, default retries)
            base_url: Site root (default: from config)
            **options: Default Search API options
        """
        self.defaults = SearchQuery.build(defaults, **options)
        self.executor = executor or RequestExecutor()
        self.base_url = (base_url or API["BASE_URL"]).rstrip("/")
        self.observers = DataObservers()

        if not self.defaults.is_empty():
            logger.debug(f"Default search query: {self.defaults}")

    @classmethod
    def for_query(cls, text: str, **options: Any) -> "SearchClient":
        """Create a client whose default query is `text`."""
        return cls(SearchQuery.from_text(text, **options))

    def subscribe(self, callback: DataCallback) -> Callable[[], None]:
        """Register a callback receiving each page of results; returns an unsubscribe function."""
        return self.observers.subscribe(callback)

    def _resolve(self, query: QueryArg, options: Dict[str, Any]) -> SearchQuery:
        return self.defaults.merge(SearchQuery.build(query, **options))

    def url_for(self, query: SearchQuery) -> str:
        """
        Build the Search API URL for a query.

        Raises:
            ValidationError: If the query is empty
        """
        if query.is_empty():
            raise ValidationError(NO_SEARCH_QUERY_MESSAGE)
        return f"{self.base_url}{API['SEARCH_PATH']}?{urlencode(query.to_params())}"

    async def _get(self, query: SearchQuery) -> Dict[str, Any]:
        url = self.url_for(query)
        logger.debug(f"Search options: {query}")
        response = await self.executor.execute(url)
        return response if isinstance(response, dict) else {}

    async def _get_page(self, query: SearchQuery) -> List[Any]:
        response = await self._get(query)
        results = response.get("results") or []
        self.observers.emit(results)
        return results

    async def _total(self, query: SearchQuery) -> Optional[int]:
        if query.is_empty():
            raise ValidationError(NO_SEARCH_QUERY_MESSAGE)
        response = await self._get(dataclasses.replace(query, count=0))
        return response.get("total")

    async def get(self, query: QueryArg = None, **options: Any) -> List[Any]:
        """
        Get the first page of results for a query.

        Args:
            query: Text query, SearchQuery or option mapping
            **options: Search API options for this call

        Returns:
            List of search results (empty when the response has none)

        Raises:
            ValidationError: If the resolved query is empty
        """
        return await self._get_page(self._resolve(query, options))

    async def get_all(
        self, query: QueryArg = None, total: Optional[int] = None, **options: Any
    ) -> List[Any]:
        """
        Get every page of results for a query.

        Pages are fetched concurrently and returned in result order. The page
        size is the query's count, or 1000 when none is given.

        Args:
            query: Text query, SearchQuery or option mapping
            total: Number of results to fetch; skips the count probe when given
            **options: Search API options for this call

        Returns:
            Flat list of search results across all pages

        Raises:
            ValidationError: If the resolved query is empty (before any request)
        """
        resolved = self._resolve(query, options)
        if resolved.is_empty():
            raise ValidationError(NO_SEARCH_QUERY_MESSAGE)

        page_size = resolved.count or PAGINATION["MAX_PAGE_SIZE"]

        async def fetch_total() -> Optional[int]:
            return await self._total(resolved)

        async def fetch_page(start: int, count: int) -> List[Any]:
            return await self._get_page(resolved.with_page(start, count))

        paginator = PaginatedResults(fetch_total, fetch_page, page_size=page_size)
        return await paginator.fetch_all(total=total)

    async def total(self, query: QueryArg = None, **options: Any) -> Optional[int]:
        """
        Get the number of results for a query.

        Returns:
            Total reported by the API, or None when the response omits it

        Raises:
            ValidationError: If the resolved query is empty
        """
        return await self._total(self._resolve(query, options))

    async def info(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Get the search metadata for a content item.

        Args:
            path: GOV.UK path, with or without the leading "/"

        Returns:
            First search result linking to the path, or None

        Raises:
            ValidationError: If the path is empty
        """
        link = "/" + normalize_path(path)
        query = SearchQuery(count=1, facets={FacetCategory.FILTER: {"link": link}})
        results = (await self._get(query)).get("results") or []
        return results[0] if results else None

    async def facets(self, field: str) -> List[Dict[str, Any]]:
        """
        Get every option for a facet field, e.g. all organisations.

        Args:
            field: Facet field name, e.g. "organisations"

        Returns:
            List of facet options with their document counts

        Raises:
            ValidationError: If the field is empty
        """
        if not field:
            raise ValidationError("No facet field")
        query = SearchQuery(
            count=0, facets={FacetCategory.FACET: {field: PAGINATION["FACET_OPTION_LIMIT"]}}
        )
        response = await self._get(query)
        return ((response.get("facets") or {}).get(field) or {}).get("options") or []
