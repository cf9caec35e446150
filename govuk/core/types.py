"""
Core data types for GOV.UK API access.

This module defines the structured search query used by the Search API
client and the content path normalisation shared by both clients.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .config import PAGINATION
from .errors import (
    FIELDS_NOT_LIST_MESSAGE,
    NO_CONTENT_PATH_MESSAGE,
    ValidationError,
)


class FacetCategory(str, Enum):
    """Faceted search parameter prefixes understood by the Search API."""

    FILTER = "filter"
    REJECT = "reject"
    AGGREGATE = "aggregate"
    FACET = "facet"


# Plain (non-facet) search parameters, in the order they are sent
SEARCH_FIELDS = ("q", "count", "start", "order", "fields")


def normalize_path(path: Optional[str]) -> str:
    """
    Normalise a content item path for URL construction.

    Args:
        path: Path such as "/register-to-vote" or "register-to-vote"

    Returns:
        The path with a single leading "/" removed

    Raises:
        ValidationError: If the path is empty or missing
    """
    if not path or not isinstance(path, str):
        raise ValidationError(NO_CONTENT_PATH_MESSAGE)
    trimmed = path[1:] if path.startswith("/") else path
    if not trimmed:
        raise ValidationError(NO_CONTENT_PATH_MESSAGE)
    return trimmed


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class SearchQuery:
    """
    Search API query.

    Attributes:
        q: Free text search query
        count: Number of results to return (0 to 1000)
        start: Position to start from
        order: Sort order, e.g. "-public_timestamp"
        fields: Properties to return for each search result
        facets: Faceted parameters keyed by category then field name,
            e.g. {FacetCategory.FILTER: {"format": "guide"}}
    """

    q: Optional[str] = None
    count: Optional[int] = None
    start: Optional[int] = None
    order: Optional[str] = None
    fields: Optional[List[str]] = None
    facets: Dict[FacetCategory, Dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.fields is not None:
            if isinstance(self.fields, (str, bytes)) or not isinstance(self.fields, (list, tuple)):
                raise ValidationError(FIELDS_NOT_LIST_MESSAGE)
            self.fields = list(self.fields)

        max_page_size = PAGINATION["MAX_PAGE_SIZE"]
        if self.count is not None and (
            isinstance(self.count, bool)
            or not isinstance(self.count, int)
            or not 0 <= self.count <= max_page_size
        ):
            raise ValidationError(f"Count parameter must be between 0 and {max_page_size}")

        if self.start is not None and (
            isinstance(self.start, bool) or not isinstance(self.start, int) or self.start < 0
        ):
            raise ValidationError("Start parameter must be a non-negative integer")

        facets: Dict[FacetCategory, Dict[str, Any]] = {}
        for category, values in self.facets.items():
            try:
                category = FacetCategory(category)
            except ValueError:
                raise ValidationError(f"Unknown search option: {category}") from None
            if not isinstance(values, Mapping):
                raise ValidationError(f"Facet values for {category.value} must be a mapping")
            facets.setdefault(category, {}).update(values)
        self.facets = facets

    @classmethod
    def from_options(
        cls, options: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> "SearchQuery":
        """
        Build a query from flat Search API style options.

        Accepts the plain parameters ("q", "count", "start", "order",
        "fields"), prefixed facet keys such as "filter_format" and nested
        facet mappings such as filter={"format": "guide"}. Options set to
        None are ignored.

        Raises:
            ValidationError: If an option is not a known search parameter
        """
        merged: Dict[str, Any] = dict(options or {})
        merged.update(kwargs)

        values: Dict[str, Any] = {}
        facets: Dict[FacetCategory, Dict[str, Any]] = {}
        for key, value in merged.items():
            if value is None:
                continue
            if key in SEARCH_FIELDS:
                values[key] = value
                continue

            prefix, _, name = key.partition("_")
            try:
                category = FacetCategory(prefix)
            except ValueError:
                raise ValidationError(f"Unknown search option: {key}") from None

            if name:
                facets.setdefault(category, {})[name] = value
            elif isinstance(value, Mapping):
                facets.setdefault(category, {}).update(value)
            else:
                raise ValidationError(f"Unknown search option: {key}")

        return cls(facets=facets, **values)

    @classmethod
    def from_text(cls, text: str, **options: Any) -> "SearchQuery":
        """Lift a bare text query (plus optional options) into a SearchQuery."""
        options["q"] = text
        return cls.from_options(options)

    @classmethod
    def build(
        cls, query: Union[str, "SearchQuery", Mapping[str, Any], None] = None, **options: Any
    ) -> "SearchQuery":
        """
        Build a query from the argument forms accepted by SearchClient methods.

        Args:
            query: Text query, SearchQuery, option mapping or None
            **options: Additional options, applied over `query`

        Returns:
            SearchQuery instance
        """
        if query is None:
            return cls.from_options(options)
        if isinstance(query, str):
            return cls.from_text(query, **options)
        if isinstance(query, SearchQuery):
            return query.merge(cls.from_options(options)) if options else query
        if isinstance(query, Mapping):
            return cls.from_options(query, **options)
        raise ValidationError(f"Unsupported search query type: {type(query).__name__}")

    def merge(self, other: "SearchQuery") -> "SearchQuery":
        """
        Return a new query with `other` applied over this one.

        Plain parameters set on `other` win; facet fields are merged per
        category with `other` winning on conflicts.
        """
        values = {
            name: getattr(other, name) if getattr(other, name) is not None else getattr(self, name)
            for name in SEARCH_FIELDS
        }
        facets = {category: dict(fields) for category, fields in self.facets.items()}
        for category, fields in other.facets.items():
            facets.setdefault(category, {}).update(fields)
        return SearchQuery(facets=facets, **values)

    def with_page(self, start: int, count: int) -> "SearchQuery":
        """Return a copy of this query scoped to one page."""
        return dataclasses.replace(self, start=start, count=count)

    def is_empty(self) -> bool:
        """True when no parameter at all is set."""
        if any(getattr(self, name) is not None for name in SEARCH_FIELDS):
            return False
        return not any(self.facets.values())

    def to_params(self) -> List[Tuple[str, str]]:
        """
        Convert to an ordered list of query string parameters.

        Fields and list facet values are sent as repeated parameters.
        """
        params: List[Tuple[str, str]] = []
        if self.q is not None:
            params.append(("q", self.q))
        if self.count is not None:
            params.append(("count", _format_value(self.count)))
        if self.start is not None:
            params.append(("start", _format_value(self.start)))
        if self.order is not None:
            params.append(("order", self.order))
        for name in self.fields or []:
            params.append(("fields", name))

        # https://docs.publishing.service.gov.uk/repos/search-api/using-the-search-api.html#using-faceted-search-parameters
        for category, fields in self.facets.items():
            for name, value in fields.items():
                key = f"{category.value}_{name}"
                if isinstance(value, (list, tuple, set)):
                    params.extend((key, _format_value(item)) for item in value)
                else:
                    params.append((key, _format_value(value)))
        return params
