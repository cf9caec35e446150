"""
Unit tests for SearchClient.

The echo fetcher returns each request URL as the only search result, so
the assertions read as the exact URLs the client requested.
"""

from unittest.mock import AsyncMock

import pytest

from govuk.api.search import SearchClient
from govuk.core.errors import ValidationError
from govuk.core.types import SearchQuery
from tests.fixtures.async_fixtures import RecordingFetcher, make_executor


SEARCH_URL = "https://www.gov.uk/api/search.json"


class TestSearchClientDefaults:
    """Tests for default queries and options."""

    @pytest.mark.asyncio
    async def test_default_query(self, echo_executor):
        client = SearchClient("Register to vote", executor=echo_executor)
        assert await client.get() == [f"{SEARCH_URL}?q=Register+to+vote"]

    @pytest.mark.asyncio
    async def test_default_options(self, echo_executor):
        client = SearchClient({"filter_format": "guide"}, executor=echo_executor)
        assert await client.get() == [f"{SEARCH_URL}?filter_format=guide"]

    @pytest.mark.asyncio
    async def test_default_options_as_keywords(self, echo_executor):
        client = SearchClient(executor=echo_executor, fields=["title"], filter={"format": "guide"})
        assert await client.get("Micro pigs") == [
            f"{SEARCH_URL}?q=Micro+pigs&fields=title&filter_format=guide"
        ]

    @pytest.mark.asyncio
    async def test_for_query(self, echo_executor):
        client = SearchClient.for_query("Register to vote", count=2)
        client.executor = echo_executor
        assert await client.get() == [f"{SEARCH_URL}?q=Register+to+vote&count=2"]

    @pytest.mark.asyncio
    async def test_per_call_options_win(self, echo_executor):
        client = SearchClient("Register to vote", executor=echo_executor, count=10)
        assert await client.get(count=50) == [f"{SEARCH_URL}?q=Register+to+vote&count=50"]
        assert await client.get("Micro pigs") == [f"{SEARCH_URL}?q=Micro+pigs&count=10"]


class TestSearchClientGet:
    """Tests for SearchClient.get."""

    @pytest.mark.asyncio
    async def test_empty_query_raises_without_request(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        with pytest.raises(ValidationError, match="No search query"):
            await client.get()

        assert echo_fetcher.urls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "query, options, expected",
        [
            ("Register to vote", {}, "q=Register+to+vote"),
            ({"q": "Register to vote"}, {}, "q=Register+to+vote"),
            (SearchQuery(q="Register to vote"), {}, "q=Register+to+vote"),
            ("Register to vote", {"count": 50}, "q=Register+to+vote&count=50"),
            ("Register to vote", {"start": 50}, "q=Register+to+vote&start=50"),
            ("Register to vote", {"order": "asc"}, "q=Register+to+vote&order=asc"),
            (
                "Register to vote",
                {"fields": ["title", "link"]},
                "q=Register+to+vote&fields=title&fields=link",
            ),
            (
                {"filter_format": "statistics_announcement"},
                {},
                "filter_format=statistics_announcement",
            ),
            (
                {"reject_format": "statistics_announcement"},
                {},
                "reject_format=statistics_announcement",
            ),
            (
                {"aggregate_format": "statistics_announcement"},
                {},
                "aggregate_format=statistics_announcement",
            ),
            ({"facet_organisations": 1000, "count": 0}, {}, "count=0&facet_organisations=1000"),
        ],
    )
    async def test_query_parameters(self, echo_executor, query, options, expected):
        client = SearchClient(executor=echo_executor)
        assert await client.get(query, **options) == [f"{SEARCH_URL}?{expected}"]

    @pytest.mark.asyncio
    async def test_fields_must_be_a_list(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        with pytest.raises(ValidationError, match="Fields parameter must be a list"):
            await client.get("Register to vote", fields="string")

        assert echo_fetcher.urls == []

    @pytest.mark.asyncio
    async def test_unknown_option(self, echo_executor):
        client = SearchClient(executor=echo_executor)
        with pytest.raises(ValidationError, match="Unknown search option: sort"):
            await client.get("Register to vote", sort="asc")

    @pytest.mark.asyncio
    async def test_missing_results_give_empty_list(self):
        client = SearchClient(executor=make_executor(RecordingFetcher(respond=lambda url: {})))
        assert await client.get(aggregate_format="statistics_announcement") == []

    @pytest.mark.asyncio
    async def test_each_page_is_emitted(self, echo_executor):
        queries = ["Register to vote", "Micro pig", "Equality Act 2010"]
        client = SearchClient(executor=echo_executor)
        received = []
        client.subscribe(received.append)

        for query in queries:
            await client.get(query)

        assert received == [
            [f"{SEARCH_URL}?q=Register+to+vote"],
            [f"{SEARCH_URL}?q=Micro+pig"],
            [f"{SEARCH_URL}?q=Equality+Act+2010"],
        ]


class TestSearchClientGetAll:
    """Tests for SearchClient.get_all."""

    @pytest.mark.asyncio
    async def test_empty_query_raises_before_probe(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        with pytest.raises(ValidationError, match="No search query"):
            await client.get_all()

        assert echo_fetcher.urls == []

    @pytest.mark.asyncio
    async def test_no_matching_items(self):
        fetcher = RecordingFetcher(total=0)
        client = SearchClient(executor=make_executor(fetcher))

        assert await client.get_all("Something that results no items") == []
        assert fetcher.urls == [f"{SEARCH_URL}?q=Something+that+results+no+items&count=0"]

    @pytest.mark.asyncio
    async def test_all_pages_in_offset_order(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        results = await client.get_all("Micro pigs")

        assert results == [
            f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=0",
            f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=1000",
            f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=2000",
            f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=3000",
            f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=4000",
        ]
        # One count probe plus five pages
        assert echo_fetcher.urls[0] == f"{SEARCH_URL}?q=Micro+pigs&count=0"
        assert len(echo_fetcher.urls) == 6

    @pytest.mark.asyncio
    async def test_default_count_sets_page_size(self, echo_executor):
        client = SearchClient({"count": 990}, executor=echo_executor)

        results = await client.get_all("Micro pigs")

        assert results == [
            f"{SEARCH_URL}?q=Micro+pigs&count=990&start={start}"
            for start in (0, 990, 1980, 2970, 3960, 4950)
        ]

    @pytest.mark.asyncio
    async def test_known_total_skips_probe(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        results = await client.get_all("Micro pigs", total=1500)

        assert len(results) == 2
        assert all("count=0" not in url for url in echo_fetcher.urls)

    @pytest.mark.asyncio
    async def test_pages_are_emitted(self, echo_executor):
        client = SearchClient(executor=echo_executor)
        received = []
        client.subscribe(received.append)

        await client.get_all("Micro pigs", total=2000)

        assert sorted(received) == [
            [f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=0"],
            [f"{SEARCH_URL}?q=Micro+pigs&count=1000&start=1000"],
        ]


class TestSearchClientMetadata:
    """Tests for total, info and facets."""

    @pytest.mark.asyncio
    async def test_total_empty_query_raises_without_request(self, echo_executor, echo_fetcher):
        client = SearchClient(executor=echo_executor)

        with pytest.raises(ValidationError, match="No search query"):
            await client.total()

        assert echo_fetcher.urls == []

    @pytest.mark.asyncio
    async def test_total(self):
        fetcher = RecordingFetcher(total=1234)
        client = SearchClient(executor=make_executor(fetcher))

        assert await client.total("Micro pigs") == 1234
        assert fetcher.urls == [f"{SEARCH_URL}?q=Micro+pigs&count=0"]

    @pytest.mark.asyncio
    async def test_total_missing_from_response(self):
        client = SearchClient(executor=make_executor(RecordingFetcher(respond=lambda url: {})))
        assert await client.total("Micro pigs") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["register-to-vote", "/register-to-vote"])
    async def test_info(self, echo_executor, path):
        client = SearchClient(executor=echo_executor)
        assert await client.info(path) == (
            f"{SEARCH_URL}?count=1&filter_link=%2Fregister-to-vote"
        )

    @pytest.mark.asyncio
    async def test_info_ignores_client_defaults(self, echo_executor):
        client = SearchClient("Micro pigs", executor=echo_executor, fields=["title"])
        assert await client.info("/register-to-vote") == (
            f"{SEARCH_URL}?count=1&filter_link=%2Fregister-to-vote"
        )

    @pytest.mark.asyncio
    async def test_info_without_match(self):
        client = SearchClient(
            executor=make_executor(RecordingFetcher(respond=lambda url: {"results": []}))
        )
        assert await client.info("/no-such-page") is None

    @pytest.mark.asyncio
    async def test_info_empty_path(self, echo_executor):
        client = SearchClient(executor=echo_executor)
        with pytest.raises(ValidationError, match="No content item path"):
            await client.info("")

    @pytest.mark.asyncio
    async def test_facets(self, facets_response):
        fetcher = RecordingFetcher(respond=lambda url: facets_response)
        client = SearchClient(executor=make_executor(fetcher))

        options = await client.facets("format")

        assert options == facets_response["facets"]["format"]["options"]
        assert fetcher.urls == [f"{SEARCH_URL}?count=0&facet_format=10000"]

    @pytest.mark.asyncio
    async def test_facets_missing_field(self, search_response):
        client = SearchClient(
            executor=make_executor(RecordingFetcher(respond=lambda url: search_response))
        )
        assert await client.facets("organisations") == []

    @pytest.mark.asyncio
    async def test_metadata_calls_do_not_emit(self, echo_executor):
        client = SearchClient(executor=echo_executor)
        callback = AsyncMock()
        client.subscribe(callback)

        await client.info("/register-to-vote")
        await client.facets("format")

        callback.assert_not_called()
