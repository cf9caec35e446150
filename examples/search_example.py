#!/usr/bin/env python3
"""
Example of querying the GOV.UK Search and Content APIs.

This example shows a single page search, a result count, item metadata,
facet options and a content item lookup.
"""

import asyncio
import logging

from govuk import ContentClient, SearchClient, close_shared_session

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Main entry point for the search example."""
    search = SearchClient(fields=["title", "link", "public_timestamp"])
    content = ContentClient()

    try:
        # Example 1: First page of results, newest first
        results = await search.get("Micro pigs", count=5, order="-public_timestamp")
        print("\n=== LATEST RESULTS ===")
        for result in results:
            print(f"{result.get('public_timestamp', 'N/A')}: {result['title']} ({result['link']})")

        # Example 2: How many guides match
        total = await search.total("Micro pigs", filter_format="guide")
        print(f"\nGuides matching \"Micro pigs\": {total}")

        # Example 3: Search metadata for a known page
        info = await search.info("/register-to-vote")
        print("\n=== SEARCH METADATA ===")
        print(info)

        # Example 4: The ten most common formats
        formats = await search.facets("format")
        print("\n=== FORMATS ===")
        for option in formats[:10]:
            print(f"{option['value'].get('slug')}: {option['documents']}")

        # Example 5: The content item behind a page
        item = await content.get("/register-to-vote")
        print("\n=== CONTENT ITEM ===")
        print(f"{item['title']}: {item.get('description')}")
    finally:
        await close_shared_session()


if __name__ == "__main__":
    asyncio.run(main())
