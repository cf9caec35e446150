#!/usr/bin/env python3
"""
Example of streaming employment tribunal decisions into a JSON file.

This example searches GOV.UK for employment tribunal decisions matching a
query, then fetches every matching content item concurrently and writes
each one to a JSON array file as soon as it arrives.

Usage:
    python examples/get_tribunal_decisions.py [query] [output_file]
"""

import asyncio
import json
import logging
import sys

from govuk import ContentClient, SearchClient, close_shared_session

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class JSONArrayWriter:
    """Write objects to a file as one JSON array, one object per line."""

    def __init__(self, file):
        self.file = file
        self.count = 0

    def write(self, item):
        self.file.write("[" if self.count == 0 else ",\n")
        self.file.write(json.dumps(item))
        self.count += 1

    def close(self):
        if self.count == 0:
            self.file.write("[")
        self.file.write("]\n")


async def get_tribunal_decisions(query, file_path):
    """Search for tribunal decisions and stream their content items to file_path."""
    search = SearchClient(
        fields=["title", "link"],
        filter={"format": "employment_tribunal_decision"},
    )

    total = await search.total(query)
    logger.info(f"Found {total} items, getting results...")
    search_items = await search.get_all(query, total=total)

    content = ContentClient()
    with open(file_path, "w", encoding="utf-8") as f:
        writer = JSONArrayWriter(f)

        def on_item(content_item):
            writer.write(content_item)
            logger.info(f"{writer.count}: \"{content_item.get('title')}\"")

        content.subscribe(on_item)
        try:
            await content.get_many(item["link"] for item in search_items)
        finally:
            writer.close()

    return writer.count


async def main():
    """Main entry point for the tribunal decisions example."""
    query = sys.argv[1] if len(sys.argv) > 1 else "Potato"
    file_path = sys.argv[2] if len(sys.argv) > 2 else "data.json"

    logger.info(f"Getting tribunal decisions for query \"{query}\"...")
    start_time = asyncio.get_running_loop().time()
    try:
        count = await get_tribunal_decisions(query, file_path)
    finally:
        await close_shared_session()

    end_time = asyncio.get_running_loop().time()
    logger.info(f"Wrote {count} results to \"{file_path}\" in {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    asyncio.run(main())
