"""Application entrypoint."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence

import httpx

from photo_search.config import get_settings
from photo_search.logging import configure_logging, logger
from photo_search.services.exceptions import SearchError
from photo_search.services.gallery import PhotoGallery
from photo_search.services.results import SearchResultStore
from photo_search.services.search import SearchClient


async def main(terms: Sequence[str] | None = None) -> SearchResultStore:
    settings = get_settings()
    configure_logging(settings.log_level)
    if terms is None:
        terms = sys.argv[1:]

    logger.info("photo_search_starting", environment=settings.environment, terms=list(terms))
    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        gallery = PhotoGallery(SearchClient(http_client, settings.flickr))
        for term in terms:
            try:
                await gallery.search(term)
            except SearchError:
                # Already logged by the gallery; keep going with the next term.
                continue

    logger.info(
        "photo_search_finished",
        sections=[
            {"term": result_set.search_term, "photos": len(result_set.photos)}
            for result_set in gallery.store
        ],
    )
    return gallery.store


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
