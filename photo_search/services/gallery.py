"""Search history plus browsing state, as driven by a photo grid."""

from __future__ import annotations

import asyncio
from dataclasses import replace

from photo_search.domain import browsing
from photo_search.domain.browsing import BrowserState, RenderInstructions, Transition
from photo_search.domain.models import ImageBuffer, IndexPath, Photo, SearchResultSet
from photo_search.logging import logger
from photo_search.services.exceptions import SearchError
from photo_search.services.results import SearchResultStore
from photo_search.services.search import SearchClient


class PhotoGallery:
    __slots__ = ("client", "store", "state")

    def __init__(self, client: SearchClient, store: SearchResultStore | None = None) -> None:
        self.client = client
        self.store = store if store is not None else SearchResultStore()
        self.state = BrowserState()

    async def search(self, term: str) -> SearchResultSet:
        """Run a search and put its results in front of the earlier ones.

        A failed search is logged and re-raised; the store is left as it was.
        """

        try:
            results = await self.client.search(term)
        except SearchError as exc:
            logger.warning(
                "search_failed",
                term=term,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            raise
        logger.info("search_completed", term=results.search_term, count=len(results.photos))
        expanded = self._expanded_photo()
        self.store.prepend(results)
        self._follow_expanded(expanded)
        return results

    def start_search(self, term: str) -> asyncio.Task[SearchResultSet]:
        return asyncio.get_running_loop().create_task(self.search(term))

    async def load_large_image(self, path: IndexPath) -> ImageBuffer:
        photo = self.photo(path)
        if photo.large_image is not None:
            return photo.large_image
        image = await self.client.fetch_large_image(photo.descriptor)
        # Another fetch for the same photo may have landed while this one was pending.
        if photo.large_image is None:
            photo.attach_large_image(image)
        return photo.large_image

    def photo(self, path: IndexPath) -> Photo:
        return self.store.item(path.section, path.item)

    def move_item(self, source: IndexPath, destination: IndexPath) -> Photo:
        expanded = self._expanded_photo()
        moved = self.store.move_item(
            source.section, source.item, destination.section, destination.item
        )
        self._follow_expanded(expanded)
        return moved

    def _expanded_photo(self) -> Photo | None:
        path = self.state.expanded
        return self.photo(path) if path is not None else None

    def _follow_expanded(self, photo: Photo | None) -> None:
        # Sections and items shift on prepend/move; keep pointing at the same photo.
        if photo is not None:
            self.state = replace(self.state, expanded=self.store.locate(photo))

    def apply(self, transition: Transition) -> RenderInstructions:
        self.state = transition.state
        return transition.render

    def toggle_expanded(self, path: IndexPath) -> RenderInstructions:
        return self.apply(browsing.toggle_expanded(self.state, path, self.photo(path)))

    def toggle_sharing(self) -> RenderInstructions:
        return self.apply(browsing.set_sharing(self.state, not self.state.sharing))

    def select(self, path: IndexPath) -> RenderInstructions:
        return self.apply(browsing.select_photo(self.state, self.photo(path)))

    def deselect(self, path: IndexPath) -> RenderInstructions:
        return self.apply(browsing.deselect_photo(self.state, self.photo(path)))

    def share(self) -> RenderInstructions:
        return self.apply(
            browsing.share_pressed(self.state, has_results=len(self.store) > 0)
        )

    def share_finished(self) -> RenderInstructions:
        return self.apply(browsing.share_finished(self.state))


__all__ = ["PhotoGallery"]
