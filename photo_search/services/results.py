"""In-memory store of search result sets, newest first."""

from __future__ import annotations

from typing import Iterator

from photo_search.domain.models import IndexPath, Photo, SearchResultSet
from photo_search.services.exceptions import ResultIndexError


class SearchResultStore:
    """Sections of photos as rendered by a grid, one section per search.

    Callers serialise access; nothing here is locked.
    """

    def __init__(self) -> None:
        self._sets: list[SearchResultSet] = []

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[SearchResultSet]:
        return iter(self._sets)

    def prepend(self, result_set: SearchResultSet) -> None:
        self._sets.insert(0, result_set)

    def section_count(self) -> int:
        return len(self._sets)

    def section(self, section: int) -> SearchResultSet:
        self._check_section(section)
        return self._sets[section]

    def item_count(self, section: int) -> int:
        return len(self.section(section).photos)

    def item(self, section: int, index: int) -> Photo:
        photos = self.section(section).photos
        self._check_index(section, index, len(photos))
        return photos[index]

    def locate(self, photo: Photo) -> IndexPath | None:
        """First position holding this exact photo object, newest section first."""

        for section, result_set in enumerate(self._sets):
            for index, candidate in enumerate(result_set.photos):
                if candidate is photo:
                    return IndexPath(section, index)
        return None

    def remove_item(self, section: int, index: int) -> Photo:
        photos = self.section(section).photos
        self._check_index(section, index, len(photos))
        return photos.pop(index)

    def insert_item(self, photo: Photo, section: int, index: int) -> None:
        photos = self.section(section).photos
        self._check_index(section, index, len(photos) + 1)
        photos.insert(index, photo)

    def move_item(
        self,
        from_section: int,
        from_index: int,
        to_section: int,
        to_index: int,
    ) -> Photo:
        """Move one photo, leaving every other photo in its relative order.

        ``to_index`` addresses the destination after the photo has been taken
        out, so moving within a section accepts ``0..len - 1``.
        """

        source = self.section(from_section).photos
        self._check_index(from_section, from_index, len(source))
        destination = self.section(to_section).photos
        limit = len(destination) if to_section == from_section else len(destination) + 1
        self._check_index(to_section, to_index, limit)

        photo = source.pop(from_index)
        destination.insert(to_index, photo)
        return photo

    def _check_section(self, section: int) -> None:
        if not 0 <= section < len(self._sets):
            raise ResultIndexError(
                f"Section {section} out of range (have {len(self._sets)})"
            )

    @staticmethod
    def _check_index(section: int, index: int, limit: int) -> None:
        if not 0 <= index < limit:
            raise ResultIndexError(
                f"Item {index} out of range for section {section} (limit {limit})"
            )


__all__ = ["SearchResultStore"]
