"""Flickr photo search: one API call, then one thumbnail download per hit."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from photo_search.config import FlickrSettings
from photo_search.domain.models import ImageBuffer, Photo, PhotoDescriptor, SearchResultSet
from photo_search.logging import logger
from photo_search.services.exceptions import (
    ApiError,
    FetchError,
    InvalidQueryError,
    MalformedResponseError,
    TransportError,
)
from photo_search.utils.images import ImageDecodeError, decode_image

SEARCH_METHOD = "flickr.photos.search"


def escape_search_term(term: str) -> str:
    """Percent-encode every UTF-8 byte of ``term`` except ASCII letters and digits."""

    try:
        raw = term.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidQueryError(f"Search term is not valid text: {term!r}") from exc
    escaped = "".join(
        chr(byte) if chr(byte).isascii() and chr(byte).isalnum() else f"%{byte:02X}"
        for byte in raw
    )
    if not escaped:
        raise InvalidQueryError("Search term must not be empty.")
    return escaped


class SearchClient:
    """Talks to the Flickr REST API and the static image hosts."""

    def __init__(self, http_client: httpx.AsyncClient, settings: FlickrSettings) -> None:
        self._client = http_client
        self._settings = settings

    def search_url(self, term: str) -> str:
        escaped = escape_search_term(term)
        api_key = self._settings.api_key.get_secret_value()
        return (
            f"{self._settings.api_url}?method={SEARCH_METHOD}&api_key={api_key}"
            f"&text={escaped}&per_page={self._settings.per_page}"
            "&format=json&nojsoncallback=1"
        )

    def thumbnail_url(self, descriptor: PhotoDescriptor) -> str:
        return descriptor.image_url(
            self._settings.thumbnail_size, self._settings.image_url_template
        )

    def large_image_url(self, descriptor: PhotoDescriptor) -> str:
        return descriptor.image_url(
            self._settings.large_image_size, self._settings.image_url_template
        )

    async def search(self, term: str) -> SearchResultSet:
        url = self.search_url(term)
        logger.info("search_started", term=term)
        try:
            response = await self._client.get(url, timeout=self._timeout())
        except httpx.InvalidURL as exc:
            raise InvalidQueryError(f"Cannot build search URL: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("search_transport_failed", term=term, error=str(exc))
            raise TransportError(exc) from exc

        entries = self._parse_envelope(response)
        descriptors: list[PhotoDescriptor] = []
        for position, entry in enumerate(entries):
            descriptor = PhotoDescriptor.from_api(entry)
            if descriptor is None:
                logger.debug("photo_entry_skipped", term=term, position=position)
                continue
            descriptors.append(descriptor)

        loaded = await self._load_thumbnails(descriptors)
        photos = [photo for photo in loaded if photo is not None]
        logger.info(
            "search_finished",
            term=term,
            received=len(entries),
            delivered=len(photos),
        )
        return SearchResultSet(search_term=term, photos=photos)

    async def fetch_large_image(self, descriptor: PhotoDescriptor) -> ImageBuffer:
        try:
            url = self.large_image_url(descriptor)
        except (KeyError, IndexError, ValueError) as exc:
            raise FetchError(None, exc) from exc
        try:
            return await self._download_image(url)
        except (httpx.HTTPError, httpx.InvalidURL, ImageDecodeError) as exc:
            logger.warning("large_image_fetch_failed", photo_id=descriptor.id, error=str(exc))
            raise FetchError(url, exc) from exc

    def _parse_envelope(self, response: httpx.Response) -> list[Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Search response is not JSON.") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("stat"), str):
            raise MalformedResponseError("Search response has no 'stat' field.")

        stat = payload["stat"]
        if stat == "fail":
            code = payload.get("code")
            message = payload.get("message")
            raise ApiError(
                code=code if isinstance(code, int) else None,
                api_message=message if isinstance(message, str) else None,
            )
        if stat != "ok":
            raise MalformedResponseError(f"Unexpected 'stat' value: {stat!r}")

        container = payload.get("photos")
        entries = container.get("photo") if isinstance(container, dict) else None
        if not isinstance(entries, list):
            raise MalformedResponseError("Search response has no 'photos.photo' list.")
        return entries

    async def _load_thumbnails(self, descriptors: list[PhotoDescriptor]) -> list[Photo | None]:
        concurrency = self._settings.thumbnail_concurrency
        if concurrency <= 1:
            return [await self._load_thumbnail(descriptor) for descriptor in descriptors]

        semaphore = asyncio.Semaphore(concurrency)

        async def _bounded(descriptor: PhotoDescriptor) -> Photo | None:
            async with semaphore:
                return await self._load_thumbnail(descriptor)

        return list(await asyncio.gather(*(_bounded(d) for d in descriptors)))

    async def _load_thumbnail(self, descriptor: PhotoDescriptor) -> Photo | None:
        url: str | None = None
        try:
            url = self.thumbnail_url(descriptor)
            image = await self._download_image(url)
        except (
            KeyError,
            IndexError,
            ValueError,
            httpx.HTTPError,
            httpx.InvalidURL,
        ) as exc:
            logger.warning(
                "thumbnail_dropped",
                photo_id=descriptor.id,
                url=url,
                error=str(exc),
            )
            return None
        photo = Photo(descriptor=descriptor)
        photo.attach_thumbnail(image)
        return photo

    async def _download_image(self, url: str) -> ImageBuffer:
        response = await self._client.get(url, timeout=self._timeout())
        response.raise_for_status()
        return decode_image(response.content)

    def _timeout(self):
        timeout = self._settings.request_timeout_seconds
        return httpx.USE_CLIENT_DEFAULT if timeout is None else timeout


__all__ = ["SEARCH_METHOD", "SearchClient", "escape_search_term"]
