"""Shared pytest fixtures for the search client and gallery tests."""

from __future__ import annotations

from io import BytesIO
from typing import Any

import httpx
import pytest
from PIL import Image
from pydantic import SecretStr

from photo_search.config import FlickrSettings

API_HOST = "api.flickr.com"


def _png(width: int = 4, height: int = 3) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), "red").save(buffer, format="PNG")
    return buffer.getvalue()


class FakeFlickr:
    """Serves a canned search envelope and images keyed by photo id."""

    def __init__(self) -> None:
        self.payload: Any = {"photos": {"photo": []}, "stat": "ok"}
        self.raw_body: bytes | None = None
        self.images: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []
        self.png = _png()

    @staticmethod
    def entry(index: int, **overrides: Any) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "id": f"id{index}",
            "owner": "owner@N00",
            "secret": f"s{index}",
            "server": "65535",
            "farm": 66,
            "title": f"photo {index}",
        }
        entry.update(overrides)
        return entry

    def serve_photos(self, entries: list[dict[str, Any]]) -> None:
        self.payload = {
            "photos": {"page": 1, "pages": 1, "perpage": 20, "total": len(entries), "photo": entries},
            "stat": "ok",
        }

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == API_HOST]

    @property
    def image_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host != API_HOST]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == API_HOST:
            if self.raw_body is not None:
                return httpx.Response(200, content=self.raw_body)
            return httpx.Response(200, json=self.payload)

        photo_id = request.url.path.rsplit("/", 1)[-1].split("_", 1)[0]
        if photo_id in self.images:
            return self.images[photo_id]
        return httpx.Response(200, content=self.png, headers={"Content-Type": "image/png"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_flickr() -> FakeFlickr:
    return FakeFlickr()


@pytest.fixture
def png_bytes() -> bytes:
    return _png()


@pytest.fixture
def flickr_settings() -> FlickrSettings:
    return FlickrSettings(api_key=SecretStr("test-key"))
