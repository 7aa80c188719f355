"""Photo records shared by the search client, the result store and browsing state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from photo_search.config import DEFAULT_IMAGE_URL_TEMPLATE


class PhotoDescriptor(BaseModel):
    """The four fields needed to build any image URL for a hosted photo."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    id: str
    farm_id: int = Field(alias="farm")
    server_id: str = Field(alias="server")
    secret: str

    @classmethod
    def from_api(cls, entry: Any) -> PhotoDescriptor | None:
        """Map one ``photos.photo`` entry, or ``None`` if it is unusable."""

        if not isinstance(entry, Mapping):
            return None
        try:
            return cls.model_validate(
                {key: entry[key] for key in ("id", "farm", "server", "secret")}
            )
        except (KeyError, ValidationError):
            return None

    def image_url(self, size: str, template: str = DEFAULT_IMAGE_URL_TEMPLATE) -> str:
        return template.format(
            farm=self.farm_id,
            server=self.server_id,
            id=self.id,
            secret=self.secret,
            size=size,
        )


@dataclass(frozen=True, slots=True)
class ImageBuffer:
    data: bytes = field(repr=False)
    width: int
    height: int
    format: str

    @property
    def media_type(self) -> str:
        return f"image/{self.format.lower()}"


@dataclass(eq=False, slots=True)
class Photo:
    """A descriptor plus images that are filled in lazily, each at most once."""

    descriptor: PhotoDescriptor
    thumbnail: ImageBuffer | None = None
    large_image: ImageBuffer | None = None

    def attach_thumbnail(self, image: ImageBuffer) -> None:
        if self.thumbnail is not None:
            raise ValueError(f"Thumbnail already set for photo {self.descriptor.id}")
        self.thumbnail = image

    def attach_large_image(self, image: ImageBuffer) -> None:
        if self.large_image is not None:
            raise ValueError(f"Large image already set for photo {self.descriptor.id}")
        self.large_image = image


@dataclass(slots=True)
class SearchResultSet:
    search_term: str
    photos: list[Photo] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.photos)


class IndexPath(NamedTuple):
    section: int
    item: int


__all__ = [
    "PhotoDescriptor",
    "ImageBuffer",
    "Photo",
    "SearchResultSet",
    "IndexPath",
]
