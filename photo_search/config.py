"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.flickr.com/services/rest/"
DEFAULT_IMAGE_URL_TEMPLATE = (
    "https://farm{farm}.staticflickr.com/{server}/{id}_{secret}_{size}.jpg"
)


class FlickrSettings(BaseModel):
    api_key: SecretStr
    api_url: HttpUrl = Field(default=DEFAULT_API_URL)
    per_page: int = Field(default=20, ge=1, le=500)
    image_url_template: str = Field(
        default=DEFAULT_IMAGE_URL_TEMPLATE,
        description="Static image URL pattern filled with farm, server, id, secret and size.",
    )
    thumbnail_size: str = Field(default="m", min_length=1)
    large_image_size: str = Field(default="b", min_length=1)
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout; None keeps the HTTP client's default.",
    )
    thumbnail_concurrency: int = Field(default=1, ge=1, le=20)

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PhotoSearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PHOTO_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    flickr: FlickrSettings


@lru_cache
def get_settings() -> PhotoSearchSettings:
    """Return cached settings instance."""

    return PhotoSearchSettings()  # type: ignore[call-arg]


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_IMAGE_URL_TEMPLATE",
    "FlickrSettings",
    "PhotoSearchSettings",
    "get_settings",
]
