"""Settings loading from environment variables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from photo_search.config import PhotoSearchSettings, get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "PHOTO_SEARCH_FLICKR__API_KEY",
        "PHOTO_SEARCH_FLICKR__PER_PAGE",
        "PHOTO_SEARCH_FLICKR__REQUEST_TIMEOUT_SECONDS",
        "PHOTO_SEARCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_nested_env(monkeypatch):
    monkeypatch.setenv("PHOTO_SEARCH_FLICKR__API_KEY", "abc123")
    monkeypatch.setenv("PHOTO_SEARCH_FLICKR__PER_PAGE", "50")
    monkeypatch.setenv("PHOTO_SEARCH_LOG_LEVEL", "DEBUG")

    settings = get_settings()

    assert settings.flickr.api_key.get_secret_value() == "abc123"
    assert settings.flickr.per_page == 50
    assert settings.log_level == "DEBUG"
    assert get_settings() is settings


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("PHOTO_SEARCH_FLICKR__API_KEY", "abc123")

    flickr = PhotoSearchSettings().flickr

    assert str(flickr.api_url) == "https://api.flickr.com/services/rest/"
    assert flickr.per_page == 20
    assert flickr.thumbnail_size == "m"
    assert flickr.large_image_size == "b"
    assert flickr.request_timeout_seconds is None
    assert flickr.thumbnail_concurrency == 1


def test_blank_timeout_means_client_default(monkeypatch):
    monkeypatch.setenv("PHOTO_SEARCH_FLICKR__API_KEY", "abc123")
    monkeypatch.setenv("PHOTO_SEARCH_FLICKR__REQUEST_TIMEOUT_SECONDS", "")

    assert PhotoSearchSettings().flickr.request_timeout_seconds is None


def test_api_key_is_required():
    with pytest.raises(ValidationError):
        PhotoSearchSettings()
