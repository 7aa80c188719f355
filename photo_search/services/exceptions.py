"""Domain-specific exceptions."""

from __future__ import annotations


class SearchError(RuntimeError):
    pass


class InvalidQueryError(SearchError):
    """The search term cannot be turned into a request URL."""


class TransportError(SearchError):
    """The search request never produced a response."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Search request failed: {cause}")
        self.cause = cause


class MalformedResponseError(SearchError):
    """The search response is not the JSON envelope the API documents."""


class ApiError(SearchError):
    """The API answered with ``stat: fail``."""

    def __init__(self, code: int | None = None, api_message: str | None = None) -> None:
        detail = api_message or "API reported a failure"
        if code is not None:
            detail = f"{detail} (code {code})"
        super().__init__(detail)
        self.code = code
        self.api_message = api_message


class FetchError(SearchError):
    """An image download failed or returned undecodable bytes."""

    def __init__(self, url: str | None, cause: BaseException) -> None:
        super().__init__(f"Image fetch failed for {url or '<unbuildable url>'}: {cause}")
        self.url = url
        self.cause = cause


class ResultIndexError(IndexError):
    pass


__all__ = [
    "SearchError",
    "InvalidQueryError",
    "TransportError",
    "MalformedResponseError",
    "ApiError",
    "FetchError",
    "ResultIndexError",
]
