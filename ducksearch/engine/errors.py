"""Error types raised by the DuckDuckGo search pipeline."""

from __future__ import annotations


class DuckDuckGoSearchError(Exception):
    """Raised when a search cannot produce results."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class SearchInputError(DuckDuckGoSearchError):
    """Raised for an empty query or invalid options, before any request is made."""


class SearchTransportError(DuckDuckGoSearchError):
    """Raised when the HTTP request fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        *,
        status_code: int | None = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class ChallengeExceededError(DuckDuckGoSearchError):
    """Raised when every attempt was answered with a bot-challenge page."""

    def __init__(self, message: str, *, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class ExtractionError(DuckDuckGoSearchError):
    """Raised when result markup cannot be parsed."""


class SearchCancelledError(DuckDuckGoSearchError):
    """Raised when the caller's cancellation token fires mid-search."""
