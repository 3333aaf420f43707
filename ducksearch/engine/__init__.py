"""DuckDuckGo HTML search pipeline."""

from ducksearch.engine.cancellation import CancellationToken
from ducksearch.engine.client import (
    DuckDuckGoClient,
    get_default_client,
    reset_default_client,
    search,
)
from ducksearch.engine.errors import (
    ChallengeExceededError,
    DuckDuckGoSearchError,
    ExtractionError,
    SearchCancelledError,
    SearchInputError,
    SearchTransportError,
)
from ducksearch.engine.models import ResultRecord, SafeSearch, SearchOptions
from ducksearch.engine.session import CookieJar, SearchSession
from ducksearch.engine.throttle import BackoffPolicy, RateLimiter

__all__ = [
    "BackoffPolicy",
    "CancellationToken",
    "ChallengeExceededError",
    "CookieJar",
    "DuckDuckGoClient",
    "DuckDuckGoSearchError",
    "ExtractionError",
    "RateLimiter",
    "ResultRecord",
    "SafeSearch",
    "SearchCancelledError",
    "SearchInputError",
    "SearchOptions",
    "SearchSession",
    "SearchTransportError",
    "get_default_client",
    "reset_default_client",
    "search",
]
