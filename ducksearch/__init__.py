"""
ducksearch - DuckDuckGo HTML search with session cookies, pacing and challenge retries
"""

__version__ = "0.1.0"

from ducksearch.engine import (
    CancellationToken,
    DuckDuckGoClient,
    DuckDuckGoSearchError,
    ResultRecord,
    SearchOptions,
    search,
)

__all__ = [
    "CancellationToken",
    "DuckDuckGoClient",
    "DuckDuckGoSearchError",
    "ResultRecord",
    "SearchOptions",
    "__version__",
    "search",
]
