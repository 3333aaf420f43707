"""Query URL construction for the DuckDuckGo HTML endpoint."""

from __future__ import annotations

from urllib.parse import urlencode

from ducksearch.engine.models import SafeSearch

DUCKDUCKGO_HTML_ENDPOINT = "https://duckduckgo.com/html/"

SAFE_SEARCH_PARAM: dict[SafeSearch, str] = {
    "off": "-2",
    "moderate": "0",
    "strict": "1",
}


def build_search_url(
    query: str,
    *,
    locale: str | None = None,
    offset: int | None = None,
    safe_search: SafeSearch | None = None,
    endpoint: str = DUCKDUCKGO_HTML_ENDPOINT,
) -> str:
    """Build the search URL; options left unset are omitted from the query string."""
    params: dict[str, str] = {"q": query}
    if locale:
        params["kl"] = locale
    if offset is not None:
        params["s"] = str(max(0, int(offset)))
    if safe_search:
        params["kp"] = SAFE_SEARCH_PARAM[safe_search]
    return f"{endpoint}?{urlencode(params)}"
