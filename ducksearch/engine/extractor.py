"""Parse DuckDuckGo HTML result pages into result records."""

from __future__ import annotations

from urllib.parse import parse_qs

from bs4 import BeautifulSoup

from ducksearch.engine.models import ResultRecord

RESULT_SELECTOR = "div.result"
TITLE_SELECTOR = "a.result__a"
SNIPPET_SELECTOR = ".result__snippet"
REDIRECT_PARAMS = ("uddg", "rut")


def resolve_result_url(href: str) -> str | None:
    """Turn a result href into an absolute URL.

    Hrefs starting with `/` (including `//duckduckgo.com/l/?...`) are
    redirect wrappers whose target sits in `uddg`, or `rut` as a fallback.
    Anything else is already absolute and returned as is.
    """
    if not href.startswith("/"):
        return href

    query = href.split("?")[1] if "?" in href else ""
    if not query:
        return None

    try:
        params = parse_qs(query, keep_blank_values=True, errors="strict")
    except (UnicodeDecodeError, ValueError):
        return None

    for name in REDIRECT_PARAMS:
        values = params.get(name)
        if values is not None:
            return values[0] or None
    return None


def extract_results(markup: str, max_results: int) -> list[ResultRecord]:
    """Extract up to `max_results` results in document order.

    Containers without a title link, title text or resolvable URL are skipped.
    """
    soup = BeautifulSoup(markup, "html.parser")
    results: list[ResultRecord] = []

    for container in soup.select(RESULT_SELECTOR):
        if len(results) >= max_results:
            break

        anchor = container.select_one(TITLE_SELECTOR)
        if anchor is None:
            continue
        href = anchor.get("href")
        title = anchor.get_text().strip()
        if not href or not title:
            continue

        url = resolve_result_url(str(href))
        if not url:
            continue

        snippet = container.select_one(SNIPPET_SELECTOR)
        description = snippet.get_text().strip() if snippet is not None else ""
        results.append(ResultRecord(title=title, url=url, description=description))

    return results
