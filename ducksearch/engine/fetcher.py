"""HTTP transport for result pages."""

from __future__ import annotations

import httpx
from loguru import logger

from ducksearch.engine.cancellation import CancellationToken, run_cancellable
from ducksearch.engine.errors import SearchTransportError
from ducksearch.engine.models import DEFAULT_USER_AGENT
from ducksearch.engine.session import CookieJar, set_cookie_entries

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"
REFERER = "https://duckduckgo.com/"
DEFAULT_MAX_REDIRECTS = 20


def build_request_headers(
    *,
    user_agent: str | None,
    cookie_header: str | None,
    accept_language: str = ACCEPT_LANGUAGE,
    referer: str = REFERER,
) -> dict[str, str]:
    headers = {
        "user-agent": user_agent or DEFAULT_USER_AGENT,
        "accept": ACCEPT,
        "accept-language": accept_language,
        "referer": referer,
    }
    if cookie_header:
        headers["cookie"] = cookie_header
    return headers


class PageFetcher:
    """GET a page with session cookies attached and capture any cookies set in reply."""

    def __init__(
        self,
        cookies: CookieJar,
        *,
        timeout_s: float | None = None,
        follow_redirects: bool = True,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        accept_language: str = ACCEPT_LANGUAGE,
        referer: str = REFERER,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cookies = cookies
        self.timeout_s = timeout_s
        self.follow_redirects = follow_redirects
        self.max_redirects = max(0, max_redirects)
        self.accept_language = accept_language
        self.referer = referer
        self._transport = transport

    async def fetch(
        self,
        url: str,
        *,
        user_agent: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        logger.debug("GET {} (cookies: {})", url, len(self.cookies))
        try:
            response = await run_cancellable(self._get(url, user_agent), cancel_token)
        except httpx.HTTPError as e:
            raise SearchTransportError(f"request to {url} failed: {e}", e) from e

        if not response.is_success:
            raise SearchTransportError(
                f"DuckDuckGo responded with status {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    async def _get(self, url: str, user_agent: str | None) -> httpx.Response:
        client_kwargs: dict = {
            "timeout": httpx.Timeout(self.timeout_s),
            "follow_redirects": False,
        }
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        async with httpx.AsyncClient(**client_kwargs) as client:
            for _ in range(self.max_redirects + 1):
                # The jar is the only cookie source; each hop sends its current contents.
                client.cookies.clear()
                headers = build_request_headers(
                    user_agent=user_agent,
                    cookie_header=self.cookies.cookie_header(),
                    accept_language=self.accept_language,
                    referer=self.referer,
                )
                response = await client.get(url, headers=headers)

                # Challenge and redirect responses set cookies too, so ingest before checking status.
                self.cookies.ingest(set_cookie_entries(response.headers))
                if not (self.follow_redirects and response.has_redirect_location):
                    return response

                url = str(response.url.join(response.headers["location"]))
                logger.debug("Redirect {} -> {}", response.status_code, url)

        raise SearchTransportError(f"exceeded {self.max_redirects} redirects")
