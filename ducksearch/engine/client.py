"""DuckDuckGo HTML search client: pacing, challenge retries and extraction."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from loguru import logger

from ducksearch.engine.cancellation import CancellationToken, sleep_cancellable
from ducksearch.engine.challenge import is_challenge
from ducksearch.engine.errors import (
    ChallengeExceededError,
    DuckDuckGoSearchError,
    ExtractionError,
    SearchInputError,
)
from ducksearch.engine.extractor import extract_results
from ducksearch.engine.fetcher import PageFetcher
from ducksearch.engine.models import ResultRecord, SearchOptions
from ducksearch.engine.session import SearchSession
from ducksearch.engine.throttle import BackoffPolicy, RateLimiter
from ducksearch.engine.url import SAFE_SEARCH_PARAM, build_search_url

if TYPE_CHECKING:
    from ducksearch.config.schema import Config


class DuckDuckGoClient:
    """Search client bound to one session (cookie jar and rate limiter)."""

    def __init__(
        self,
        config: "Config | None" = None,
        *,
        session: SearchSession | None = None,
        fetcher: PageFetcher | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        from ducksearch.config.schema import Config

        self.config = config or Config()
        self.session = session or SearchSession(
            rate_limiter=RateLimiter(
                self.config.throttle.min_interval_s,
                self.config.throttle.jitter_s,
            )
        )
        http = self.config.http
        self.fetcher = fetcher or PageFetcher(
            self.session.cookies,
            timeout_s=http.timeout_s,
            follow_redirects=http.follow_redirects,
            max_redirects=http.max_redirects,
            accept_language=http.accept_language,
            referer=http.referer,
        )
        self.backoff = backoff or BackoffPolicy(
            self.config.retry.base_delay_ms,
            self.config.retry.max_delay_ms,
        )
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self.config.retry.max_attempts

    async def search(self, query: str, options: SearchOptions | None = None) -> list[ResultRecord]:
        """Run one search. Raises a DuckDuckGoSearchError subclass on any failure."""
        options = options or SearchOptions()
        trimmed = (query or "").strip()
        if not trimmed:
            raise SearchInputError("Search query must not be empty")

        max_results = self._resolve_max_results(options)
        url = self._build_url(trimmed, options)
        user_agent = options.user_agent or self.config.http.user_agent

        try:
            markup = await self._fetch_until_clear(url, user_agent, options.cancel_token)
        except DuckDuckGoSearchError:
            raise
        except Exception as e:
            raise DuckDuckGoSearchError("Failed to search DuckDuckGo", e) from e

        try:
            results = extract_results(markup, max_results)
        except Exception as e:
            raise ExtractionError(f"Failed to parse DuckDuckGo results: {e}", e) from e

        logger.debug("Search {!r}: {} result(s)", trimmed, len(results))
        return results[:max_results]

    async def _fetch_until_clear(
        self,
        url: str,
        user_agent: str,
        cancel_token: CancellationToken | None,
    ) -> str:
        for attempt in range(self.max_attempts):
            await self.session.rate_limiter.acquire(cancel_token)
            markup = await self.fetcher.fetch(url, user_agent=user_agent, cancel_token=cancel_token)
            if not is_challenge(markup):
                return markup

            if attempt + 1 >= self.max_attempts:
                break
            delay_ms = self.backoff.delay_ms(attempt)
            logger.warning(
                "Challenge page on attempt {}/{}; retrying in {:.0f}ms",
                attempt + 1,
                self.max_attempts,
                delay_ms,
            )
            await sleep_cancellable(delay_ms / 1000, cancel_token, sleep=self._sleep)

        logger.error("Challenge page persisted after {} attempts: {}", self.max_attempts, url)
        raise ChallengeExceededError(
            f"DuckDuckGo returned a challenge page {self.max_attempts} times in a row",
            attempts=self.max_attempts,
        )

    def _resolve_max_results(self, options: SearchOptions) -> int:
        value = options.max_results
        if value is None:
            return self.config.defaults.max_results
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise SearchInputError("maxResults must be greater than 0")
        return value

    def _build_url(self, query: str, options: SearchOptions) -> str:
        defaults = self.config.defaults
        safe_search = options.safe_search or defaults.safe_search
        if safe_search and safe_search not in SAFE_SEARCH_PARAM:
            raise SearchInputError(
                f"safe_search must be one of {tuple(SAFE_SEARCH_PARAM)}, got {safe_search!r}"
            )
        offset = options.offset
        if offset is not None and (isinstance(offset, bool) or not isinstance(offset, int)):
            raise SearchInputError("offset must be an integer")
        return build_search_url(
            query,
            locale=options.locale or defaults.locale,
            offset=offset,
            safe_search=safe_search,
            endpoint=self.config.http.endpoint,
        )


_default_client: DuckDuckGoClient | None = None


def get_default_client() -> DuckDuckGoClient:
    """Process-wide client whose session is shared by every module-level search."""
    global _default_client
    if _default_client is None:
        _default_client = DuckDuckGoClient()
    return _default_client


def reset_default_client() -> None:
    """Drop the shared client, discarding its cookies and pacing state."""
    global _default_client
    _default_client = None


async def search(query: str, options: SearchOptions | None = None) -> list[ResultRecord]:
    """Search DuckDuckGo with the shared process-wide session."""
    return await get_default_client().search(query, options)
