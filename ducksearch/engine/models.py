"""Shared search models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ducksearch.engine.cancellation import CancellationToken

SafeSearch = Literal["off", "moderate", "strict"]

DEFAULT_MAX_RESULTS = 10
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_5) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """One organic result, in the order it appeared on the page."""

    title: str
    url: str
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
        }


@dataclass(slots=True)
class SearchOptions:
    """Per-call search options.

    `locale` is forwarded verbatim as `kl` (e.g. `us-en`). `offset` maps to
    `s`; DuckDuckGo pages in multiples of 50. Fields left as None fall back
    to the client's configured defaults.
    """

    locale: str | None = None
    offset: int | None = None
    safe_search: SafeSearch | None = None
    max_results: int | None = None
    user_agent: str | None = None
    cancel_token: "CancellationToken | None" = None
