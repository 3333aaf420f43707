"""Session state shared across searches: cookies and request pacing."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from ducksearch.engine.throttle import RateLimiter

_DELETED_SENTINEL = "deleted"

# A comma starts a new cookie only when followed by a `name=` token;
# commas inside `Expires=Wed, 21 Oct ...` do not match.
_COOKIE_BOUNDARY_RE = re.compile(r",(?=\s*[A-Za-z0-9!#$%&'*+\-.^_`|~]+=)")


def split_set_cookie_header(value: str) -> list[str]:
    """Split a comma-joined `set-cookie` header into individual cookie strings."""
    if not value:
        return []
    return [part.strip() for part in _COOKIE_BOUNDARY_RE.split(value) if part.strip()]


def set_cookie_entries(headers: Any) -> list[str]:
    """Read raw `set-cookie` values from a response header mapping."""
    get_list = getattr(headers, "get_list", None)
    if callable(get_list):
        return list(get_list("set-cookie"))

    raw = headers.get("set-cookie") if headers is not None else None
    if not raw:
        return []
    return split_set_cookie_header(raw)


class CookieJar:
    """Name to value cookie store replayed as a single `cookie` header.

    Attributes, domains and expiry are ignored; only the latest value per
    name is kept. Empty or `deleted` values remove the cookie.
    """

    def __init__(self) -> None:
        self._cookies: dict[str, str] = {}

    def ingest(self, entries: Iterable[str]) -> None:
        for entry in entries:
            pair = entry.split(";", 1)[0]
            if "=" not in pair:
                continue
            name, value = pair.split("=", 1)
            name = name.strip()
            value = value.strip()
            if not name:
                continue
            if not value or value.lower() == _DELETED_SENTINEL:
                if self._cookies.pop(name, None) is not None:
                    logger.debug("Cookie removed: {}", name)
                continue
            self._cookies[name] = value

    def cookie_header(self) -> str | None:
        if not self._cookies:
            return None
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    def get(self, name: str) -> str | None:
        return self._cookies.get(name)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._cookies.items()))

    def clear(self) -> None:
        self._cookies.clear()

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies


@dataclass(slots=True)
class SearchSession:
    """Mutable state that outlives one search call.

    Concurrent searches sharing a session interleave their cookie writes and
    pacing timestamps without locking; the last write wins.
    """

    cookies: CookieJar = field(default_factory=CookieJar)
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)
