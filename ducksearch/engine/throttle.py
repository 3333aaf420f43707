"""Request pacing and retry delays."""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Awaitable, Callable

from loguru import logger

from ducksearch.engine.cancellation import CancellationToken, sleep_cancellable

DEFAULT_MIN_INTERVAL_S = 1.0
DEFAULT_JITTER_S = 0.5
DEFAULT_BASE_DELAY_MS = 100.0
DEFAULT_MAX_DELAY_MS = 120_000.0


class RateLimiter:
    """Keep outbound request starts at least `min_interval_s` apart.

    The wait is padded with up to `jitter_s` of random delay so requests do
    not go out on a fixed cadence.
    """

    def __init__(
        self,
        min_interval_s: float = DEFAULT_MIN_INTERVAL_S,
        jitter_s: float = DEFAULT_JITTER_S,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        self.min_interval_s = max(0.0, min_interval_s)
        self.jitter_s = max(0.0, jitter_s)
        self._clock = clock
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._last_request_at: float | None = None

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    async def acquire(self, cancel_token: CancellationToken | None = None) -> float:
        """Wait for the next slot and claim it. Returns the seconds waited."""
        waited = 0.0
        if self._last_request_at is not None:
            elapsed = self._clock() - self._last_request_at
            if elapsed < self.min_interval_s:
                waited = (self.min_interval_s - elapsed) + self._rng.uniform(0.0, self.jitter_s)
                logger.debug("Rate limiter: waiting {:.3f}s before next request", waited)
                await sleep_cancellable(waited, cancel_token, sleep=self._sleep)
        self._last_request_at = self._clock()
        return waited


class BackoffPolicy:
    """Jittered exponential delay between challenge retries, in milliseconds."""

    def __init__(
        self,
        base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
        max_delay_ms: float = DEFAULT_MAX_DELAY_MS,
        *,
        rng: random.Random | None = None,
    ):
        self.base_delay_ms = max(0.0, base_delay_ms)
        self.max_delay_ms = max(0.0, max_delay_ms)
        self._rng = rng or random.Random()

    def delay_ms(self, attempt: int) -> float:
        exponential = self.base_delay_ms * (2 ** max(0, attempt))
        jitter = self._rng.uniform(0.0, self.base_delay_ms)
        return min(exponential + jitter, self.max_delay_ms)
