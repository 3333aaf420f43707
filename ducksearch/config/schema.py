"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ducksearch.engine.models import DEFAULT_MAX_RESULTS, DEFAULT_USER_AGENT, SafeSearch
from ducksearch.engine.throttle import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_JITTER_S,
    DEFAULT_MAX_DELAY_MS,
    DEFAULT_MIN_INTERVAL_S,
)
from ducksearch.engine.url import DUCKDUCKGO_HTML_ENDPOINT


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HttpConfig(Base):
    """Upstream endpoint and request header settings."""

    endpoint: str = DUCKDUCKGO_HTML_ENDPOINT
    referer: str = "https://duckduckgo.com/"
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.9"
    timeout_s: float | None = None  # None = wait until cancelled
    follow_redirects: bool = True
    max_redirects: int = Field(default=20, ge=0)


class ThrottleConfig(Base):
    """Minimum spacing between outbound requests."""

    min_interval_s: float = Field(default=DEFAULT_MIN_INTERVAL_S, ge=0)
    jitter_s: float = Field(default=DEFAULT_JITTER_S, ge=0)


class RetryConfig(Base):
    """Challenge-page retry budget."""

    max_attempts: int = Field(default=5, ge=1)
    base_delay_ms: float = Field(default=DEFAULT_BASE_DELAY_MS, ge=0)
    max_delay_ms: float = Field(default=DEFAULT_MAX_DELAY_MS, ge=0)


class SearchDefaults(Base):
    """Option values used when a search call leaves them unset."""

    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1)
    locale: str | None = None
    safe_search: SafeSearch | None = None


class Config(Base):
    """Root configuration for ducksearch."""

    http: HttpConfig = Field(default_factory=HttpConfig)
    throttle: ThrottleConfig = Field(default_factory=ThrottleConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    defaults: SearchDefaults = Field(default_factory=SearchDefaults)
