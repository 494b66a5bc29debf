"""Remote CV service configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, cast

from .env import env_float, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

_CACHE_BACKENDS = ("memory", "sqlite")


@dataclass(frozen=True)
class ApiConfig:
    """Base URL, bearer token and transport settings of the CV service."""

    base_url: str
    token: str
    resilience: ResilienceConfig


def get_api_config(*, resilience: ResilienceConfig | None = None) -> ApiConfig:
    """Build the API configuration from ``CVTAILOR_*`` environment variables.

    Optional knobs:
    - ``CVTAILOR_API_TIMEOUT``: seconds; unset means no timeout
    - ``CVTAILOR_API_RETRIES``: transport retries for idempotent requests, default 0
    - ``CVTAILOR_API_RATE_LIMIT``: calls per second
    - ``CVTAILOR_HTTP_CACHE``: ``memory`` or ``sqlite``, caches library reads
    """

    values = require_env_vars(("CVTAILOR_API_URL", "CVTAILOR_API_TOKEN"))
    base_url = values["CVTAILOR_API_URL"].rstrip("/") + "/"
    return ApiConfig(
        base_url=base_url,
        token=values["CVTAILOR_API_TOKEN"].strip(),
        resilience=resilience
        or ResilienceConfig(
            name="cv-api",
            base_url=base_url,
            timeout_seconds=_timeout_from_env(),
            retry=RetryPolicy(total=int(env_float("CVTAILOR_API_RETRIES", default=0))),
            ratelimit=_rate_limit_from_env(),
            cache=_cache_from_env(),
        ),
    )


def _timeout_from_env() -> float | None:
    if not (os.getenv("CVTAILOR_API_TIMEOUT") or "").strip():
        return None
    return env_float("CVTAILOR_API_TIMEOUT", default=0.0)


def _rate_limit_from_env() -> RateLimit | None:
    per_second = env_float("CVTAILOR_API_RATE_LIMIT", default=0.0)
    if per_second <= 0:
        return None
    return RateLimit(max_calls=max(1, int(per_second)), per_seconds=1.0)


def _cache_from_env() -> CacheConfig | None:
    backend = (os.getenv("CVTAILOR_HTTP_CACHE") or "").strip().lower()
    if not backend:
        return None
    if backend not in _CACHE_BACKENDS:
        raise ConfigurationError(f"Unsupported CVTAILOR_HTTP_CACHE backend: {backend!r}")
    return CacheConfig(backend=cast(Literal["sqlite", "memory"], backend))
