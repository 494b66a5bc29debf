"""Build API clients whose transport is an ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import Callable

import httpx

from cvtailor.adapters.api import ApiClient
from cvtailor.adapters.http_resilience import ResilienceConfig, ResilientClient
from cvtailor.config import ApiConfig

BASE_URL = "https://cv.example.test/api/"

type Handler = Callable[[httpx.Request], httpx.Response]


def make_api_client(handler: Handler) -> ApiClient:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return ApiClient(
        config=ApiConfig(
            base_url=BASE_URL,
            token="secret-token",
            resilience=ResilienceConfig(name="cv-api-test", base_url=BASE_URL),
        ),
        client_factory=factory,
    )
