"""Authenticated HTTP client for the remote CV service."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from cvtailor.adapters.http_resilience import ResilienceConfig, ResilientClient
from cvtailor.config import get_api_config

from .schema import ErrorPayload

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from cvtailor.config import ApiConfig

log = getLogger(__name__)


class ApiError(RuntimeError):
    """Raised when the CV service fails or answers with a non-success status."""

    def __init__(self, message: str, *, status: int | None = None, details: object = None) -> None:
        super().__init__(message)
        self.status = status
        self.details = details


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _with_bearer_token(config: ApiConfig) -> ResilienceConfig:
    headers = dict(config.resilience.default_headers or {})
    headers["Authorization"] = f"Bearer {config.token}"
    headers.setdefault("Accept", "application/json")
    return replace(config.resilience, default_headers=headers)


@dataclass(slots=True)
class ApiClient:
    """Long-lived client shared by the library, rules-engine and variant adapters.

    The underlying :class:`ResilientClient` is created lazily and reused until
    :meth:`aclose` is called.
    """

    config: ApiConfig = field(default_factory=get_api_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request_json(self, method: str, path: str, *, json: object = None) -> object:
        """Send a request and return the decoded JSON body (``None`` for empty bodies)."""

        response = await self._send(method, path, json=json)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"Invalid JSON in response to {method} {path}",
                status=response.status_code,
            ) from exc

    async def request_bytes(self, method: str, path: str, *, json: object = None) -> httpx.Response:
        """Send a request whose successful body is binary (e.g. a PDF)."""

        return await self._send(method, path, json=json, accept="application/pdf")

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: object,
        accept: str | None = None,
    ) -> httpx.Response:
        client = self._ensure_client()
        headers = {"Accept": accept} if accept else None
        try:
            if json is None:
                response = await client.request(method, path, headers=headers)
            else:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            log.warning("CV service request %s %s failed: %s", method, path, exc)
            raise ApiError(f"Request {method} {path} failed: {exc}") from exc

        if response.is_error:
            message, details = _error_details(response)
            log.warning(
                "CV service answered %s %s with %s: %s",
                method,
                path,
                response.status_code,
                message,
            )
            raise ApiError(message, status=response.status_code, details=details)
        return response

    def _ensure_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(_with_bearer_token(self.config))
        return self._client


def _error_details(response: httpx.Response) -> tuple[str, object]:
    fallback = response.reason_phrase or "Request failed"
    try:
        payload = response.json()
    except ValueError:
        return fallback, response.text or None
    try:
        error = ErrorPayload.model_validate(payload)
    except ValidationError:
        return fallback, payload
    return error.error or fallback, payload
