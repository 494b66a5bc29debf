"""Variant repository backed by the CV service ``/cv`` endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from cvtailor.domain.errors import VariantNotFoundError, VariantStoreError

from .client import ApiError
from .translator import parse_variant, parse_variants, serialize_variant_draft

if TYPE_CHECKING:
    from collections.abc import Callable

    from cvtailor.domain.model import CvVariant, VariantDraft

    from .client import ApiClient

_NOT_FOUND = 404


@dataclass(slots=True)
class HttpVariantRepository:
    client: ApiClient

    async def list_all(self) -> list[CvVariant]:
        payload = await self._call("GET", "/cv")
        return self._parse(parse_variants, payload)

    async def get(self, variant_id: str) -> CvVariant:
        payload = await self._call("GET", f"/cv/{variant_id}", variant_id=variant_id)
        return self._parse(parse_variant, payload)

    async def create(self, draft: VariantDraft) -> CvVariant:
        payload = await self._call("POST", "/cv", json=serialize_variant_draft(draft))
        return self._parse(parse_variant, payload)

    async def update(self, variant_id: str, draft: VariantDraft) -> CvVariant:
        payload = await self._call(
            "PUT",
            f"/cv/{variant_id}",
            json=serialize_variant_draft(draft),
            variant_id=variant_id,
        )
        return self._parse(parse_variant, payload)

    async def delete(self, variant_id: str) -> None:
        await self._call("DELETE", f"/cv/{variant_id}", variant_id=variant_id)

    async def _call(
        self,
        method: str,
        path: str,
        *,
        json: object = None,
        variant_id: str | None = None,
    ) -> object:
        try:
            return await self.client.request_json(method, path, json=json)
        except ApiError as exc:
            if variant_id is not None and exc.status == _NOT_FOUND:
                raise VariantNotFoundError(variant_id) from exc
            raise VariantStoreError(str(exc)) from exc

    @staticmethod
    def _parse[T](parser: Callable[[object], T], payload: object) -> T:
        try:
            return parser(payload)
        except (ValidationError, TypeError) as exc:
            raise VariantStoreError(f"Malformed variant payload: {exc}") from exc
