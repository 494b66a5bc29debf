"""Ports for persisting CV variants."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cvtailor.domain.model import CvVariant, VariantDraft


@runtime_checkable
class VariantRepository(Protocol):
    """Async store of named variants (job tags, template, manual overrides)."""

    async def list_all(self) -> list[CvVariant]: ...

    async def get(self, variant_id: str) -> CvVariant: ...

    async def create(self, draft: VariantDraft) -> CvVariant: ...

    async def update(self, variant_id: str, draft: VariantDraft) -> CvVariant: ...

    async def delete(self, variant_id: str) -> None: ...
