"""Persisted CV variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .overrides import ManualOverride


@dataclass(frozen=True, slots=True, kw_only=True)
class CvVariant:
    """Named job-tag/template combination, re-resolvable against the live library."""

    id: str
    name: str
    job_tags: tuple[str, ...]
    template: str
    manual_overrides: ManualOverride | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class VariantDraft:
    """Fields supplied when creating or updating a variant."""

    name: str
    job_tags: tuple[str, ...]
    template: str
    manual_overrides: ManualOverride | None = None
