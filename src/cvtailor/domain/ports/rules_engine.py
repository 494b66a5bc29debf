"""Port for the remote rules engine that selects and renders CV content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cvtailor.domain.model import CvPreview, CvTheme, ManualOverride


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Binary document artifact returned by a render call."""

    content: bytes
    media_type: str = "application/pdf"


@runtime_checkable
class RulesEngine(Protocol):
    """Remote collaborator turning job tags and a template into CV content.

    ``preview`` raises ``RulesEngineUnavailable``; ``render`` and
    ``export_variant`` raise ``RenderUnavailable``.
    """

    async def preview(self, job_tags: Sequence[str], template: str) -> CvPreview: ...

    async def render(
        self,
        job_tags: Sequence[str],
        template: str,
        *,
        theme: CvTheme | None = None,
        manual_overrides: ManualOverride | None = None,
    ) -> RenderedDocument: ...

    async def export_variant(
        self,
        variant_id: str,
        *,
        theme: CvTheme | None = None,
        manual_overrides: ManualOverride | None = None,
    ) -> RenderedDocument: ...
