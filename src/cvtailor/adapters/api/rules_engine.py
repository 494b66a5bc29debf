"""Rules engine backed by the CV service preview and export endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from cvtailor.domain.errors import RenderUnavailable, RulesEngineUnavailable
from cvtailor.domain.ports import RenderedDocument

from .client import ApiError
from .translator import parse_cv_preview, serialize_overrides, serialize_theme

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from cvtailor.domain.model import CvPreview, CvTheme, ManualOverride

    from .client import ApiClient

log = getLogger(__name__)

_DEFAULT_MEDIA_TYPE = "application/pdf"


@dataclass(slots=True)
class HttpRulesEngine:
    client: ApiClient

    async def preview(self, job_tags: Sequence[str], template: str) -> CvPreview:
        body = {"jobTags": list(job_tags), "template": template}
        try:
            payload = await self.client.request_json("POST", "/cv/preview", json=body)
        except ApiError as exc:
            raise RulesEngineUnavailable(str(exc), status=exc.status) from exc
        try:
            return parse_cv_preview(payload)
        except ValidationError as exc:
            raise RulesEngineUnavailable(f"Malformed preview payload: {exc}") from exc

    async def render(
        self,
        job_tags: Sequence[str],
        template: str,
        *,
        theme: CvTheme | None = None,
        manual_overrides: ManualOverride | None = None,
    ) -> RenderedDocument:
        body: dict[str, object] = {"jobTags": list(job_tags), "template": template}
        body.update(_document_options(theme, manual_overrides))
        return await self._render("/cv/preview/pdf", body)

    async def export_variant(
        self,
        variant_id: str,
        *,
        theme: CvTheme | None = None,
        manual_overrides: ManualOverride | None = None,
    ) -> RenderedDocument:
        body = _document_options(theme, manual_overrides)
        return await self._render(f"/cv/{variant_id}/export", body)

    async def _render(self, path: str, body: dict[str, object]) -> RenderedDocument:
        try:
            response = await self.client.request_bytes("POST", path, json=body)
        except ApiError as exc:
            raise RenderUnavailable(str(exc), status=exc.status) from exc
        document = _to_document(response)
        log.debug(
            "Rendered %d bytes (%s) from %s", len(document.content), document.media_type, path
        )
        return document


def _document_options(
    theme: CvTheme | None,
    manual_overrides: ManualOverride | None,
) -> dict[str, object]:
    options: dict[str, object] = {}
    if theme is not None:
        options["theme"] = serialize_theme(theme)
    if manual_overrides is not None:
        options["manualOverrides"] = serialize_overrides(manual_overrides)
    return options


def _to_document(response: httpx.Response) -> RenderedDocument:
    media_type = response.headers.get("content-type", _DEFAULT_MEDIA_TYPE).split(";")[0].strip()
    return RenderedDocument(content=response.content, media_type=media_type or _DEFAULT_MEDIA_TYPE)
