"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, contextmanager, nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from cvtailor.adapters.api import (
    ApiClient,
    HttpLibraryReader,
    HttpRulesEngine,
    HttpVariantRepository,
)
from cvtailor.adapters.sqlalchemy import SqlAlchemyVariantUnitOfWork, is_started, startup
from cvtailor.config import get_preview_settings
from cvtailor.domain.model import EntityKind, VariantDraft, default_theme, supports_theme
from cvtailor.domain.preview import (
    PreviewInputs,
    PreviewMode,
    PreviewOrchestrator,
    PreviewSettings,
    PreviewSource,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Iterator, Mapping
    from contextlib import AbstractContextManager

    from cvtailor.domain.errors import CollaboratorUnavailableError
    from cvtailor.domain.model import CvPreview, CvTheme, CvVariant, ManualOverride
    from cvtailor.domain.ports import (
        LibraryReader,
        RenderedDocument,
        RulesEngine,
        VariantRepository,
    )

type VariantAccess = Callable[[], AbstractContextManager[VariantRepository]]

log = getLogger(__name__)


@dataclass(slots=True)
class Collaborators:
    """Adapters the application talks to for one session."""

    library: LibraryReader
    rules_engine: RulesEngine
    variants: VariantAccess
    settings: PreviewSettings = field(default_factory=PreviewSettings)


@dataclass(frozen=True, slots=True, kw_only=True)
class PreviewOutcome:
    """Snapshot of the orchestrator once all channels went idle."""

    label: str
    source: PreviewSource
    preview: CvPreview | None
    defaults: ManualOverride | None
    overrides: ManualOverride | None
    rendered: RenderedDocument | None
    unmatched: int = 0
    errors: Mapping[str, CollaboratorUnavailableError] = field(
        default_factory=dict[str, "CollaboratorUnavailableError"]
    )

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True, kw_only=True)
class LiveRequest:
    job_tags: tuple[str, ...]
    template: str
    ats_preview: bool = True
    mode: PreviewMode = PreviewMode.JSON
    theme_changes: Mapping[str, object] | None = None
    toggles: ManualOverride | None = None


# ------------------------------------------------------------------ wiring


def _local_variant_access() -> VariantAccess:
    if not is_started():
        startup()

    @contextmanager
    def access() -> Iterator[VariantRepository]:
        with SqlAlchemyVariantUnitOfWork() as uow:
            yield uow.repositories.variants
            uow.commit()

    return access


@asynccontextmanager
async def open_collaborators(
    *,
    local_variants: bool = False,
    client: ApiClient | None = None,
    settings: PreviewSettings | None = None,
) -> AsyncIterator[Collaborators]:
    """Wire the CV service adapters, optionally with the local variant store."""

    api = client or ApiClient()
    remote_variants = HttpVariantRepository(api)
    try:
        yield Collaborators(
            library=HttpLibraryReader(api),
            rules_engine=HttpRulesEngine(api),
            variants=_local_variant_access()
            if local_variants
            else lambda: nullcontext(remote_variants),
            settings=settings or get_preview_settings(),
        )
    finally:
        await api.aclose()


# ------------------------------------------------------------------ use cases


async def run_live_preview(collaborators: Collaborators, request: LiveRequest) -> PreviewOutcome:
    """Load the library, resolve a live preview and apply any manual toggles."""

    orchestrator = await _live_orchestrator(collaborators, request)
    return _outcome(orchestrator)


async def show_variant_preview(collaborators: Collaborators, variant_id: str) -> PreviewOutcome:
    """Re-resolve a stored variant against the current library."""

    with collaborators.variants() as variants:
        variant = await variants.get(variant_id)
    orchestrator = PreviewOrchestrator(collaborators.rules_engine, settings=collaborators.settings)
    await orchestrator.load_library(collaborators.library)
    await orchestrator.show_variant(variant)
    await orchestrator.wait_idle()
    return _outcome(orchestrator)


async def save_variant(
    collaborators: Collaborators,
    request: LiveRequest,
    *,
    name: str,
    variant_id: str | None = None,
) -> CvVariant:
    """Persist the current live inputs and merged overrides as a named variant."""

    name = name.strip()
    if not name:
        raise ValueError("Variant name must not be empty")
    orchestrator = await _live_orchestrator(collaborators, request)
    if orchestrator.library_error is not None:
        raise orchestrator.library_error
    if orchestrator.structured.error is not None:
        raise orchestrator.structured.error
    draft = VariantDraft(
        name=name,
        job_tags=request.job_tags,
        template=request.template,
        manual_overrides=orchestrator.snapshot_overrides(),
    )
    with collaborators.variants() as variants:
        if variant_id is None:
            variant = await variants.create(draft)
        else:
            variant = await variants.update(variant_id, draft)
    log.info("Saved variant %s (%s)", variant.name, variant.id)
    return variant


async def list_variants(collaborators: Collaborators) -> list[CvVariant]:
    with collaborators.variants() as variants:
        return await variants.list_all()


async def delete_variant(collaborators: Collaborators, variant_id: str) -> None:
    with collaborators.variants() as variants:
        await variants.delete(variant_id)
    log.info("Deleted variant %s", variant_id)


async def export_variant(
    collaborators: Collaborators,
    variant_id: str,
    *,
    theme_changes: Mapping[str, object] | None = None,
) -> RenderedDocument:
    """Render a stored variant with its own overrides and an optional theme."""

    with collaborators.variants() as variants:
        variant = await variants.get(variant_id)
    theme = _variant_theme(variant.template, theme_changes)
    overrides = (
        variant.manual_overrides if collaborators.settings.manual_overrides_enabled else None
    )
    return await collaborators.rules_engine.export_variant(
        variant.id, theme=theme, manual_overrides=overrides
    )


# ------------------------------------------------------------------ sync entry points


def run[T](
    use_case: Callable[[Collaborators], Awaitable[T]],
    *,
    local_variants: bool = False,
) -> T:
    """Run one use case against freshly wired collaborators."""

    async def _main() -> T:
        async with open_collaborators(local_variants=local_variants) as collaborators:
            return await use_case(collaborators)

    return asyncio.run(_main())


# ------------------------------------------------------------------ helpers


async def _live_orchestrator(
    collaborators: Collaborators, request: LiveRequest
) -> PreviewOrchestrator:
    orchestrator = PreviewOrchestrator(
        collaborators.rules_engine,
        settings=collaborators.settings,
        inputs=PreviewInputs(
            job_tags=request.job_tags,
            template=request.template,
            ats_preview=request.ats_preview,
            mode=request.mode,
        ),
    )
    if request.theme_changes:
        orchestrator.update_theme(request.theme_changes)
    await orchestrator.load_library(collaborators.library)
    orchestrator.start()
    await orchestrator.wait_idle()

    if request.toggles is not None and orchestrator.overrides is not None:
        _apply_toggles(orchestrator, request.toggles)
        await orchestrator.wait_idle()
    log.info(
        "%s: unmatched=%s, structured_error=%s, document_error=%s",
        orchestrator.label,
        orchestrator.unmatched,
        orchestrator.structured.error,
        orchestrator.document.error,
    )
    return orchestrator


def _apply_toggles(orchestrator: PreviewOrchestrator, toggles: ManualOverride) -> None:
    for kind in EntityKind:
        for entity_id, include in toggles.for_kind(kind).items():
            orchestrator.toggle_override(kind, entity_id, include=include)


def _variant_theme(template: str, changes: Mapping[str, object] | None) -> CvTheme | None:
    if not changes or not supports_theme(template):
        return None
    return default_theme(template).updated(changes)


def _outcome(orchestrator: PreviewOrchestrator) -> PreviewOutcome:
    errors: dict[str, CollaboratorUnavailableError] = {}
    if orchestrator.library_error is not None:
        errors["library"] = orchestrator.library_error
    if orchestrator.structured.error is not None:
        errors[orchestrator.structured.name] = orchestrator.structured.error
    if orchestrator.document.error is not None:
        errors[orchestrator.document.name] = orchestrator.document.error
    return PreviewOutcome(
        label=orchestrator.label,
        source=orchestrator.source,
        preview=orchestrator.preview,
        defaults=orchestrator.displayed_defaults,
        overrides=orchestrator.displayed_overrides,
        rendered=orchestrator.rendered,
        unmatched=orchestrator.unmatched,
        errors=errors,
    )

