"""Preview orchestrator: LIVE/VARIANT state machine over two fenced channels.

The orchestrator is the single owner of reconciliation state. All mutations go
through its synchronous methods, which run on the event loop thread; only the
remote calls suspend, and they do so inside the channels.

Two output channels exist:

- ``structured``: rules-engine preview for the current job tags and template.
  Its result feeds auto-match, default overrides and preview resolution.
- ``document``: rendered document for the current inputs and overrides. It only
  runs in PDF mode.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from cvtailor.domain.errors import LibraryUnavailable
from cvtailor.domain.model import ManualOverride
from cvtailor.domain.reconciliation import ReconciliationEngine

from .channel import PreviewChannel
from .state import PreviewInputs, PreviewMode, PreviewSettings, PreviewSource

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cvtailor.domain.model import (
        CvPreview,
        CvVariant,
        EntityKind,
        Library,
    )
    from cvtailor.domain.ports import LibraryReader, RenderedDocument, RulesEngine
    from cvtailor.domain.reconciliation import MatchResult, ReconciliationResult

log = logging.getLogger(__name__)


class PreviewOrchestrator:
    """Drive reconciliation from changing inputs and collaborator results."""

    def __init__(
        self,
        rules_engine: RulesEngine,
        *,
        settings: PreviewSettings | None = None,
        inputs: PreviewInputs | None = None,
        library: Library | None = None,
    ) -> None:
        self.settings = settings or PreviewSettings()
        self.engine = ReconciliationEngine(
            manual_overrides_enabled=self.settings.manual_overrides_enabled
        )
        self.structured: PreviewChannel[CvPreview] = PreviewChannel(
            "structured", self.settings.debounce_seconds
        )
        self.document: PreviewChannel[RenderedDocument] = PreviewChannel(
            "document", self.settings.debounce_seconds
        )
        self.source = PreviewSource.LIVE
        self.inputs = inputs or PreviewInputs()
        self.library = library
        self.library_error: LibraryUnavailable | None = None
        self.auto_preview: CvPreview | None = None
        self.defaults: ManualOverride | None = None
        self.overrides: ManualOverride | None = None
        self.preview: CvPreview | None = None
        self.rendered: RenderedDocument | None = None
        self._rules_engine = rules_engine
        self._matches: dict[EntityKind, MatchResult] | None = None
        self._toggles = ManualOverride()
        self._variant_name: str | None = None
        self._variant_result: ReconciliationResult | None = None

    @property
    def manual_overrides_enabled(self) -> bool:
        return self.settings.manual_overrides_enabled

    @property
    def label(self) -> str:
        if self.source is PreviewSource.VARIANT and self._variant_name is not None:
            return f"Variant: {self._variant_name}"
        return f"Live {self.inputs.mode.upper()} preview - {self.inputs.effective_template}"

    @property
    def explicit_toggles(self) -> ManualOverride:
        """Choices the user made by hand, a sparse subset of ``overrides``."""

        return self._toggles.copy()

    @property
    def displayed_defaults(self) -> ManualOverride | None:
        """Defaults behind the displayed preview; the variant's own in VARIANT."""

        if self.source is PreviewSource.VARIANT:
            return self._variant_result.defaults if self._variant_result else None
        return self.defaults

    @property
    def displayed_overrides(self) -> ManualOverride | None:
        """Merged map behind the displayed preview; the variant's own in VARIANT."""

        if self.source is PreviewSource.VARIANT:
            return self._variant_result.overrides if self._variant_result else None
        return self.overrides

    @property
    def unmatched(self) -> int:
        """Rules-engine items of the displayed preview that matched no library entity."""

        if self.source is PreviewSource.VARIANT:
            return self._variant_result.unmatched if self._variant_result else 0
        if self._matches is None:
            return 0
        return sum(match.unmatched for match in self._matches.values())

    # ------------------------------------------------------------------ lifecycle

    def start(self) -> None:
        """Issue the initial recomputation for the current inputs."""

        self._schedule_structured()
        self._schedule_document()

    def refresh(self) -> None:
        """Re-issue both channels, e.g. as a retry after an error."""

        if self.source is PreviewSource.LIVE:
            self._schedule_structured()
        self._schedule_document()

    async def wait_idle(self) -> None:
        await self.structured.wait_idle()
        await self.document.wait_idle()

    async def load_library(self, reader: LibraryReader) -> Library | None:
        self.library_error = None
        try:
            library = await reader.load()
        except LibraryUnavailable as exc:
            log.warning("Unable to load CV content: %s", exc)
            self.library_error = exc
            return None
        self.set_library(library)
        return library

    def set_library(self, library: Library) -> None:
        """Replace the library snapshot and recompute defaults against it."""

        self.library = library
        self._reconcile()
        self._rebuild_live_preview()
        self._schedule_document()

    # ------------------------------------------------------------------ inputs

    def set_job_tags(self, job_tags: Iterable[str]) -> None:
        self.inputs = replace(self.inputs, job_tags=tuple(job_tags))
        self._inputs_changed(structured=True)

    def set_template(self, template: str) -> None:
        # Theme customisations belong to the template they were made for.
        self.inputs = replace(self.inputs, template=template, theme=None)
        self._inputs_changed(structured=True)

    def set_ats_preview(self, enabled: bool) -> None:  # noqa: FBT001
        self.inputs = replace(self.inputs, ats_preview=enabled)
        self._inputs_changed(structured=True)

    def set_mode(self, mode: PreviewMode) -> None:
        self.inputs = replace(self.inputs, mode=mode)
        self._inputs_changed(structured=False)

    def update_theme(self, changes: Mapping[str, object]) -> None:
        self.inputs = replace(self.inputs, theme=self.inputs.selected_theme.updated(changes))
        self._inputs_changed(structured=False)

    def reset_theme(self) -> None:
        self.inputs = replace(self.inputs, theme=None)
        self._inputs_changed(structured=False)

    def toggle_override(self, kind: EntityKind, entity_id: str, *, include: bool) -> None:
        if not self.manual_overrides_enabled:
            log.debug("Manual overrides disabled; ignoring toggle of %s/%s", kind, entity_id)
            return
        self._toggles.set(kind, entity_id, include=include)
        if self.overrides is not None:
            self.overrides.set(kind, entity_id, include=include)
        else:
            log.debug("Queued toggle of %s/%s until defaults are known", kind, entity_id)
        self._inputs_changed(structured=False)

    def reset_overrides(self) -> None:
        """Forget manual toggles and fall back to the rules-engine defaults."""

        if not self.manual_overrides_enabled:
            return
        if self.auto_preview is None or self.library is None:
            return
        self._toggles = ManualOverride()
        self._reconcile()
        self._inputs_changed(structured=False)

    def snapshot_overrides(self) -> ManualOverride | None:
        """Current merged overrides for persisting alongside a variant."""

        if not self.manual_overrides_enabled or self.overrides is None:
            return None
        return self.overrides.copy()

    # ------------------------------------------------------------------ variants

    async def show_variant(self, variant: CvVariant) -> bool:
        """Resolve a stored variant against the current library and display it.

        Returns whether the variant preview was applied; a newer input change
        while the rules engine is answering discards it.
        """

        self.document.invalidate()

        def apply(auto_preview: CvPreview) -> None:
            if self.library is None:
                self._variant_result = None
                self.preview = auto_preview
            else:
                self._variant_result = self.engine.reconcile(
                    self.library, auto_preview, persisted=variant.manual_overrides
                )
                self.preview = self._variant_result.preview
            self.inputs = replace(self.inputs, mode=PreviewMode.JSON)
            self.source = PreviewSource.VARIANT
            self._variant_name = variant.name

        return await self.structured.run_now(
            lambda: self._rules_engine.preview(variant.job_tags, variant.template),
            apply,
        )

    # ------------------------------------------------------------------ internals

    def _inputs_changed(self, *, structured: bool) -> None:
        entered_live = self._enter_live()
        self._rebuild_live_preview()
        if structured or entered_live:
            self._schedule_structured()
        self._schedule_document()

    def _enter_live(self) -> bool:
        if self.source is PreviewSource.LIVE:
            return False
        log.debug("Preview source VARIANT -> LIVE")
        self.source = PreviewSource.LIVE
        self._variant_name = None
        self._variant_result = None
        return True

    def _schedule_structured(self) -> None:
        if self.source is not PreviewSource.LIVE:
            return
        job_tags = self.inputs.job_tags
        template = self.inputs.effective_template
        self.structured.schedule(
            lambda: self._rules_engine.preview(job_tags, template),
            self._apply_auto_preview,
        )

    def _schedule_document(self) -> None:
        if self.source is not PreviewSource.LIVE or self.inputs.mode is not PreviewMode.PDF:
            # a render issued for the previous inputs must not land
            self.document.invalidate()
            return
        inputs = self.inputs
        overrides = self.snapshot_overrides()
        self.document.schedule(
            lambda: self._rules_engine.render(
                inputs.job_tags,
                inputs.effective_template,
                theme=inputs.effective_theme,
                manual_overrides=overrides,
            ),
            self._apply_rendered,
        )

    def _apply_auto_preview(self, auto_preview: CvPreview) -> None:
        previous = self.snapshot_overrides()
        self.auto_preview = auto_preview
        self._reconcile()
        self._rebuild_live_preview()
        if self.snapshot_overrides() != previous:
            # rendered documents embed the overrides
            self._schedule_document()

    def _apply_rendered(self, rendered: RenderedDocument) -> None:
        self.rendered = rendered

    def _reconcile(self) -> None:
        """Recompute defaults and re-merge the user's toggles over them."""

        if self.auto_preview is None or self.library is None:
            return
        result = self.engine.reconcile(self.library, self.auto_preview, persisted=self._toggles)
        self._matches = result.matches
        self.defaults = result.defaults
        self.overrides = result.overrides
        self._toggles = ManualOverride.from_sections(
            {
                kind: {
                    entity_id: include
                    for entity_id, include in self._toggles.for_kind(kind).items()
                    if entity_id in result.defaults.for_kind(kind)
                }
                for kind in result.matches
            }
        )

    def _rebuild_live_preview(self) -> None:
        if self.source is not PreviewSource.LIVE:
            return
        if self.auto_preview is None:
            self.preview = None
            return
        if self.library is None or self.overrides is None or self._matches is None:
            self.preview = self.auto_preview
            return
        self.preview = self.engine.resolve(
            self.library, self.auto_preview, self._matches, self.overrides
        )
