"""Orchestrator for the reconciliation stages.

The engine runs, per kind: match index -> auto match -> default overrides ->
merge with persisted choices -> preview resolution. Every stage is pure; the
engine holds no state beyond its configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cvtailor.domain.model import EntityKind

from .match import match_section
from .overrides import build_default_manual_override, merge_manual_overrides
from .resolve import build_manual_preview

if TYPE_CHECKING:
    from cvtailor.domain.model import CvPreview, Library, ManualOverride

    from .match import MatchResult

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ReconciliationResult:
    matches: dict[EntityKind, MatchResult]
    defaults: ManualOverride
    overrides: ManualOverride
    preview: CvPreview

    @property
    def unmatched(self) -> int:
        return sum(match.unmatched for match in self.matches.values())


@dataclass(slots=True, frozen=True)
class ReconciliationEngine:
    """Match rules-engine output back to the library and apply manual overrides.

    With ``manual_overrides_enabled`` off, persisted choices are ignored and the
    rules-engine preview is passed through untouched.
    """

    manual_overrides_enabled: bool = True

    def match(self, library: Library, auto_preview: CvPreview) -> dict[EntityKind, MatchResult]:
        return {
            kind: match_section(auto_preview.items(kind), library.entities(kind))
            for kind in EntityKind
        }

    def reconcile(
        self,
        library: Library,
        auto_preview: CvPreview,
        persisted: ManualOverride | None = None,
    ) -> ReconciliationResult:
        matches = self.match(library, auto_preview)
        defaults = build_default_manual_override(
            matches, {kind: library.entities(kind) for kind in EntityKind}
        )
        if not self.manual_overrides_enabled:
            return ReconciliationResult(
                matches=matches,
                defaults=defaults,
                overrides=defaults.copy(),
                preview=auto_preview,
            )

        overrides = merge_manual_overrides(defaults, persisted)
        result = ReconciliationResult(
            matches=matches,
            defaults=defaults,
            overrides=overrides,
            preview=build_manual_preview(library, matches, overrides),
        )
        if result.unmatched:
            log.info(
                "%s rules-engine item(s) matched no library entity and were dropped",
                result.unmatched,
            )
        return result

    def resolve(
        self,
        library: Library,
        auto_preview: CvPreview,
        matches: dict[EntityKind, MatchResult],
        overrides: ManualOverride,
    ) -> CvPreview:
        """Re-resolve with already computed matches, e.g. after a toggle."""

        if not self.manual_overrides_enabled:
            return auto_preview
        return build_manual_preview(library, matches, overrides)
