"""Default override synthesis and merging with persisted choices."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cvtailor.domain.model import EntityKind, ManualOverride

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cvtailor.domain.model import LibraryEntity, OverrideMap

    from .match import MatchResult


def build_default_overrides(
    match: MatchResult,
    entities: Iterable[LibraryEntity],
) -> OverrideMap:
    """Total map of what the rules engine picked: every entity gets a boolean."""

    return {entity.id: entity.id in match.selected for entity in entities}


def merge_overrides(
    defaults: OverrideMap,
    persisted: OverrideMap | None = None,
) -> OverrideMap:
    """Overlay ``persisted`` choices on ``defaults``.

    The result has exactly the keys of ``defaults``: persisted entries for
    entities that no longer exist are dropped, new entities keep their default.
    """

    if not persisted:
        return dict(defaults)
    return {
        entity_id: persisted.get(entity_id, default)
        for entity_id, default in defaults.items()
    }


def build_default_manual_override(
    matches: Mapping[EntityKind, MatchResult],
    entities: Mapping[EntityKind, Iterable[LibraryEntity]],
) -> ManualOverride:
    return ManualOverride.from_sections(
        {kind: build_default_overrides(matches[kind], entities[kind]) for kind in EntityKind}
    )


def merge_manual_overrides(
    defaults: ManualOverride,
    persisted: ManualOverride | None = None,
) -> ManualOverride:
    if persisted is None:
        return defaults.copy()
    return ManualOverride.from_sections(
        {
            kind: merge_overrides(defaults.for_kind(kind), persisted.for_kind(kind))
            for kind in EntityKind
        }
    )
