"""Final, override-respecting selection of library entities per kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cvtailor.domain.model import CvPreview, EntityKind

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from cvtailor.domain.model import Library, LibraryEntity, ManualOverride, OverrideMap

    from .match import MatchResult


def resolve_section[TEntity: LibraryEntity](
    entities: Sequence[TEntity],
    match: MatchResult,
    overrides: OverrideMap,
) -> list[TEntity]:
    """Auto-matched entities in rank order, then forced-in extras in library order.

    A matched entity is kept unless its override is ``False``. An unmatched
    entity appears only when its override is ``True``. Override keys that name
    no current entity have no effect.
    """

    by_id = {entity.id: entity for entity in entities}
    auto_ordered = [
        by_id[entity_id]
        for entity_id in match.order
        if overrides.get(entity_id) is not False and entity_id in by_id
    ]
    extra = [
        entity
        for entity in entities
        if overrides.get(entity.id) is True and entity.id not in match.selected
    ]
    return auto_ordered + extra


def build_manual_preview(
    library: Library,
    matches: Mapping[EntityKind, MatchResult],
    overrides: ManualOverride,
) -> CvPreview:
    """Resolve every kind and project the result onto identifier-free items."""

    sections = {
        kind.value: tuple(
            entity.to_item()
            for entity in resolve_section(
                library.entities(kind), matches[kind], overrides.for_kind(kind)
            )
        )
        for kind in EntityKind
    }
    return CvPreview(profile=library.profile.to_card(), **sections)
