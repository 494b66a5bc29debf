"""Correlate ranked rules-engine items with library identifiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .index import build_match_index
from .normalize import match_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cvtailor.domain.model import LibraryEntity, LibraryItem

    from .index import MatchIndex

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class MatchResult:
    """Library identifiers picked by the rules engine for one kind.

    ``order`` follows the rules-engine rank; ``selected`` holds the same
    identifiers for membership tests. ``unmatched`` counts items that found no
    library entity.
    """

    order: list[str] = field(default_factory=list[str])
    selected: set[str] = field(default_factory=set[str])
    unmatched: int = 0

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.selected


def resolve_auto_match(
    items: Iterable[LibraryItem],
    index: MatchIndex,
) -> MatchResult:
    """Assign each ranked item the first unclaimed library entity with its key.

    Items whose key has no unclaimed entity left are skipped. Duplicates are
    assigned in rank order to entities in library order.
    """

    result = MatchResult()
    for item in items:
        entity_id = index.claim(match_key(item))
        if entity_id is None:
            result.unmatched += 1
            continue
        result.order.append(entity_id)
        result.selected.add(entity_id)
    return result


def match_section(
    items: Iterable[LibraryItem],
    entities: Iterable[LibraryEntity],
) -> MatchResult:
    """Build a fresh index over ``entities`` and match ``items`` against it."""

    result = resolve_auto_match(items, build_match_index(entities))
    if result.unmatched:
        log.debug("Skipped %s rules-engine item(s) without a library match", result.unmatched)
    return result
