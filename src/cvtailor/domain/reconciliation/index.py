"""Per-kind index from composite key to library identifiers."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .normalize import match_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cvtailor.domain.model import LibraryEntity

    from .normalize import MatchKey


@dataclass(slots=True)
class MatchIndex:
    """FIFO queues of identifiers sharing a key, in library storage order.

    Queues are consumed by :meth:`claim`; build a fresh index per match run.
    """

    queues: dict[MatchKey, deque[str]] = field(default_factory=dict[str, deque[str]])

    def add(self, key: MatchKey, entity_id: str) -> None:
        self.queues.setdefault(key, deque()).append(entity_id)

    def claim(self, key: MatchKey) -> str | None:
        """Pop the first unclaimed identifier for ``key``, if any remain."""

        queue = self.queues.get(key)
        if not queue:
            return None
        return queue.popleft()

    def remaining(self, key: MatchKey) -> int:
        queue = self.queues.get(key)
        return len(queue) if queue else 0


def build_match_index(entities: Iterable[LibraryEntity]) -> MatchIndex:
    index = MatchIndex()
    for entity in entities:
        index.add(match_key(entity), entity.id)
    return index
