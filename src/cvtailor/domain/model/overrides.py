"""Manual inclusion overrides keyed by library identifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from .enums import EntityKind

if TYPE_CHECKING:
    from collections.abc import Mapping

# Absent key: defer to the automatic decision. True forces inclusion, False exclusion.
type OverrideMap = dict[str, bool]


@dataclass(slots=True, kw_only=True)
class ManualOverride:
    """One override map per kind, persisted together with a CV variant."""

    skills: OverrideMap = field(default_factory=dict[str, bool])
    projects: OverrideMap = field(default_factory=dict[str, bool])
    experience: OverrideMap = field(default_factory=dict[str, bool])
    education: OverrideMap = field(default_factory=dict[str, bool])
    languages: OverrideMap = field(default_factory=dict[str, bool])

    def for_kind(self, kind: EntityKind) -> OverrideMap:
        return getattr(self, kind.value)

    def set(self, kind: EntityKind, entity_id: str, *, include: bool) -> None:
        self.for_kind(kind)[entity_id] = include

    def is_empty(self) -> bool:
        return not any(self.for_kind(kind) for kind in EntityKind)

    def copy(self) -> Self:
        return type(self)(**{kind.value: dict(self.for_kind(kind)) for kind in EntityKind})

    @classmethod
    def from_sections(cls, sections: Mapping[EntityKind, OverrideMap]) -> Self:
        return cls(**{kind.value: dict(sections.get(kind, {})) for kind in EntityKind})

    def to_dict(self) -> dict[str, dict[str, bool]]:
        return {kind.value: dict(self.for_kind(kind)) for kind in EntityKind}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, bool]]) -> Self:
        return cls(**{kind.value: dict(data.get(kind.value, {})) for kind in EntityKind})
