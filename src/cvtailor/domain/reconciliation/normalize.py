"""Composite matching keys for library entities and rules-engine items.

Rules-engine output carries no identifiers, so value equality under
normalization is the only way to correlate it with the library. A key is the
kind's fields, in a fixed order, normalized and joined with ``KEY_DELIMITER``.
Field order and normalization rules are part of the contract: changing them
changes which library entity an item resolves to.
"""

from __future__ import annotations

from functools import singledispatch
from typing import TYPE_CHECKING

from cvtailor.domain.model import (
    EducationItem,
    ExperienceItem,
    LanguageItem,
    ProjectItem,
    SkillItem,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

type MatchKey = str

KEY_DELIMITER = "|"


def normalize_text(value: str | None) -> str:
    """Trim and lowercase; ``None`` becomes the empty string."""

    if value is None:
        return ""
    return value.strip().lower()


def normalize_list(values: Iterable[str | None] | None) -> str:
    """Order-independent key for tag-like lists; blank entries are ignored."""

    if values is None:
        return ""
    normalized = sorted(text for text in (normalize_text(value) for value in values) if text)
    return KEY_DELIMITER.join(normalized)


def _join(*parts: str) -> MatchKey:
    return KEY_DELIMITER.join(parts)


@singledispatch
def match_key(item: object) -> MatchKey:
    """Derive the composite key of ``item`` (entity or rules-engine item)."""

    raise TypeError(f"No match key defined for {type(item).__name__}")


@match_key.register
def _(item: SkillItem) -> MatchKey:
    return _join(
        normalize_text(item.name),
        normalize_text(item.level),
        normalize_list(item.tags),
        str(item.priority),
    )


@match_key.register
def _(item: ProjectItem) -> MatchKey:
    return _join(
        normalize_text(item.name),
        normalize_text(item.description),
        normalize_text(item.role),
        normalize_list(item.tech),
        normalize_list(item.tags),
        normalize_text(item.url),
    )


@match_key.register
def _(item: ExperienceItem) -> MatchKey:
    return _join(
        normalize_text(item.company),
        normalize_text(item.position),
        normalize_text(item.description),
        normalize_list(item.tags),
        normalize_text(item.start_date),
        normalize_text(item.end_date),
    )


@match_key.register
def _(item: EducationItem) -> MatchKey:
    return _join(
        normalize_text(item.school),
        normalize_text(item.degree),
        normalize_text(item.field),
        normalize_text(item.start_date),
        normalize_text(item.end_date),
    )


@match_key.register
def _(item: LanguageItem) -> MatchKey:
    return _join(normalize_text(item.name), normalize_text(item.level))
