"""Visual theme settings for the premium document templates."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Self, cast

from .enums import SkillsLayout, Template

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class FontScale:
    name: int
    section: int
    body: int
    meta: int


@dataclass(frozen=True, slots=True, kw_only=True)
class Spacing:
    section: int
    item: int


@dataclass(frozen=True, slots=True, kw_only=True)
class ThemeLayout:
    sidebar_width: int | None = None
    column_gap: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CvTheme:
    primary_color: str
    secondary_color: str
    accent_color: str
    skills_layout: SkillsLayout = SkillsLayout.LIST
    font_scale: FontScale
    spacing: Spacing
    layout: ThemeLayout = field(default_factory=ThemeLayout)

    def updated(self, changes: Mapping[str, object]) -> Self:
        """Return a copy with ``changes`` applied, merging nested sections.

        Nested sections (``font_scale``, ``spacing``, ``layout``) accept partial
        mappings; unspecified keys keep their current value.
        """

        values: dict[str, object] = {}
        for key, value in changes.items():
            if key == "font_scale":
                values[key] = replace(self.font_scale, **_as_mapping(value))
            elif key == "spacing":
                values[key] = replace(self.spacing, **_as_mapping(value))
            elif key == "layout":
                values[key] = replace(self.layout, **_as_mapping(value))
            elif key == "skills_layout":
                values[key] = SkillsLayout(str(value))
            else:
                values[key] = value
        return replace(self, **values)


def _as_mapping(value: object) -> dict[str, object]:
    if not isinstance(value, dict):
        raise TypeError(f"Expected a mapping for a nested theme section, got {type(value)!r}")
    items = cast("dict[object, object]", value).items()
    return {str(key): item for key, item in items}


DEFAULT_THEMES: dict[Template, CvTheme] = {
    Template.PREMIUM_MODERN: CvTheme(
        primary_color="#0f172a",
        secondary_color="#475569",
        accent_color="#0f766e",
        font_scale=FontScale(name=26, section=10, body=12, meta=10),
        spacing=Spacing(section=14, item=10),
        layout=ThemeLayout(column_gap=20),
    ),
    Template.PREMIUM_EXECUTIVE: CvTheme(
        primary_color="#0f172a",
        secondary_color="#1e293b",
        accent_color="#1e293b",
        font_scale=FontScale(name=22, section=11, body=12, meta=10),
        spacing=Spacing(section=12, item=10),
        layout=ThemeLayout(sidebar_width=220, column_gap=24),
    ),
}


def supports_theme(template: str) -> bool:
    return template in DEFAULT_THEMES


def default_theme(template: str) -> CvTheme:
    """Built-in theme for ``template``; falls back to the modern premium theme."""

    if supports_theme(template):
        return DEFAULT_THEMES[Template(template)]
    return DEFAULT_THEMES[Template.PREMIUM_MODERN]
