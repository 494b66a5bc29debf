from __future__ import annotations

import pytest

from cvtailor.domain.model import (
    DEFAULT_THEMES,
    SkillsLayout,
    Template,
    default_theme,
    supports_theme,
)
from cvtailor.domain.preview import PreviewInputs


def test_only_premium_variants_support_themes() -> None:
    assert supports_theme(Template.PREMIUM_MODERN)
    assert supports_theme(Template.PREMIUM_EXECUTIVE)
    assert not supports_theme(Template.PREMIUM)
    assert not supports_theme(Template.ATS)
    assert not supports_theme("unknown")


def test_default_theme_falls_back_to_modern() -> None:
    assert default_theme(Template.DEV) == DEFAULT_THEMES[Template.PREMIUM_MODERN]
    assert default_theme(Template.PREMIUM_EXECUTIVE).layout.sidebar_width == 220


def test_update_merges_nested_sections() -> None:
    theme = default_theme(Template.PREMIUM_EXECUTIVE)

    updated = theme.updated(
        {
            "primary_color": "#000000",
            "skills_layout": "grouped",
            "font_scale": {"name": 30},
            "layout": {"column_gap": 12},
        }
    )

    assert updated.primary_color == "#000000"
    assert updated.skills_layout is SkillsLayout.GROUPED
    assert updated.font_scale.name == 30
    assert updated.font_scale.body == theme.font_scale.body
    assert updated.layout.column_gap == 12
    assert updated.layout.sidebar_width == 220
    assert theme.primary_color == "#0f172a"


def test_update_rejects_non_mapping_sections() -> None:
    with pytest.raises(TypeError):
        default_theme(Template.PREMIUM_MODERN).updated({"spacing": 3})


def test_effective_theme_follows_effective_template() -> None:
    live = PreviewInputs(template=Template.PREMIUM_MODERN, ats_preview=False)
    ats = PreviewInputs(template=Template.PREMIUM_MODERN, ats_preview=True)

    assert live.effective_template == Template.PREMIUM_MODERN
    assert live.effective_theme == default_theme(Template.PREMIUM_MODERN)
    assert ats.effective_template == Template.ATS
    assert ats.effective_theme is None
