from __future__ import annotations

from cvtailor.domain.model import EntityKind, Library, ManualOverride, SkillItem
from cvtailor.domain.reconciliation import ReconciliationEngine
from tests.helpers.library import make_auto_preview, make_library, make_skill


def _duplicate_go_library() -> Library:
    return make_library(
        skills=[
            make_skill("s1", "Go", tags=["backend"], priority=1),
            make_skill("s2", "Go", tags=["backend"], priority=1),
        ]
    )


def test_duplicate_skill_scenario() -> None:
    library = _duplicate_go_library()
    auto = make_auto_preview(skills=[SkillItem(name="Go", tags=("backend",), priority=1)])
    engine = ReconciliationEngine()

    result = engine.reconcile(library, auto)

    assert result.matches[EntityKind.SKILLS].order == ["s1"]
    assert result.matches[EntityKind.SKILLS].selected == {"s1"}
    assert result.defaults.skills == {"s1": True, "s2": False}
    assert len(result.preview.skills) == 1

    forced = engine.reconcile(library, auto, persisted=ManualOverride(skills={"s2": True}))

    assert forced.overrides.skills == {"s1": True, "s2": True}
    assert forced.preview.skills == (
        SkillItem(name="Go", tags=("backend",), priority=1),
        SkillItem(name="Go", tags=("backend",), priority=1),
    )


def test_extras_are_appended_after_auto_items() -> None:
    library = make_library(
        skills=[make_skill("s1", "Go"), make_skill("s2", "Python"), make_skill("s3", "SQL")]
    )
    auto = make_auto_preview(skills=[SkillItem(name="SQL")])

    result = ReconciliationEngine().reconcile(
        library, auto, persisted=ManualOverride(skills={"s1": True})
    )

    assert [skill.name for skill in result.preview.skills] == ["SQL", "Go"]


def test_unmatched_items_are_counted() -> None:
    library = make_library(skills=[make_skill("s1", "Go")])
    auto = make_auto_preview(skills=[SkillItem(name="Go"), SkillItem(name="Cobol")])

    result = ReconciliationEngine().reconcile(library, auto)

    assert result.unmatched == 1
    assert [skill.name for skill in result.preview.skills] == ["Go"]


def test_disabled_capability_passes_auto_preview_through() -> None:
    library = make_library(skills=[make_skill("s1", "Go"), make_skill("s2", "Python")])
    auto = make_auto_preview(skills=[SkillItem(name="Go"), SkillItem(name="Cobol")])
    engine = ReconciliationEngine(manual_overrides_enabled=False)

    result = engine.reconcile(library, auto, persisted=ManualOverride(skills={"s2": True}))

    assert result.preview is auto
    assert result.overrides == result.defaults
    assert result.overrides is not result.defaults
    assert engine.resolve(library, auto, result.matches, result.overrides) is auto
