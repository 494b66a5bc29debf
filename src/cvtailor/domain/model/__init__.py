"""Domain model for career libraries, CV previews and manual overrides."""

from __future__ import annotations

from .enums import EntityKind, SkillsLayout, Template
from .library import (
    CvPreview,
    Education,
    EducationItem,
    Experience,
    ExperienceItem,
    Language,
    LanguageItem,
    Library,
    LibraryEntity,
    LibraryItem,
    Profile,
    ProfileCard,
    Project,
    ProjectItem,
    Skill,
    SkillItem,
)
from .overrides import ManualOverride, OverrideMap
from .theme import (
    DEFAULT_THEMES,
    CvTheme,
    FontScale,
    Spacing,
    ThemeLayout,
    default_theme,
    supports_theme,
)
from .variant import CvVariant, VariantDraft

__all__ = [
    "DEFAULT_THEMES",
    "CvPreview",
    "CvTheme",
    "CvVariant",
    "Education",
    "EducationItem",
    "EntityKind",
    "Experience",
    "ExperienceItem",
    "FontScale",
    "Language",
    "LanguageItem",
    "Library",
    "LibraryEntity",
    "LibraryItem",
    "ManualOverride",
    "OverrideMap",
    "Profile",
    "ProfileCard",
    "Project",
    "ProjectItem",
    "Skill",
    "SkillItem",
    "SkillsLayout",
    "Spacing",
    "Template",
    "ThemeLayout",
    "VariantDraft",
    "default_theme",
    "supports_theme",
]
