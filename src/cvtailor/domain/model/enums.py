"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Library section a career fact belongs to.

    Values double as the section names of preview payloads and override maps.
    """

    SKILLS = "skills"
    PROJECTS = "projects"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    LANGUAGES = "languages"


class Template(StrEnum):
    ATS = "ats"
    DEV = "dev"
    PREMIUM = "premium"
    PREMIUM_MODERN = "premium-modern"
    PREMIUM_EXECUTIVE = "premium-executive"


class SkillsLayout(StrEnum):
    LIST = "list"
    INLINE = "inline"
    GROUPED = "grouped"
