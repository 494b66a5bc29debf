"""Library entities and their identifier-free projections.

Every kind comes in two shapes:

- ``*Item``: the public fields only. This is what the rules engine returns and
  what a resolved preview renders.
- the entity itself (``Skill``, ``Project`` ...): an ``*Item`` plus the stable
  identifier assigned by the library store.

Entities subclass their item type so key derivation dispatches on both.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import EntityKind

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True, kw_only=True)
class SkillItem:
    name: str
    level: str | None = None
    tags: tuple[str, ...] = ()
    priority: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class ProjectItem:
    name: str
    description: str = ""
    role: str | None = None
    tech: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExperienceItem:
    company: str
    position: str
    description: str = ""
    tags: tuple[str, ...] = ()
    start_date: str = ""
    end_date: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EducationItem:
    school: str
    degree: str | None = None
    field: str | None = None
    start_date: str | None = None
    end_date: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LanguageItem:
    name: str
    level: str | None = None


type LibraryItem = SkillItem | ProjectItem | ExperienceItem | EducationItem | LanguageItem


@dataclass(frozen=True, slots=True, kw_only=True)
class Skill(SkillItem):
    id: str

    def to_item(self) -> SkillItem:
        return SkillItem(name=self.name, level=self.level, tags=self.tags, priority=self.priority)


@dataclass(frozen=True, slots=True, kw_only=True)
class Project(ProjectItem):
    id: str

    def to_item(self) -> ProjectItem:
        return ProjectItem(
            name=self.name,
            description=self.description,
            role=self.role,
            tech=self.tech,
            tags=self.tags,
            url=self.url,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Experience(ExperienceItem):
    id: str

    def to_item(self) -> ExperienceItem:
        return ExperienceItem(
            company=self.company,
            position=self.position,
            description=self.description,
            tags=self.tags,
            start_date=self.start_date,
            end_date=self.end_date,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Education(EducationItem):
    id: str

    def to_item(self) -> EducationItem:
        return EducationItem(
            school=self.school,
            degree=self.degree,
            field=self.field,
            start_date=self.start_date,
            end_date=self.end_date,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Language(LanguageItem):
    id: str

    def to_item(self) -> LanguageItem:
        return LanguageItem(name=self.name, level=self.level)


type LibraryEntity = Skill | Project | Experience | Education | Language


@dataclass(frozen=True, slots=True, kw_only=True)
class ProfileCard:
    """Public profile fields as rendered on a CV."""

    full_name: str
    title: str | None = None
    summary: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Profile(ProfileCard):
    id: str

    def to_card(self) -> ProfileCard:
        return ProfileCard(
            full_name=self.full_name,
            title=self.title,
            summary=self.summary,
            location=self.location,
            email=self.email,
            phone=self.phone,
            website=self.website,
            github=self.github,
            linkedin=self.linkedin,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Library:
    """Snapshot of a user's career facts in storage order."""

    profile: Profile
    skills: tuple[Skill, ...] = ()
    projects: tuple[Project, ...] = ()
    experience: tuple[Experience, ...] = ()
    education: tuple[Education, ...] = ()
    languages: tuple[Language, ...] = ()

    def entities(self, kind: EntityKind) -> tuple[LibraryEntity, ...]:
        return getattr(self, kind.value)

    def ids(self, kind: EntityKind) -> tuple[str, ...]:
        return tuple(entity.id for entity in self.entities(kind))

    def sections(self) -> Iterator[tuple[EntityKind, tuple[LibraryEntity, ...]]]:
        for kind in EntityKind:
            yield kind, self.entities(kind)


@dataclass(frozen=True, slots=True, kw_only=True)
class CvPreview:
    """Section-by-section content of one CV, without identifiers.

    Used both for the rules-engine output and for the resolved final preview.
    """

    profile: ProfileCard
    skills: tuple[SkillItem, ...] = ()
    projects: tuple[ProjectItem, ...] = ()
    experience: tuple[ExperienceItem, ...] = ()
    education: tuple[EducationItem, ...] = ()
    languages: tuple[LanguageItem, ...] = ()

    def items(self, kind: EntityKind) -> tuple[LibraryItem, ...]:
        return getattr(self, kind.value)
