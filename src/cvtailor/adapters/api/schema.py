"""Pydantic models describing the CV service payloads.

The service speaks camelCase JSON; optional fields may be missing or ``null``.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


class ApiBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ErrorPayload(ApiBaseModel):
    error: str | None = None


class ProfileCardPayload(ApiBaseModel):
    full_name: str
    title: str | None = None
    summary: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None


class ProfilePayload(ProfileCardPayload):
    id: str


class SkillItemPayload(ApiBaseModel):
    name: str
    level: str | None = None
    tags: list[str] = Field(default_factory=list[str])
    priority: int = 0

    _normalize_tags = field_validator("tags", mode="before")(_none_to_empty_list)


class SkillPayload(SkillItemPayload):
    id: str


class ProjectItemPayload(ApiBaseModel):
    name: str
    description: str = ""
    role: str | None = None
    tech: list[str] = Field(default_factory=list[str])
    tags: list[str] = Field(default_factory=list[str])
    url: str | None = None

    _normalize_lists = field_validator("tech", "tags", mode="before")(_none_to_empty_list)


class ProjectPayload(ProjectItemPayload):
    id: str


class ExperienceItemPayload(ApiBaseModel):
    company: str
    position: str
    description: str = ""
    tags: list[str] = Field(default_factory=list[str])
    start_date: str = ""
    end_date: str | None = None

    _normalize_tags = field_validator("tags", mode="before")(_none_to_empty_list)


class ExperiencePayload(ExperienceItemPayload):
    id: str


class EducationItemPayload(ApiBaseModel):
    school: str
    degree: str | None = None
    field: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class EducationPayload(EducationItemPayload):
    id: str


class LanguageItemPayload(ApiBaseModel):
    name: str
    level: str | None = None


class LanguagePayload(LanguageItemPayload):
    id: str


class CvPreviewPayload(ApiBaseModel):
    profile: ProfileCardPayload
    skills: list[SkillItemPayload] = Field(default_factory=list[SkillItemPayload])
    projects: list[ProjectItemPayload] = Field(default_factory=list[ProjectItemPayload])
    experience: list[ExperienceItemPayload] = Field(default_factory=list[ExperienceItemPayload])
    education: list[EducationItemPayload] = Field(default_factory=list[EducationItemPayload])
    languages: list[LanguageItemPayload] = Field(default_factory=list[LanguageItemPayload])


class ManualOverridePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    skills: dict[str, bool] = Field(default_factory=dict[str, bool])
    projects: dict[str, bool] = Field(default_factory=dict[str, bool])
    experience: dict[str, bool] = Field(default_factory=dict[str, bool])
    education: dict[str, bool] = Field(default_factory=dict[str, bool])
    languages: dict[str, bool] = Field(default_factory=dict[str, bool])


class CvVariantPayload(ApiBaseModel):
    id: str
    name: str
    job_tags: list[str] = Field(default_factory=list[str])
    template: str
    manual_overrides: ManualOverridePayload | None = None
    created_at: datetime | None = None

    _normalize_tags = field_validator("job_tags", mode="before")(_none_to_empty_list)


class FontScalePayload(ApiBaseModel):
    name: int
    section: int
    body: int
    meta: int


class SpacingPayload(ApiBaseModel):
    section: int
    item: int


class ThemeLayoutPayload(ApiBaseModel):
    sidebar_width: int | None = None
    column_gap: int | None = None


class SkillsThemePayload(ApiBaseModel):
    layout: Literal["list", "inline", "grouped"]


class CvThemePayload(ApiBaseModel):
    primary_color: str
    secondary_color: str
    accent_color: str
    skills: SkillsThemePayload
    font_scale: FontScalePayload
    spacing: SpacingPayload
    layout: ThemeLayoutPayload
