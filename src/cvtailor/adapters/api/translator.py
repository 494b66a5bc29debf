"""Translate CV service payloads to domain models and back."""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, cast

from cvtailor.domain.model import (
    CvPreview,
    CvVariant,
    Education,
    EducationItem,
    Experience,
    ExperienceItem,
    Language,
    LanguageItem,
    ManualOverride,
    Profile,
    ProfileCard,
    Project,
    ProjectItem,
    Skill,
    SkillItem,
)

from .schema import (
    CvPreviewPayload,
    CvThemePayload,
    CvVariantPayload,
    EducationPayload,
    ExperiencePayload,
    FontScalePayload,
    LanguagePayload,
    ManualOverridePayload,
    ProfilePayload,
    ProjectPayload,
    SkillPayload,
    SkillsThemePayload,
    SpacingPayload,
    ThemeLayoutPayload,
)

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

    from cvtailor.domain.model import CvTheme, VariantDraft

    from .schema import ProfileCardPayload


def parse_profile(payload: object) -> Profile:
    model = ProfilePayload.model_validate(payload)
    return Profile(id=model.id, **_profile_fields(model))


def _profile_fields(model: ProfileCardPayload) -> dict[str, str | None]:
    return {
        "full_name": model.full_name,
        "title": model.title,
        "summary": model.summary,
        "location": model.location,
        "email": model.email,
        "phone": model.phone,
        "website": model.website,
        "github": model.github,
        "linkedin": model.linkedin,
    }


def parse_skills(payload: object) -> tuple[Skill, ...]:
    return tuple(
        Skill(
            id=model.id,
            name=model.name,
            level=model.level,
            tags=tuple(model.tags),
            priority=model.priority,
        )
        for model in (SkillPayload.model_validate(item) for item in _as_list(payload))
    )


def parse_projects(payload: object) -> tuple[Project, ...]:
    return tuple(
        Project(
            id=model.id,
            name=model.name,
            description=model.description,
            role=model.role,
            tech=tuple(model.tech),
            tags=tuple(model.tags),
            url=model.url,
        )
        for model in (ProjectPayload.model_validate(item) for item in _as_list(payload))
    )


def parse_experience(payload: object) -> tuple[Experience, ...]:
    return tuple(
        Experience(
            id=model.id,
            company=model.company,
            position=model.position,
            description=model.description,
            tags=tuple(model.tags),
            start_date=model.start_date,
            end_date=model.end_date,
        )
        for model in (ExperiencePayload.model_validate(item) for item in _as_list(payload))
    )


def parse_education(payload: object) -> tuple[Education, ...]:
    return tuple(
        Education(
            id=model.id,
            school=model.school,
            degree=model.degree,
            field=model.field,
            start_date=model.start_date,
            end_date=model.end_date,
        )
        for model in (EducationPayload.model_validate(item) for item in _as_list(payload))
    )


def parse_languages(payload: object) -> tuple[Language, ...]:
    return tuple(
        Language(id=model.id, name=model.name, level=model.level)
        for model in (LanguagePayload.model_validate(item) for item in _as_list(payload))
    )


def parse_cv_preview(payload: object) -> CvPreview:
    model = CvPreviewPayload.model_validate(payload)
    return CvPreview(
        profile=ProfileCard(**_profile_fields(model.profile)),
        skills=tuple(
            SkillItem(
                name=item.name,
                level=item.level,
                tags=tuple(item.tags),
                priority=item.priority,
            )
            for item in model.skills
        ),
        projects=tuple(
            ProjectItem(
                name=item.name,
                description=item.description,
                role=item.role,
                tech=tuple(item.tech),
                tags=tuple(item.tags),
                url=item.url,
            )
            for item in model.projects
        ),
        experience=tuple(
            ExperienceItem(
                company=item.company,
                position=item.position,
                description=item.description,
                tags=tuple(item.tags),
                start_date=item.start_date,
                end_date=item.end_date,
            )
            for item in model.experience
        ),
        education=tuple(
            EducationItem(
                school=item.school,
                degree=item.degree,
                field=item.field,
                start_date=item.start_date,
                end_date=item.end_date,
            )
            for item in model.education
        ),
        languages=tuple(
            LanguageItem(name=item.name, level=item.level) for item in model.languages
        ),
    )


def parse_variant(payload: object) -> CvVariant:
    model = CvVariantPayload.model_validate(payload)
    return CvVariant(
        id=model.id,
        name=model.name,
        job_tags=tuple(model.job_tags),
        template=model.template,
        manual_overrides=(
            ManualOverride.from_dict(model.manual_overrides.model_dump())
            if model.manual_overrides is not None
            else None
        ),
        created_at=model.created_at,
    )


def parse_variants(payload: object) -> list[CvVariant]:
    return [parse_variant(item) for item in _as_list(payload)]


def serialize_preview(preview: CvPreview) -> dict[str, object]:
    """Camel-cased JSON payload for a resolved preview; optional fields as ``null``."""

    payload = CvPreviewPayload.model_validate(
        {
            "profile": _dataclass_fields(preview.profile),
            "skills": [_dataclass_fields(item) for item in preview.skills],
            "projects": [_dataclass_fields(item) for item in preview.projects],
            "experience": [_dataclass_fields(item) for item in preview.experience],
            "education": [_dataclass_fields(item) for item in preview.education],
            "languages": [_dataclass_fields(item) for item in preview.languages],
        }
    )
    return payload.model_dump(mode="json", by_alias=True)


def serialize_overrides(overrides: ManualOverride) -> dict[str, dict[str, bool]]:
    return ManualOverridePayload.model_validate(overrides.to_dict()).model_dump()


def serialize_theme(theme: CvTheme) -> dict[str, object]:
    payload = CvThemePayload(
        primary_color=theme.primary_color,
        secondary_color=theme.secondary_color,
        accent_color=theme.accent_color,
        skills=SkillsThemePayload(layout=theme.skills_layout.value),
        font_scale=FontScalePayload(
            name=theme.font_scale.name,
            section=theme.font_scale.section,
            body=theme.font_scale.body,
            meta=theme.font_scale.meta,
        ),
        spacing=SpacingPayload(section=theme.spacing.section, item=theme.spacing.item),
        layout=ThemeLayoutPayload(
            sidebar_width=theme.layout.sidebar_width,
            column_gap=theme.layout.column_gap,
        ),
    )
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def serialize_variant_draft(draft: VariantDraft) -> dict[str, object]:
    body: dict[str, object] = {
        "name": draft.name,
        "jobTags": list(draft.job_tags),
        "template": draft.template,
    }
    if draft.manual_overrides is not None:
        body["manualOverrides"] = serialize_overrides(draft.manual_overrides)
    return body


def _dataclass_fields(value: object) -> dict[str, object]:
    values: dict[str, object] = {}
    for member in fields(cast("DataclassInstance", value)):
        item = getattr(value, member.name)
        values[member.name] = list(item) if isinstance(item, tuple) else item
    return values


def _as_list(payload: object) -> list[object]:
    if not isinstance(payload, list):
        raise TypeError(f"Expected a JSON array, got {type(payload).__name__}")
    return list(payload)  # pyright: ignore[reportUnknownArgumentType]
