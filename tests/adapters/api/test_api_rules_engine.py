from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cvtailor.adapters.api import HttpRulesEngine
from cvtailor.domain.errors import RenderUnavailable, RulesEngineUnavailable
from cvtailor.domain.model import (
    CvPreview,
    ManualOverride,
    ProfileCard,
    SkillItem,
    Template,
    default_theme,
)
from cvtailor.domain.ports import RenderedDocument
from tests.helpers.api import Handler, make_api_client

PREVIEW_PAYLOAD = {
    "profile": {"fullName": "Ada Lovelace", "title": "Engineer"},
    "skills": [{"name": "Go", "level": None, "tags": ["backend"], "priority": 1}],
    "projects": [],
    "experience": [
        {
            "company": "ACME",
            "position": "Developer",
            "description": "Built things",
            "tags": None,
            "startDate": "2020-01",
        }
    ],
    "education": [],
    "languages": [{"name": "English"}],
}


def _preview(handler: Handler) -> CvPreview:
    async def scenario() -> CvPreview:
        async with make_api_client(handler) as client:
            return await HttpRulesEngine(client).preview(["backend", "go"], Template.ATS)

    return asyncio.run(scenario())


def test_preview_posts_job_tags_and_template() -> None:
    bodies: list[object] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/cv/preview"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=PREVIEW_PAYLOAD)

    preview = _preview(handler)

    assert bodies == [{"jobTags": ["backend", "go"], "template": "ats"}]
    assert preview.profile == ProfileCard(full_name="Ada Lovelace", title="Engineer")
    assert preview.skills == (SkillItem(name="Go", tags=("backend",), priority=1),)
    assert preview.experience[0].tags == ()
    assert preview.experience[0].end_date is None
    assert preview.languages[0].level is None


def test_preview_failure_becomes_rules_engine_unavailable() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"error": "Unknown template"})

    with pytest.raises(RulesEngineUnavailable) as excinfo:
        _preview(handler)

    assert str(excinfo.value) == "Unknown template"
    assert excinfo.value.status == 422


def test_preview_error_without_json_uses_reason_phrase() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream unavailable")

    with pytest.raises(RulesEngineUnavailable, match="Service Unavailable"):
        _preview(handler)


def test_render_sends_theme_and_overrides() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/cv/preview/pdf"
        bodies.append(json.loads(request.content))
        return httpx.Response(
            200, content=b"%PDF-1.7", headers={"content-type": "application/pdf; charset=binary"}
        )

    async def scenario() -> RenderedDocument:
        async with make_api_client(handler) as client:
            return await HttpRulesEngine(client).render(
                ["go"],
                Template.PREMIUM_EXECUTIVE,
                theme=default_theme(Template.PREMIUM_EXECUTIVE),
                manual_overrides=ManualOverride(skills={"s1": True, "s2": False}),
            )

    document = asyncio.run(scenario())

    assert document == RenderedDocument(content=b"%PDF-1.7", media_type="application/pdf")
    body = bodies[0]
    assert body["jobTags"] == ["go"]
    assert body["template"] == "premium-executive"
    assert body["manualOverrides"] == {
        "skills": {"s1": True, "s2": False},
        "projects": {},
        "experience": {},
        "education": {},
        "languages": {},
    }
    assert body["theme"] == {
        "primaryColor": "#0f172a",
        "secondaryColor": "#1e293b",
        "accentColor": "#1e293b",
        "skills": {"layout": "list"},
        "fontScale": {"name": 22, "section": 11, "body": 12, "meta": 10},
        "spacing": {"section": 12, "item": 10},
        "layout": {"sidebarWidth": 220, "columnGap": 24},
    }


def test_render_without_options_sends_only_inputs() -> None:
    bodies: list[object] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, content=b"%PDF")

    async def scenario() -> None:
        async with make_api_client(handler) as client:
            await HttpRulesEngine(client).render(["go"], Template.ATS)

    asyncio.run(scenario())

    assert bodies == [{"jobTags": ["go"], "template": "ats"}]


def test_export_posts_empty_body_without_options() -> None:
    seen: list[tuple[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"})

    async def scenario() -> RenderedDocument:
        async with make_api_client(handler) as client:
            return await HttpRulesEngine(client).export_variant("cv-42")

    document = asyncio.run(scenario())

    assert seen == [("/api/cv/cv-42/export", {})]
    assert document.content == b"%PDF"


def test_render_failure_becomes_render_unavailable() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "renderer crashed"})

    async def scenario() -> None:
        async with make_api_client(handler) as client:
            await HttpRulesEngine(client).render(["go"], Template.ATS)

    with pytest.raises(RenderUnavailable, match="renderer crashed"):
        asyncio.run(scenario())
