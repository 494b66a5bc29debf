from __future__ import annotations

import pytest


@pytest.fixture
def library_payloads() -> dict[str, object]:
    return {
        "/api/profile": {
            "id": "profile-1",
            "fullName": "Ada Lovelace",
            "title": "Engineer",
            "github": None,
        },
        "/api/skills": [
            {"id": "s1", "name": "Go", "tags": ["backend"], "priority": 1},
            {"id": "s2", "name": "Python", "level": "Senior", "tags": None},
        ],
        "/api/projects": [
            {
                "id": "p1",
                "name": "cvtailor",
                "description": "CV tooling",
                "tech": ["python"],
                "url": "https://example.test",
            }
        ],
        "/api/experience": [
            {
                "id": "x1",
                "company": "ACME",
                "position": "Developer",
                "description": "",
                "tags": [],
                "startDate": "2020-01",
                "endDate": None,
            }
        ],
        "/api/education": [{"id": "e1", "school": "MIT", "degree": "BSc"}],
        "/api/languages": [{"id": "l1", "name": "English", "level": "C2"}],
    }
