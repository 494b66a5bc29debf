"""Library reader backed by the CV service CRUD endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from cvtailor.domain.errors import LibraryUnavailable
from cvtailor.domain.model import Library

from .client import ApiError
from .translator import (
    parse_education,
    parse_experience,
    parse_languages,
    parse_profile,
    parse_projects,
    parse_skills,
)

if TYPE_CHECKING:
    from .client import ApiClient

log = getLogger(__name__)


@dataclass(slots=True)
class HttpLibraryReader:
    """Load the profile and all five entity kinds concurrently."""

    client: ApiClient

    async def load(self) -> Library:
        try:
            profile, skills, projects, experience, education, languages = await asyncio.gather(
                self.client.request_json("GET", "/profile"),
                self.client.request_json("GET", "/skills"),
                self.client.request_json("GET", "/projects"),
                self.client.request_json("GET", "/experience"),
                self.client.request_json("GET", "/education"),
                self.client.request_json("GET", "/languages"),
            )
        except ApiError as exc:
            raise LibraryUnavailable(str(exc), status=exc.status) from exc

        try:
            library = Library(
                profile=parse_profile(profile),
                skills=parse_skills(skills),
                projects=parse_projects(projects),
                experience=parse_experience(experience),
                education=parse_education(education),
                languages=parse_languages(languages),
            )
        except (ValidationError, TypeError) as exc:
            raise LibraryUnavailable(f"Malformed library payload: {exc}") from exc

        log.info(
            "Loaded library: %d skills, %d projects, %d experience, %d education, %d languages",
            len(library.skills),
            len(library.projects),
            len(library.experience),
            len(library.education),
            len(library.languages),
        )
        return library
