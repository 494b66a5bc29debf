"""Inputs and modes of the preview orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from cvtailor.domain.model import CvTheme, Template, default_theme, supports_theme

DEFAULT_DEBOUNCE_SECONDS = 0.45


class PreviewSource(StrEnum):
    """Whether the preview tracks live inputs or shows a stored variant."""

    LIVE = "live"
    VARIANT = "variant"


class PreviewMode(StrEnum):
    JSON = "json"
    PDF = "pdf"


@dataclass(frozen=True, slots=True, kw_only=True)
class PreviewSettings:
    """Static configuration of the orchestrator.

    ``manual_overrides_enabled`` is the capability flag for the manual content
    panel; when off, toggles are ignored and previews pass the rules-engine
    selection through unchanged.
    """

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    manual_overrides_enabled: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class PreviewInputs:
    job_tags: tuple[str, ...] = ()
    template: str = Template.ATS
    ats_preview: bool = True
    mode: PreviewMode = PreviewMode.JSON
    theme: CvTheme | None = None

    @property
    def effective_template(self) -> str:
        """Template sent to the rules engine; ATS preview always uses ``ats``."""

        return Template.ATS if self.ats_preview else self.template

    @property
    def selected_theme(self) -> CvTheme:
        return self.theme or default_theme(self.template)

    @property
    def effective_theme(self) -> CvTheme | None:
        if not supports_theme(self.effective_template):
            return None
        return self.selected_theme
