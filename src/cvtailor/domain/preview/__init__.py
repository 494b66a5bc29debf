"""Preview orchestration: debounced, fenced recomputation of CV previews."""

from __future__ import annotations

from .channel import PreviewChannel
from .orchestrator import PreviewOrchestrator
from .state import (
    DEFAULT_DEBOUNCE_SECONDS,
    PreviewInputs,
    PreviewMode,
    PreviewSettings,
    PreviewSource,
)

__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "PreviewChannel",
    "PreviewInputs",
    "PreviewMode",
    "PreviewOrchestrator",
    "PreviewSettings",
    "PreviewSource",
]
