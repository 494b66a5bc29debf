"""Preview orchestrator configuration values."""

from __future__ import annotations

from cvtailor.domain.preview import DEFAULT_DEBOUNCE_SECONDS, PreviewSettings

from .env import env_flag, env_float
from .errors import ConfigurationError


def get_preview_settings() -> PreviewSettings:
    """Read ``CVTAILOR_PREVIEW_DEBOUNCE_MS`` and ``CVTAILOR_MANUAL_OVERRIDES``."""

    debounce_ms = env_float(
        "CVTAILOR_PREVIEW_DEBOUNCE_MS", default=DEFAULT_DEBOUNCE_SECONDS * 1000
    )
    if debounce_ms < 0:
        raise ConfigurationError("CVTAILOR_PREVIEW_DEBOUNCE_MS must be non-negative")
    return PreviewSettings(
        debounce_seconds=debounce_ms / 1000,
        manual_overrides_enabled=env_flag("CVTAILOR_MANUAL_OVERRIDES", default=True),
    )
