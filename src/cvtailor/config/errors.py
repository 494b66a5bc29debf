"""Errors raised while reading cvtailor settings from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """A ``CVTAILOR_*`` setting holds a value that cannot be used."""


class MissingConfigurationError(ConfigurationError):
    """Required settings are unset or blank; ``names`` lists them sorted."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
