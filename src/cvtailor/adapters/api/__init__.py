"""Adapters for the remote CV service."""

from __future__ import annotations

from .client import ApiClient, ApiError
from .library import HttpLibraryReader
from .rules_engine import HttpRulesEngine
from .translator import (
    parse_cv_preview,
    parse_variant,
    serialize_overrides,
    serialize_preview,
    serialize_theme,
)
from .variants import HttpVariantRepository

__all__ = [
    "ApiClient",
    "ApiError",
    "HttpLibraryReader",
    "HttpRulesEngine",
    "HttpVariantRepository",
    "parse_cv_preview",
    "parse_variant",
    "serialize_overrides",
    "serialize_preview",
    "serialize_theme",
]
