"""Content reconciliation between the career library and rules-engine output.

Layered flow, per kind:
1) derive composite keys (``normalize``)
2) index library identifiers by key (``index``)
3) match ranked rules-engine items to identifiers (``match``)
4) synthesize a total default override map and merge persisted choices (``overrides``)
5) resolve the final ordered selection (``resolve``)
"""

from __future__ import annotations

from .engine import ReconciliationEngine, ReconciliationResult
from .index import MatchIndex, build_match_index
from .match import MatchResult, match_section, resolve_auto_match
from .normalize import KEY_DELIMITER, match_key, normalize_list, normalize_text
from .overrides import (
    build_default_manual_override,
    build_default_overrides,
    merge_manual_overrides,
    merge_overrides,
)
from .resolve import build_manual_preview, resolve_section

__all__ = [
    "KEY_DELIMITER",
    "MatchIndex",
    "MatchResult",
    "ReconciliationEngine",
    "ReconciliationResult",
    "build_default_manual_override",
    "build_default_overrides",
    "build_manual_preview",
    "build_match_index",
    "match_key",
    "match_section",
    "merge_manual_overrides",
    "merge_overrides",
    "normalize_list",
    "normalize_text",
    "resolve_auto_match",
    "resolve_section",
]
