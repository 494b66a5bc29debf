"""Domain ports (interfaces) for external collaborators."""

from __future__ import annotations

from .library import LibraryReader
from .rules_engine import RenderedDocument, RulesEngine
from .unit_of_work import (
    RepositoryCollection,
    UnitOfWork,
    VariantRepositories,
    VariantUnitOfWork,
)
from .variants import VariantRepository

__all__ = [
    "LibraryReader",
    "RenderedDocument",
    "RepositoryCollection",
    "RulesEngine",
    "UnitOfWork",
    "VariantRepositories",
    "VariantRepository",
    "VariantUnitOfWork",
]
