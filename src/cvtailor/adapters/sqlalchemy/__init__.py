"""SQLAlchemy adapter package for the local variant store."""

from __future__ import annotations

from .mappings import create_all_tables, cv_variant_table, metadata
from .repositories import SqlAlchemyVariantRepository
from .unit_of_work import (
    SqlAlchemyVariantUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyVariantRepository",
    "SqlAlchemyVariantUnitOfWork",
    "StartupError",
    "create_all_tables",
    "cv_variant_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
