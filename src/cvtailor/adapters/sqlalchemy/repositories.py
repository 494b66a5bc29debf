"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from cvtailor.domain.errors import VariantNotFoundError, VariantStoreError
from cvtailor.domain.model import CvVariant, ManualOverride

from .mappings import cv_variant_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from cvtailor.domain.model import VariantDraft
    from cvtailor.domain.ports import VariantRepository


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class SqlAlchemyVariantRepository:
    """Variant store over a synchronous session owned by a unit of work.

    The methods are coroutines to satisfy the repository port; they complete
    without suspending. Callers commit through the unit of work.
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.session = session
        self._clock = clock
        self._id_factory = id_factory

    async def list_all(self) -> list[CvVariant]:
        stmt = select(cv_variant_table).order_by(
            cv_variant_table.c.created_at.desc(), cv_variant_table.c.id
        )
        rows = self._execute(lambda: self.session.execute(stmt).all())
        return [_row_to_variant(row) for row in rows]

    async def get(self, variant_id: str) -> CvVariant:
        stmt = select(cv_variant_table).where(cv_variant_table.c.id == variant_id)
        row = self._execute(lambda: self.session.execute(stmt).one_or_none())
        if row is None:
            raise VariantNotFoundError(variant_id)
        return _row_to_variant(row)

    async def create(self, draft: VariantDraft) -> CvVariant:
        now = self._clock()
        variant_id = self._id_factory()
        stmt = insert(cv_variant_table).values(
            id=variant_id,
            created_at=now,
            updated_at=now,
            **_draft_values(draft),
        )
        self._execute(lambda: self.session.execute(stmt))
        return await self.get(variant_id)

    async def update(self, variant_id: str, draft: VariantDraft) -> CvVariant:
        stmt = (
            update(cv_variant_table)
            .where(cv_variant_table.c.id == variant_id)
            .values(updated_at=self._clock(), **_draft_values(draft))
        )
        result = self._execute(lambda: self.session.execute(stmt))
        if not result.rowcount:  # pyright: ignore[reportAttributeAccessIssue]
            raise VariantNotFoundError(variant_id)
        return await self.get(variant_id)

    async def delete(self, variant_id: str) -> None:
        stmt = delete(cv_variant_table).where(cv_variant_table.c.id == variant_id)
        result = self._execute(lambda: self.session.execute(stmt))
        if not result.rowcount:  # pyright: ignore[reportAttributeAccessIssue]
            raise VariantNotFoundError(variant_id)

    def _execute[T](self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except SQLAlchemyError as exc:
            raise VariantStoreError(f"Variant store failure: {exc}") from exc


def _draft_values(draft: VariantDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "job_tags": list(draft.job_tags),
        "template": draft.template,
        "manual_overrides": (
            draft.manual_overrides.to_dict() if draft.manual_overrides is not None else None
        ),
    }


def _row_to_variant(row: Row[Any]) -> CvVariant:
    mapping = row._mapping  # noqa: SLF001
    overrides = cast("dict[str, dict[str, bool]] | None", mapping["manual_overrides"])
    return CvVariant(
        id=mapping["id"],
        name=mapping["name"],
        job_tags=tuple(mapping["job_tags"] or ()),
        template=mapping["template"],
        manual_overrides=ManualOverride.from_dict(overrides) if overrides is not None else None,
        created_at=mapping["created_at"],
    )


if TYPE_CHECKING:

    def _repository_check(session: Session) -> VariantRepository:
        return SqlAlchemyVariantRepository(session)
