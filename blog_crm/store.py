"""
Uniform per-table access to the remote database.

A ``Table`` wraps one mapped model and offers the handful of calls the admin
panel needs: ordered select with optional filters and eager joins,
select-by-id, insert, update-by-id and delete-by-id. Records are addressed by
their public ``hex_id``. Every database failure is rolled back and re-raised
as ``StoreError`` carrying the driver's message.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Mapping, TypeVar

import structlog
from sqlalchemy import delete
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from blog_crm.errors import NotFoundError, StoreError
from blog_crm.extensions import db

M = TypeVar("M", bound=db.Model)

log = structlog.get_logger(__name__)


def _store_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc)


class Table(Generic[M]):
    def __init__(self, model: type[M], *, not_found_message: str | None = None) -> None:
        self.model = model
        self.name = model.__tablename__
        self.not_found_message = not_found_message or f"{model.__name__} not found"

    def _fail(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        db.session.rollback()
        message = _store_message(exc)
        log.warning("store_error", table=self.name, operation=operation, error=message)
        return StoreError(message)

    def select(
        self,
        *,
        order_by: str,
        descending: bool = False,
        filters: Mapping[str, Any] | None = None,
        options: Iterable[Any] = (),
    ) -> list[M]:
        column = getattr(self.model, order_by)
        stmt = db.select(self.model).options(*options)
        if filters:
            stmt = stmt.filter_by(**filters)
        stmt = stmt.order_by(column.desc() if descending else column.asc())
        try:
            return list(db.session.execute(stmt).scalars().unique())
        except SQLAlchemyError as e:
            raise self._fail("select", e) from e

    def get(self, record_id: str, *, options: Iterable[Any] = ()) -> M:
        stmt = db.select(self.model).filter_by(hex_id=record_id).options(*options)
        try:
            record = db.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._fail("get", e) from e
        if record is None:
            raise NotFoundError(self.not_found_message)
        return record

    def exists(self, record_id: str) -> bool:
        stmt = db.select(self.model.id).filter_by(hex_id=record_id)
        try:
            return db.session.execute(stmt).first() is not None
        except SQLAlchemyError as e:
            raise self._fail("exists", e) from e

    def insert(self, values: Mapping[str, Any]) -> M:
        record = self.model(**values)
        db.session.add(record)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("insert", e) from e
        log.info("store_insert", table=self.name, id=record.hex_id)
        return record

    def update(self, record_id: str, values: Mapping[str, Any]) -> M:
        record = self.get(record_id)
        for key, value in values.items():
            setattr(record, key, value)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e
        log.info("store_update", table=self.name, id=record_id, fields=sorted(values))
        return record

    def delete(self, record_id: str) -> int:
        """Delete by id without checking that the row exists; returns the row count."""
        stmt = delete(self.model).where(self.model.hex_id == record_id)
        try:
            result = db.session.execute(stmt)
            db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e
        log.info("store_delete", table=self.name, id=record_id, rows=result.rowcount)
        return result.rowcount
