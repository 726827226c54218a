"""Record store adapter.

Keyed, table-like namespaces backed by SQLAlchemy models. Every call is a
single attempt that commits on success; failures are rolled back and raised
as ``StoreError``. Rows are handed back as plain dicts so the engine never
holds on to ORM instances between calls.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence, Union

from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy import update as sa_update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pathway.models import Base

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class StoreError(Exception):
    """The record store could not complete an operation."""


def row_to_dict(obj: Base) -> dict[str, Any]:
    return {attr.key: getattr(obj, attr.key) for attr in obj.__mapper__.column_attrs}


class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _has(model: type[Base], column: str) -> bool:
        return column in model.__table__.columns

    def _conditions(self, model: type[Base], filters: dict[str, Any]) -> list:
        return [getattr(model, key) == value for key, value in filters.items()]

    def _fail(self, action: str, model: type[Base], exc: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        logger.exception("record store %s on %s failed", action, model.__tablename__)
        return StoreError(f"{action} on {model.__tablename__} failed")

    def select(
        self,
        model: type[Base],
        filters: dict[str, Any],
        order_by: Union[str, Sequence[str], None] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        stmt = select(model).where(*self._conditions(model, filters))
        if order_by:
            names = [order_by] if isinstance(order_by, str) else list(order_by)
            for name in names + ["id"]:
                column = getattr(model, name)
                stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise self._fail("select", model, exc) from exc
        return [row_to_dict(row) for row in rows]

    def insert(self, model: type[Base], values: dict[str, Any]) -> dict[str, Any]:
        obj = model(**values)
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        except SQLAlchemyError as exc:
            raise self._fail("insert", model, exc) from exc
        return row_to_dict(obj)

    def update(self, model: type[Base], filters: dict[str, Any], values: dict[str, Any]) -> int:
        values = dict(values)
        if self._has(model, "updated_at"):
            values["updated_at"] = datetime.utcnow()
        stmt = sa_update(model).where(*self._conditions(model, filters)).values(**values)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update", model, exc) from exc
        return result.rowcount or 0

    def upsert(
        self,
        model: type[Base],
        values: dict[str, Any],
        conflict_keys: Iterable[str],
        update_keys: Optional[Iterable[str]] = None,
    ) -> dict[str, Any]:
        """Insert ``values`` or update the row sharing ``conflict_keys``.

        Runs as one ``INSERT .. ON CONFLICT DO UPDATE`` statement, so the
        conflict columns must carry a unique constraint. ``update_keys``
        limits which columns an existing row receives; by default every
        supplied non-key column is overwritten.
        """
        conflict_keys = list(conflict_keys)
        dialect = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_DIALECTS.get(dialect)
        if insert_fn is None:
            raise StoreError(f"upsert is not supported on {dialect}")

        now = datetime.utcnow()
        row = dict(values)
        if self._has(model, "created_at"):
            row.setdefault("created_at", now)
        if self._has(model, "updated_at"):
            row["updated_at"] = now

        if update_keys is None:
            columns = [key for key in row if key not in conflict_keys and key not in ("id", "created_at")]
        else:
            columns = list(update_keys)
            if self._has(model, "updated_at") and "updated_at" not in columns:
                columns.append("updated_at")

        stmt = insert_fn(model).values(**row)
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_keys,
            set_={key: stmt.excluded[key] for key in columns},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("upsert", model, exc) from exc

        stored = self.select(model, {key: row[key] for key in conflict_keys}, limit=1)
        return stored[0]

    def delete(self, model: type[Base], filters: dict[str, Any]) -> int:
        if not filters:
            raise StoreError(f"refusing unfiltered delete on {model.__tablename__}")
        stmt = sa_delete(model).where(*self._conditions(model, filters))
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", model, exc) from exc
        return result.rowcount or 0
