"""
Generic table accessor over a SQLAlchemy Session.

Five operations, all keyed by table name and an equality filter:
select_one, select_many, insert, update, delete. Rows are returned as
plain dicts so callers never hold ORM state across the session.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import MetaData, Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import Base

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
OrderBy = Tuple[str, str]  # (column, "asc" | "desc")


class DuplicateRowError(Exception):
    """An insert was rejected by a uniqueness or integrity constraint."""

    def __init__(self, table: str, values: Dict[str, Any], original: Exception):
        self.table = table
        self.values = values
        self.original = original
        super().__init__(f"Constraint violation inserting into {table}")


class TableAccessor:
    """Equality-filtered CRUD against tables registered on ``metadata``."""

    def __init__(self, db: Session, metadata: MetaData = Base.metadata):
        self.db = db
        self.metadata = metadata

    def _table(self, name: str) -> Table:
        try:
            return self.metadata.tables[name]
        except KeyError:
            raise KeyError(f"Unknown table: {name}") from None

    @staticmethod
    def _where(table: Table, where: Dict[str, Any]) -> list:
        return [table.c[column] == value for column, value in where.items()]

    def select_one(self, table: str, where: Dict[str, Any]) -> Optional[Row]:
        t = self._table(table)
        stmt = select(t).where(*self._where(t, where)).limit(1)
        row = self.db.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def select_many(
        self,
        table: str,
        where: Dict[str, Any],
        order_by: Optional[OrderBy] = None,
    ) -> List[Row]:
        t = self._table(table)
        stmt = select(t).where(*self._where(t, where))
        if order_by:
            column, direction = order_by
            col = t.c[column]
            stmt = stmt.order_by(col.desc() if direction == 'desc' else col.asc())
        return [dict(row) for row in self.db.execute(stmt).mappings().all()]

    def insert(self, table: str, values: Dict[str, Any]) -> Row:
        """Insert one row and return it as stored.

        The insert runs inside a savepoint so a constraint failure leaves
        the surrounding transaction usable.

        Raises:
            DuplicateRowError: If the database rejects the row
        """
        t = self._table(table)
        stmt = insert(t).values(**values).returning(*t.c)
        try:
            with self.db.begin_nested():
                row = self.db.execute(stmt).mappings().one()
        except IntegrityError as e:
            logger.debug(f"Insert into {table} rejected: {e.orig}")
            raise DuplicateRowError(table, values, e) from e
        return dict(row)

    def update(self, table: str, values: Dict[str, Any], where: Dict[str, Any]) -> Optional[Row]:
        t = self._table(table)
        stmt = update(t).where(*self._where(t, where)).values(**values).returning(*t.c)
        row = self.db.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def delete(self, table: str, where: Dict[str, Any]) -> int:
        t = self._table(table)
        result = self.db.execute(delete(t).where(*self._where(t, where)))
        return result.rowcount or 0
