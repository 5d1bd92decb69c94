from datetime import date
from typing import Any, Optional

from database.table_accessor import TableAccessor


def to_date(value: Any) -> Optional[date]:
    """Accept a date or an ISO 'YYYY-MM-DD' string; None stays None."""
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value)


class BaseRepository:
    table: str = ''

    def __init__(self, accessor: TableAccessor):
        self.accessor = accessor

    def get(self, row_id: int, user_id: int) -> Optional[dict]:
        return self.accessor.select_one(self.table, {'id': row_id, 'user_id': user_id})

    def delete(self, row_id: int, user_id: int) -> bool:
        return self.accessor.delete(self.table, {'id': row_id, 'user_id': user_id}) > 0
