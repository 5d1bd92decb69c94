from typing import Any, List, Optional

from database.repositories.base import BaseRepository, to_date


class JobRepository(BaseRepository):
    table = 'jobs'

    def list_for_user(self, user_id: int) -> List[dict]:
        return self.accessor.select_many(self.table, {'user_id': user_id}, order_by=('start_date', 'desc'))

    def list_for_company(self, company_id: int, user_id: int) -> List[dict]:
        return self.accessor.select_many(
            self.table,
            {'company_id': company_id, 'user_id': user_id},
            order_by=('start_date', 'desc'),
        )

    def create(
        self,
        user_id: int,
        company_id: int,
        title: str,
        start_date: Any = None,
        end_date: Any = None,
        is_current: bool = False,
    ) -> dict:
        return self.accessor.insert(self.table, {
            'user_id': user_id,
            'company_id': company_id,
            'title': title,
            'start_date': to_date(start_date),
            'end_date': None if is_current else to_date(end_date),
            'is_current': is_current,
        })

    def update(self, job_id: int, user_id: int, **fields) -> Optional[dict]:
        for key in ('start_date', 'end_date'):
            if key in fields:
                fields[key] = to_date(fields[key])
        if fields.get('is_current'):
            fields['end_date'] = None
        return self.accessor.update(self.table, fields, {'id': job_id, 'user_id': user_id})
