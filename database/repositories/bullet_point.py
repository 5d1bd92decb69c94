from typing import List, Optional

from database.repositories.base import BaseRepository


class BulletPointRepository(BaseRepository):
    table = 'bullet_points'

    def list_for_user(self, user_id: int) -> List[dict]:
        return self.accessor.select_many(self.table, {'user_id': user_id}, order_by=('created_at', 'desc'))

    def list_for_job(self, job_id: int, user_id: int) -> List[dict]:
        return self.accessor.select_many(
            self.table, {'job_id': job_id, 'user_id': user_id}, order_by=('id', 'asc')
        )

    def create(self, user_id: int, content: str, job_id: Optional[int] = None) -> dict:
        return self.accessor.insert(self.table, {
            'user_id': user_id,
            'job_id': job_id,
            'content': content,
        })

    def update(self, bullet_point_id: int, user_id: int, **fields) -> Optional[dict]:
        return self.accessor.update(self.table, fields, {'id': bullet_point_id, 'user_id': user_id})

    def delete_all_for_user(self, user_id: int) -> int:
        """Delete every bullet point the user owns; skill links cascade."""
        return self.accessor.delete(self.table, {'user_id': user_id})
