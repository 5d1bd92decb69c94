from typing import List, Optional

from database.repositories.base import BaseRepository


class CompanyRepository(BaseRepository):
    table = 'companies'

    def list_for_user(self, user_id: int) -> List[dict]:
        return self.accessor.select_many(self.table, {'user_id': user_id}, order_by=('name', 'asc'))

    def create(
        self,
        user_id: int,
        name: str,
        city: Optional[str] = None,
        state: Optional[str] = None,
        is_remote: bool = False,
    ) -> dict:
        # Remote companies carry no location
        if is_remote:
            city = state = None
        return self.accessor.insert(self.table, {
            'user_id': user_id,
            'name': name,
            'city': city,
            'state': state,
            'is_remote': is_remote,
        })

    def update(self, company_id: int, user_id: int, **fields) -> Optional[dict]:
        if fields.get('is_remote'):
            fields['city'] = fields['state'] = None
        return self.accessor.update(self.table, fields, {'id': company_id, 'user_id': user_id})
