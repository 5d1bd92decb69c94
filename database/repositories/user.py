import logging
from typing import Optional

from database.repositories.base import BaseRepository
from database.table_accessor import DuplicateRowError

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    table = 'users'

    def get_by_external_id(self, external_id: str) -> Optional[dict]:
        return self.accessor.select_one(self.table, {'external_id': external_id})

    def get_or_create(self, external_id: str) -> dict:
        """Map an identity-provider subject to the internal user row."""
        user = self.get_by_external_id(external_id)
        if user is not None:
            return user
        try:
            user = self.accessor.insert(self.table, {'external_id': external_id})
            logger.info(f"Created user {user['id']} for new external identity")
            return user
        except DuplicateRowError:
            user = self.get_by_external_id(external_id)
            if user is None:
                raise
            return user
