import logging
from typing import List

from database.repositories.base import BaseRepository
from database.table_accessor import DuplicateRowError

logger = logging.getLogger(__name__)

LINK_TABLE = 'bullet_point_skills'


def normalize_skill_name(name: str) -> str:
    """Identity of a skill within one user's catalog."""
    return name.strip().lower()


class SkillRepository(BaseRepository):
    table = 'skills'

    def list_for_user(self, user_id: int) -> List[dict]:
        return self.accessor.select_many(self.table, {'user_id': user_id}, order_by=('name', 'asc'))

    def find_by_name(self, user_id: int, name: str):
        return self.accessor.select_one(
            self.table, {'user_id': user_id, 'normalized_name': normalize_skill_name(name)}
        )

    def create(self, user_id: int, name: str) -> dict:
        """Insert a skill.

        Raises:
            DuplicateRowError: The user already has a skill with this name
        """
        name = name.strip()
        return self.accessor.insert(self.table, {
            'user_id': user_id,
            'name': name,
            'normalized_name': normalize_skill_name(name),
        })

    def get_or_create(self, user_id: int, name: str) -> dict:
        """Return the user's skill with this name, creating it if needed.

        Concurrent creators race on the (user, normalized name) unique
        constraint; the loser re-reads the winner's row.
        """
        existing = self.find_by_name(user_id, name)
        if existing is not None:
            return existing
        try:
            return self.create(user_id, name)
        except DuplicateRowError:
            logger.info(f"Skill {name!r} created concurrently for user {user_id}; reusing it")
            existing = self.find_by_name(user_id, name)
            if existing is None:
                raise
            return existing

    def link(self, bullet_point_id: int, skill_id: int) -> bool:
        """Link a bullet point to a skill. Returns False if already linked."""
        key = {'bullet_point_id': bullet_point_id, 'skill_id': skill_id}
        if self.accessor.select_one(LINK_TABLE, key) is not None:
            return False
        try:
            self.accessor.insert(LINK_TABLE, key)
        except DuplicateRowError:
            return False
        return True

    def unlink(self, bullet_point_id: int, skill_id: int) -> bool:
        key = {'bullet_point_id': bullet_point_id, 'skill_id': skill_id}
        return self.accessor.delete(LINK_TABLE, key) > 0

    def skills_for_bullet_point(self, bullet_point_id: int) -> List[dict]:
        links = self.accessor.select_many(
            LINK_TABLE, {'bullet_point_id': bullet_point_id}, order_by=('skill_id', 'asc')
        )
        skills = []
        for link in links:
            skill = self.accessor.select_one(self.table, {'id': link['skill_id']})
            if skill is not None:
                skills.append(skill)
        return skills
