from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.company import CompanyRepository
from database.repositories.job import JobRepository
from database.repositories.bullet_point import BulletPointRepository
from database.repositories.skill import SkillRepository, normalize_skill_name

__all__ = [
    'BaseRepository',
    'UserRepository',
    'CompanyRepository',
    'JobRepository',
    'BulletPointRepository',
    'SkillRepository',
    'normalize_skill_name',
]
