from .base import Base
from .user import User
from .catalog import Company, Job, BulletPoint, Skill, bullet_point_skills

__all__ = [
    'Base',
    'User',
    'Company',
    'Job',
    'BulletPoint',
    'Skill',
    'bullet_point_skills',
]
