import logging

from sqlalchemy.orm import Session

from database.repositories import (
    BulletPointRepository,
    CompanyRepository,
    JobRepository,
    SkillRepository,
    UserRepository,
)
from database.table_accessor import TableAccessor

logger = logging.getLogger(__name__)


class CatalogRepository:
    """
    Facade bundling the catalog repositories over one TableAccessor.

    Every sub-repository shares the accessor, so they all take part in the
    same transaction.
    """

    def __init__(self, accessor: TableAccessor):
        self.accessor = accessor
        self.users = UserRepository(accessor)
        self.companies = CompanyRepository(accessor)
        self.jobs = JobRepository(accessor)
        self.bullet_points = BulletPointRepository(accessor)
        self.skills = SkillRepository(accessor)

    @classmethod
    def from_session(cls, db: Session) -> "CatalogRepository":
        return cls(TableAccessor(db))
