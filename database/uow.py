import contextlib
import logging

from database.database import SessionLocal
from database.repository import CatalogRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def catalog_uow():
    """Per-unit-of-work transaction scope.

    Yields a CatalogRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with catalog_uow() as repo:
            user = repo.users.get_or_create(external_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = SessionLocal()
    try:
        repo = CatalogRepository.from_session(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
