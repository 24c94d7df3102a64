import contextlib
import logging

from database.database import SessionLocal
from database.repositories.match import MatchRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def match_uow():
    """Per-unit-of-work transaction scope.

    Yields a MatchRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with match_uow() as repo:
            save_ranking(repo, user, matches)
        # commit happens automatically on successful exit
    """
    session = SessionLocal()
    try:
        repo = MatchRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
