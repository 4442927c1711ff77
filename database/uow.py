import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from database.repositories import ProfileRepository, MatchSuggestionRepository

logger = logging.getLogger(__name__)


@dataclass
class MatchingRepositories:
    """Repositories sharing one Session (one transaction)."""
    session: Session
    profiles: ProfileRepository
    suggestions: MatchSuggestionRepository


@contextlib.contextmanager
def matching_uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope.

    Yields MatchingRepositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with matching_uow(session_factory) as repos:
            profile = repos.profiles.get_by_user_id(user_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        yield MatchingRepositories(
            session=session,
            profiles=ProfileRepository(session),
            suggestions=MatchSuggestionRepository(session)
        )
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
