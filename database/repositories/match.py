import logging
import uuid
from typing import List, Optional, Any
from sqlalchemy import select, update, delete, or_, func

from database.models import MatchSuggestion
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

SUGGESTION_STATUS = 'suggestion'


def _as_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class MatchSuggestionRepository(BaseRepository):
    def get_by_id(self, suggestion_id: Any) -> Optional[MatchSuggestion]:
        stmt = select(MatchSuggestion).where(MatchSuggestion.id == _as_uuid(suggestion_id))
        return self._first(stmt)

    def get_by_pair(self, user_id_a: str, user_id_b: str) -> Optional[MatchSuggestion]:
        stmt = select(MatchSuggestion).where(
            MatchSuggestion.user_id_a == user_id_a,
            MatchSuggestion.user_id_b == user_id_b
        )
        return self._first(stmt)

    def list_for_user(
        self,
        user_id: str,
        status: Optional[str] = None
    ) -> List[MatchSuggestion]:
        stmt = select(MatchSuggestion).where(
            or_(MatchSuggestion.user_id_a == user_id, MatchSuggestion.user_id_b == user_id)
        )

        if status is not None:
            stmt = stmt.where(MatchSuggestion.status == status)

        stmt = stmt.order_by(MatchSuggestion.compatibility_score.desc())
        return self._all(stmt)

    def create(self, user_id_a: str, user_id_b: str, score: int) -> MatchSuggestion:
        """Insert a new 'suggestion' row. Raises IntegrityError on a duplicate pair at flush."""
        suggestion = MatchSuggestion(
            user_id_a=user_id_a,
            user_id_b=user_id_b,
            compatibility_score=score,
            status=SUGGESTION_STATUS
        )
        self.db.add(suggestion)
        self.db.flush()
        return suggestion

    def update_score_if_suggestion(self, suggestion_id: Any, score: int) -> int:
        """Update the score only while the row is still a suggestion. Returns affected rows."""
        stmt = update(MatchSuggestion).where(
            MatchSuggestion.id == _as_uuid(suggestion_id),
            MatchSuggestion.status == SUGGESTION_STATUS
        ).values(
            compatibility_score=score,
            updated_at=func.now()
        )
        return self._rowcount(stmt)

    def delete_if_suggestion(self, suggestion_id: Any) -> int:
        """Delete the row only while it is still a suggestion. Returns affected rows."""
        stmt = delete(MatchSuggestion).where(
            MatchSuggestion.id == _as_uuid(suggestion_id),
            MatchSuggestion.status == SUGGESTION_STATUS
        )
        return self._rowcount(stmt)

    def update_status(self, suggestion_id: Any, status: str) -> Optional[MatchSuggestion]:
        """Advance a row's status (connection workflow)."""
        suggestion = self.get_by_id(suggestion_id)
        if suggestion is None:
            return None
        suggestion.status = status
        self.db.flush()
        logger.info(f"Suggestion {suggestion_id} moved to status '{status}'")
        return suggestion
