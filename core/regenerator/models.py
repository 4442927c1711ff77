"""Data Transfer Objects for the match regenerator.

Store adapters convert ORM rows into these plain objects while their
session is still open, so the regenerator and the web layer never hold
live ORM state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from core.regenerator.pair_key import PairKey
from core.scorer.models import ScoredCandidate


class MatchStatus:
    """Suggestion statuses. Only SUGGESTION is owned by the regenerator."""
    SUGGESTION = "suggestion"
    PENDING_CONNECTION = "pending_connection"
    CONNECTED = "connected"


@dataclass
class MatchSuggestionRecord:
    """A stored suggestion row between two users."""
    id: str
    pair_key: PairKey
    compatibility_score: int
    status: str = MatchStatus.SUGGESTION
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_suggestion(self) -> bool:
        return self.status == MatchStatus.SUGGESTION

    def other_user(self, user_id: str) -> str:
        return self.pair_key.other(user_id)


@dataclass
class RegenerationResult:
    """Outcome of regenerate_for_user()."""
    user_id: str
    profile_found: bool = True
    candidates_checked: int = 0
    qualifying: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    preserved: int = 0
    failed_pairs: List[str] = field(default_factory=list)

    @property
    def writes(self) -> int:
        return self.created + self.updated + self.deleted


@dataclass
class BatchRegenerationResult:
    """Outcome of regenerate_all()."""
    users_total: int = 0
    users_processed: int = 0
    users_without_profile: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0
    failed_pairs: int = 0
    failures: Dict[str, str] = field(default_factory=dict)
    cancelled: bool = False
    execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failures and not self.cancelled

    def add(self, result: RegenerationResult) -> None:
        self.users_processed += 1
        if not result.profile_found:
            self.users_without_profile += 1
        self.created += result.created
        self.updated += result.updated
        self.deleted += result.deleted
        self.failed_pairs += len(result.failed_pairs)


@dataclass
class RankedSuggestion:
    """A stored suggestion joined with a fresh breakdown for display."""
    suggestion: MatchSuggestionRecord
    candidate: ScoredCandidate

    @property
    def user_id(self) -> str:
        return self.candidate.user_id


@dataclass
class PairPreview:
    """Non-persisted compatibility of one pair, plus any stored row."""
    subject_id: str
    candidate: ScoredCandidate
    suggestion: Optional[MatchSuggestionRecord] = None
