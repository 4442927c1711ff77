#!/usr/bin/env python3
"""
Store Protocols - abstract interfaces the regenerator depends on.

Implementations:
- database.stores.SqlProfileStore / SqlMatchStore (SQLAlchemy)
- tests.mocks.store_mocks.InMemoryStore (tests)

Implementations must return courses/interests already normalized to lists of
strings and raise core.exceptions errors (StoreUnavailable, PairWriteConflict)
instead of driver exceptions.
"""
from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from core.regenerator.models import MatchSuggestionRecord
from core.regenerator.pair_key import PairKey
from core.scorer.models import Profile


@runtime_checkable
class ProfileStore(Protocol):
    """
    Read access to user profiles.
    """

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[Profile]:
        """
        Fetch one profile.

        Returns:
            The profile, or None if the user has not saved one yet
        """
        pass

    @abstractmethod
    def list_profiles_except(self, user_id: str) -> List[Profile]:
        """Every profile other than user_id's (the candidate set)."""
        pass

    @abstractmethod
    def list_all_profiles(self) -> List[Profile]:
        pass


@runtime_checkable
class MatchStore(Protocol):
    """
    Read/write access to match suggestions keyed by unordered pair.

    Each write must be atomic for its pair. Concurrent duplicate inserts
    for the same pair must be rejected with PairWriteConflict.
    """

    @abstractmethod
    def find_suggestion(self, pair_key: PairKey) -> Optional[MatchSuggestionRecord]:
        pass

    @abstractmethod
    def create_suggestion(self, pair_key: PairKey, score: int) -> MatchSuggestionRecord:
        """
        Create a row with status 'suggestion'.

        Raises:
            PairWriteConflict: if a row already exists for the pair
        """
        pass

    @abstractmethod
    def update_suggestion_score(self, suggestion_id: str, score: int) -> None:
        """
        Update the score of a row that still has status 'suggestion'.

        Raises:
            PairWriteConflict: if the row is gone or its status has advanced
        """
        pass

    @abstractmethod
    def delete_suggestion(self, suggestion_id: str) -> None:
        """
        Delete a row that still has status 'suggestion'.

        Raises:
            PairWriteConflict: if the row's status has advanced
        """
        pass

    @abstractmethod
    def list_suggestions_for_user(
        self,
        user_id: str,
        status: Optional[str] = None
    ) -> List[MatchSuggestionRecord]:
        """
        Rows where user_id is either side of the pair.

        Args:
            user_id: User to list rows for
            status: Optional status filter (None = every status)
        """
        pass
