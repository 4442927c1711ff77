#!/usr/bin/env python3
"""
In-memory ProfileStore / MatchStore for regenerator tests.

Enforces the same rules as the SQL adapter: one row per unordered pair,
and score updates / deletes only while a row is still a 'suggestion'.
Failures can be injected per pair or per user.
"""
import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set, Tuple

from core.exceptions import PairWriteConflict, StoreUnavailable
from core.regenerator.models import MatchStatus, MatchSuggestionRecord
from core.regenerator.pair_key import PairKey
from core.scorer.models import Profile


class InMemoryStore:
    """
    Implements both ProfileStore and MatchStore.

    writes records every successful mutation as (operation, pair_key) so
    tests can assert that a run performed no writes.
    """

    def __init__(self, profiles: Optional[List[Profile]] = None):
        self.profiles: Dict[str, Profile] = {}
        self.rows: Dict[str, MatchSuggestionRecord] = {}
        self.writes: List[Tuple[str, PairKey]] = []

        # Failure injection
        self.conflicting_pairs: Set[PairKey] = set()
        self.unavailable_pairs: Set[PairKey] = set()
        self.unavailable_users: Set[str] = set()
        self.profiles_unavailable = False

        self._ids = itertools.count(1)
        self._lock = threading.Lock()

        for profile in profiles or []:
            self.add_profile(profile)

    # -- setup helpers --------------------------------------------------

    def add_profile(self, profile: Profile) -> Profile:
        self.profiles[profile.user_id] = profile
        return profile

    def add_suggestion(
        self,
        first: str,
        second: str,
        score: int,
        status: str = MatchStatus.SUGGESTION
    ) -> MatchSuggestionRecord:
        """Seed a row without recording a write."""
        with self._lock:
            return self._insert(PairKey.of(first, second), score, status)

    def row_for(self, first: str, second: str) -> Optional[MatchSuggestionRecord]:
        pair_key = PairKey.of(first, second)
        for row in self.rows.values():
            if row.pair_key == pair_key:
                return row
        return None

    def _insert(self, pair_key: PairKey, score: int, status: str) -> MatchSuggestionRecord:
        now = datetime.now(timezone.utc)
        row = MatchSuggestionRecord(
            id=str(next(self._ids)),
            pair_key=pair_key,
            compatibility_score=score,
            status=status,
            created_at=now,
            updated_at=now
        )
        self.rows[row.id] = row
        return row

    def _check_pair(self, pair_key: PairKey) -> None:
        if pair_key in self.unavailable_pairs:
            raise StoreUnavailable(f"Injected outage for pair {pair_key}")
        if pair_key in self.conflicting_pairs:
            raise PairWriteConflict(pair_key, "injected conflict")

    # -- ProfileStore ---------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[Profile]:
        if self.profiles_unavailable:
            raise StoreUnavailable("Injected profile store outage")
        return self.profiles.get(user_id)

    def list_profiles_except(self, user_id: str) -> List[Profile]:
        if self.profiles_unavailable or user_id in self.unavailable_users:
            raise StoreUnavailable(f"Injected outage listing candidates for {user_id}")
        return [p for uid, p in sorted(self.profiles.items()) if uid != user_id]

    def list_all_profiles(self) -> List[Profile]:
        if self.profiles_unavailable:
            raise StoreUnavailable("Injected profile store outage")
        return [p for _, p in sorted(self.profiles.items())]

    # -- MatchStore -----------------------------------------------------

    def find_suggestion(self, pair_key: PairKey) -> Optional[MatchSuggestionRecord]:
        return self.row_for(pair_key.user_id_a, pair_key.user_id_b)

    def create_suggestion(self, pair_key: PairKey, score: int) -> MatchSuggestionRecord:
        with self._lock:
            self._check_pair(pair_key)
            if self.find_suggestion(pair_key) is not None:
                raise PairWriteConflict(pair_key, "row already exists")
            row = self._insert(pair_key, score, MatchStatus.SUGGESTION)
            self.writes.append(('create', pair_key))
            return row

    def update_suggestion_score(self, suggestion_id: str, score: int) -> None:
        with self._lock:
            row = self.rows.get(suggestion_id)
            if row is None or not row.is_suggestion:
                raise PairWriteConflict(suggestion_id, "row is missing or no longer a suggestion")
            self._check_pair(row.pair_key)
            row.compatibility_score = score
            row.updated_at = datetime.now(timezone.utc)
            self.writes.append(('update', row.pair_key))

    def delete_suggestion(self, suggestion_id: str) -> None:
        with self._lock:
            row = self.rows.get(suggestion_id)
            if row is None:
                return
            if not row.is_suggestion:
                raise PairWriteConflict(row.pair_key, "row is no longer a suggestion")
            self._check_pair(row.pair_key)
            del self.rows[suggestion_id]
            self.writes.append(('delete', row.pair_key))

    def list_suggestions_for_user(
        self,
        user_id: str,
        status: Optional[str] = None
    ) -> List[MatchSuggestionRecord]:
        if user_id in self.unavailable_users:
            raise StoreUnavailable(f"Injected outage listing suggestions for {user_id}")
        return [
            row for row in self.rows.values()
            if user_id in row.pair_key and (status is None or row.status == status)
        ]
