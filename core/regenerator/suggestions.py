#!/usr/bin/env python3
"""
Suggestion queries - read-side views over stored suggestions.

Both views score pairs with the same CompatibilityScorer the regenerator
uses, so the numbers a user sees match the ones that created their rows.
"""

import logging
from typing import List, Optional

from core.exceptions import ProfileNotFound
from core.regenerator.interfaces import ProfileStore, MatchStore
from core.regenerator.models import MatchStatus, PairPreview, RankedSuggestion
from core.regenerator.pair_key import PairKey
from core.scorer import CompatibilityScorer, ranking_key

logger = logging.getLogger(__name__)


class SuggestionService:
    """Ranked listing and pairwise preview of match suggestions."""

    def __init__(
        self,
        profile_store: ProfileStore,
        match_store: MatchStore,
        scorer: Optional[CompatibilityScorer] = None
    ):
        self.profile_store = profile_store
        self.match_store = match_store
        self.scorer = scorer or CompatibilityScorer()

    def ranked_suggestions(
        self,
        user_id: str,
        include_advanced: bool = False,
        limit: Optional[int] = None
    ) -> List[RankedSuggestion]:
        """
        Stored rows for user_id, best first.

        Ordered by stored compatibility_score desc, then candidate
        completeness desc, then candidate user_id asc.

        Args:
            user_id: User to list suggestions for
            include_advanced: Also return rows whose status moved past 'suggestion'
            limit: Maximum number of rows to return

        Raises:
            ProfileNotFound: if user_id has no profile
        """
        subject = self.profile_store.get_profile(user_id)
        if subject is None:
            raise ProfileNotFound(user_id)

        status = None if include_advanced else MatchStatus.SUGGESTION
        rows = self.match_store.list_suggestions_for_user(user_id, status=status)
        if not rows:
            return []

        profiles = {p.user_id: p for p in self.profile_store.list_profiles_except(user_id)}

        ranked = []
        for row in rows:
            other_id = row.other_user(user_id)
            other = profiles.get(other_id)
            if other is None:
                logger.debug(f"Suggestion {row.id} points at user {other_id} without a profile; skipping")
                continue
            candidate = self.scorer.evaluate(subject, other, require_qualification=False)
            ranked.append(RankedSuggestion(suggestion=row, candidate=candidate))

        ranked.sort(key=lambda r: ranking_key(r.suggestion.compatibility_score, r.candidate))

        if limit is not None:
            ranked = ranked[:limit]
        return ranked

    def preview(self, user_id: str, other_id: str) -> PairPreview:
        """
        Score other_id for user_id without persisting anything.

        Non-qualifying pairs are still scored so the UI can explain why
        no suggestion exists.

        Raises:
            ValueError: if both ids are the same user
            ProfileNotFound: if either user has no profile
        """
        pair_key = PairKey.of(user_id, other_id)

        subject = self.profile_store.get_profile(user_id)
        if subject is None:
            raise ProfileNotFound(user_id)
        other = self.profile_store.get_profile(other_id)
        if other is None:
            raise ProfileNotFound(other_id)

        candidate = self.scorer.evaluate(subject, other, require_qualification=False)
        return PairPreview(
            subject_id=user_id,
            candidate=candidate,
            suggestion=self.match_store.find_suggestion(pair_key)
        )
