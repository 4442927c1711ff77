#!/usr/bin/env python3
"""
Match service - converts core regenerator/scorer results into API models.
"""

import logging
from typing import List, Optional

from core.regenerator import (
    BatchRegenerationResult,
    MatchRegenerator,
    MatchSuggestionRecord,
    RegenerationResult,
    SuggestionService,
)
from core.scorer import CompatibilityBreakdown, ScoredCandidate
from ..models.responses import (
    BatchRegenerationResponse,
    BreakdownDetail,
    CandidateProfile,
    PreviewResponse,
    RankedSuggestionDetail,
    RegenerationResponse,
    SuggestionSummary,
    SuggestionsResponse,
)
from ..utils import safe_int, safe_datetime_iso, sorted_terms

logger = logging.getLogger(__name__)


def to_breakdown(breakdown: CompatibilityBreakdown) -> BreakdownDetail:
    return BreakdownDetail(
        teaching_matches=breakdown.teaching_matches,
        learning_matches=breakdown.learning_matches,
        shared_interests=breakdown.shared_interests,
        shared_courses=breakdown.shared_courses,
        contributions=breakdown.contributions,
        reasons=breakdown.reasons,
        raw_total=breakdown.raw_total
    )


def to_candidate(candidate: ScoredCandidate) -> CandidateProfile:
    profile = candidate.profile
    return CandidateProfile(
        user_id=profile.user_id,
        courses=sorted_terms(profile.courses),
        interests=sorted_terms(profile.interests),
        major=profile.major,
        year=profile.year,
        learning_style=profile.learning_style,
        study_preference=profile.study_preference,
        completeness=safe_int(candidate.completeness)
    )


def to_suggestion_summary(row: MatchSuggestionRecord, viewer_id: str) -> SuggestionSummary:
    return SuggestionSummary(
        suggestion_id=row.id,
        user_id=row.other_user(viewer_id),
        compatibility_score=safe_int(row.compatibility_score),
        status=row.status,
        created_at=safe_datetime_iso(row.created_at),
        updated_at=safe_datetime_iso(row.updated_at)
    )


class MatchService:
    """Service for the matches API."""

    def __init__(self, regenerator: MatchRegenerator, suggestions: SuggestionService):
        self.regenerator = regenerator
        self.suggestions = suggestions

    def get_suggestions(
        self,
        user_id: str,
        include_advanced: bool = False,
        limit: Optional[int] = None
    ) -> SuggestionsResponse:
        """
        Get a user's stored suggestions, best first.

        Raises:
            ProfileNotFound: if the user has no profile yet
        """
        ranked = self.suggestions.ranked_suggestions(
            user_id, include_advanced=include_advanced, limit=limit
        )

        details: List[RankedSuggestionDetail] = []
        for item in ranked:
            summary = to_suggestion_summary(item.suggestion, user_id)
            details.append(RankedSuggestionDetail(
                **summary.model_dump(),
                candidate=to_candidate(item.candidate),
                breakdown=to_breakdown(item.candidate.breakdown)
            ))

        return SuggestionsResponse(
            success=True,
            user_id=user_id,
            count=len(details),
            suggestions=details
        )

    def get_preview(self, user_id: str, other_id: str) -> PreviewResponse:
        preview = self.suggestions.preview(user_id, other_id)
        candidate = preview.candidate
        suggestion = None
        if preview.suggestion is not None:
            suggestion = to_suggestion_summary(preview.suggestion, user_id)

        return PreviewResponse(
            success=True,
            user_id=user_id,
            other_id=other_id,
            qualifies=candidate.qualifies,
            score=candidate.score,
            candidate=to_candidate(candidate),
            breakdown=to_breakdown(candidate.breakdown),
            suggestion=suggestion
        )

    def regenerate_user(self, user_id: str) -> RegenerationResponse:
        result: RegenerationResult = self.regenerator.regenerate_for_user(user_id)
        return RegenerationResponse(
            success=not result.failed_pairs,
            user_id=result.user_id,
            profile_found=result.profile_found,
            candidates_checked=result.candidates_checked,
            qualifying=result.qualifying,
            created=result.created,
            updated=result.updated,
            unchanged=result.unchanged,
            deleted=result.deleted,
            preserved=result.preserved,
            failed_pairs=result.failed_pairs
        )

    def regenerate_all(self) -> BatchRegenerationResponse:
        batch: BatchRegenerationResult = self.regenerator.regenerate_all()
        if batch.failures:
            logger.warning(f"Full regeneration finished with {len(batch.failures)} failed users")
        return BatchRegenerationResponse(
            success=batch.success,
            users_total=batch.users_total,
            users_processed=batch.users_processed,
            users_without_profile=batch.users_without_profile,
            created=batch.created,
            updated=batch.updated,
            deleted=batch.deleted,
            failed_pairs=batch.failed_pairs,
            failures=batch.failures,
            cancelled=batch.cancelled,
            execution_time=round(batch.execution_time, 3)
        )
