#!/usr/bin/env python3
"""
Compatibility Scorer - single entry point for qualification and scoring.

Binds a MatchingConfig to the pure functions in this package so the
regenerator and the suggestion queries score pairs identically.
Performs no I/O.
"""

from typing import Optional, Tuple
import logging

from core.config_loader import MatchingConfig
from core.scorer.models import Profile, CompatibilityBreakdown, ScoredCandidate
from core.scorer import completeness as completeness_calculations
from core.scorer import compatibility, qualification

logger = logging.getLogger(__name__)


class CompatibilityScorer:
    """
    Stateless scorer over pairs of profiles.

    - qualifies(): eligibility predicate (course <-> interest cross match)
    - score(): 0-100 compatibility with breakdown, candidate-directional
    - pair_score(): direction-free score persisted on suggestion rows
    - evaluate(): both at once, as a ScoredCandidate
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or MatchingConfig()

    def qualifies(self, a: Profile, b: Profile) -> bool:
        return qualification.qualifies(a, b)

    def score(self, a: Profile, b: Profile) -> Tuple[int, CompatibilityBreakdown]:
        return compatibility.calculate_compatibility(a, b, self.config)

    def pair_score(self, a: Profile, b: Profile) -> int:
        """Order-independent score for a stored pair: the higher of both directions."""
        forward, _ = self.score(a, b)
        backward, _ = self.score(b, a)
        return max(forward, backward)

    def completeness(self, profile: Profile) -> int:
        return completeness_calculations.calculate_completeness(profile, self.config)

    def evaluate(self, a: Profile, b: Profile, require_qualification: bool = True) -> ScoredCandidate:
        """Qualify and score candidate b for subject a.

        With require_qualification, a non-qualifying pair is returned with
        score 0 and an empty breakdown instead of being scored.
        """
        is_match = self.qualifies(a, b)
        candidate_completeness = self.completeness(b)

        if require_qualification and not is_match:
            return ScoredCandidate(
                profile=b,
                qualifies=False,
                score=0,
                completeness=candidate_completeness,
                breakdown=CompatibilityBreakdown(candidate_completeness=candidate_completeness)
            )

        score, breakdown = self.score(a, b)
        return ScoredCandidate(
            profile=b,
            qualifies=is_match,
            score=score,
            completeness=candidate_completeness,
            breakdown=breakdown
        )
