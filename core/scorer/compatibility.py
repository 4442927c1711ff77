#!/usr/bin/env python3
"""
Compatibility Score - bounded 0-100 score with a human-readable breakdown.

Contributions (default points, see ScoringWeights):
- Mutual teaching: 50 per course of A in B's interests
- Mutual learning: 50 per course of B in A's interests
- Shared interests: 40 per interest both list
- Shared courses: 20 per course both list
- Same major: 10, or 5 if the candidate lists a different major
- Same year / learning style / study preference: 5 each
- Candidate completeness bonus: 10 at >= 80%, 5 at >= 50%

The score is directional: b is the candidate being scored for a.
"""

from typing import List, Optional, Tuple
import logging

from core.config_loader import MatchingConfig
from core.scorer.models import Profile, CompatibilityBreakdown
from core.scorer.completeness import calculate_completeness
from core.scorer.normalization import is_specified, normalize_term, term_index
from core.scorer.qualification import cross_matches

logger = logging.getLogger(__name__)


def _shared_terms(mine: List[str], theirs: List[str]) -> List[str]:
    """Terms present in both lists, reported in my casing."""
    their_keys = set(term_index(theirs))
    return [
        original for key, original in term_index(mine).items()
        if key in their_keys
    ]


def _same_value(a: Optional[str], b: Optional[str], unspecified) -> bool:
    if not (is_specified(a, unspecified) and is_specified(b, unspecified)):
        return False
    return normalize_term(a) == normalize_term(b)


def calculate_compatibility(
    a: Profile,
    b: Profile,
    config: Optional[MatchingConfig] = None
) -> Tuple[int, CompatibilityBreakdown]:
    """
    Score candidate b for subject a.

    Args:
        a: Subject profile (the user matches are generated for)
        b: Candidate profile
        config: MatchingConfig with scoring and completeness weights

    Returns:
        (score clamped to [0, max_score], breakdown)
    """
    config = config or MatchingConfig()
    weights = config.scoring
    unspecified = config.unspecified_values

    breakdown = CompatibilityBreakdown()
    contributions = breakdown.contributions
    reasons = breakdown.reasons

    breakdown.teaching_matches = cross_matches(a.courses, b.interests)
    if breakdown.teaching_matches:
        contributions['mutual_teaching'] = weights.mutual_teaching * len(breakdown.teaching_matches)
        reasons.append("You can teach them a course they want")

    breakdown.learning_matches = cross_matches(b.courses, a.interests)
    if breakdown.learning_matches:
        contributions['mutual_learning'] = weights.mutual_learning * len(breakdown.learning_matches)
        reasons.append("They can teach you a course you want")

    breakdown.shared_interests = _shared_terms(a.interests, b.interests)
    if breakdown.shared_interests:
        contributions['shared_interests'] = weights.shared_interest * len(breakdown.shared_interests)
        reasons.append(f"You share {len(breakdown.shared_interests)} interest(s)")

    breakdown.shared_courses = _shared_terms(a.courses, b.courses)
    if breakdown.shared_courses:
        contributions['shared_courses'] = weights.shared_course * len(breakdown.shared_courses)
        reasons.append(f"You both know {len(breakdown.shared_courses)} course(s)")

    if _same_value(a.major, b.major, unspecified):
        contributions['same_major'] = weights.same_major
        reasons.append("Same major")
    elif is_specified(b.major, unspecified):
        contributions['major_present'] = weights.major_present
        reasons.append("Has a declared major")

    if _same_value(a.year, b.year, unspecified):
        contributions['same_year'] = weights.same_year
        reasons.append("Same year")

    if _same_value(a.learning_style, b.learning_style, unspecified):
        contributions['same_learning_style'] = weights.same_learning_style
        reasons.append("Same learning style")

    if _same_value(a.study_preference, b.study_preference, unspecified):
        contributions['same_study_preference'] = weights.same_study_preference
        reasons.append("Same study preference")

    completeness = calculate_completeness(b, config)
    breakdown.candidate_completeness = completeness
    if completeness >= weights.completeness_high_threshold:
        contributions['completeness_bonus'] = weights.completeness_high_bonus
        reasons.append("Complete profile")
    elif completeness >= weights.completeness_mid_threshold:
        contributions['completeness_bonus'] = weights.completeness_mid_bonus
        reasons.append("Mostly complete profile")

    breakdown.raw_total = sum(contributions.values())
    score = max(0, min(weights.max_score, breakdown.raw_total))

    logger.debug(f"Compatibility {a.user_id} -> {b.user_id}: raw={breakdown.raw_total}, score={score}")

    return score, breakdown
