#!/usr/bin/env python3
"""
Profile Completeness - how much of a profile has been filled in.

Used by the compatibility score (completeness bonus) and as the first
tie-breaker when ranking candidates for display.
"""

from typing import Optional

from core.config_loader import MatchingConfig
from core.scorer.models import Profile
from core.scorer.normalization import is_specified


def calculate_completeness(profile: Profile, config: Optional[MatchingConfig] = None) -> int:
    """
    Sum the weight of every non-empty attribute.

    Default weights: courses 25, interests 25, major 20, year 10,
    learning_style 10, study_preference 10 (total 100).

    Returns:
        Completeness percentage (0-100)
    """
    config = config or MatchingConfig()
    weights = config.completeness
    unspecified = config.unspecified_values

    score = 0
    if profile.courses:
        score += weights.courses
    if profile.interests:
        score += weights.interests
    if is_specified(profile.major, unspecified):
        score += weights.major
    if is_specified(profile.year, unspecified):
        score += weights.year
    if is_specified(profile.learning_style, unspecified):
        score += weights.learning_style
    if is_specified(profile.study_preference, unspecified):
        score += weights.study_preference

    return max(0, min(100, score))
