#!/usr/bin/env python3
"""
Scoring Models - Data structures for profiles and compatibility results.
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field


@dataclass
class Profile:
    """
    Matching view of a user profile.

    courses are the subjects a user can teach, interests the subjects they
    want to learn. Both are expected to be normalized lists of non-empty
    strings (see core.scorer.normalization); original casing is kept for display.
    """
    user_id: str
    courses: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    major: Optional[str] = None
    year: Optional[str] = None
    learning_style: Optional[str] = None
    study_preference: Optional[str] = None


@dataclass
class CompatibilityBreakdown:
    """Which contributions fired for a (subject, candidate) pair."""
    teaching_matches: List[str] = field(default_factory=list)
    learning_matches: List[str] = field(default_factory=list)
    shared_interests: List[str] = field(default_factory=list)
    shared_courses: List[str] = field(default_factory=list)
    contributions: Dict[str, int] = field(default_factory=dict)
    reasons: List[str] = field(default_factory=list)
    raw_total: int = 0
    candidate_completeness: int = 0


@dataclass
class ScoredCandidate:
    """Complete compatibility result for one candidate."""
    profile: Profile
    qualifies: bool = False
    score: int = 0
    completeness: int = 0
    breakdown: CompatibilityBreakdown = field(default_factory=CompatibilityBreakdown)

    @property
    def user_id(self) -> str:
        return self.profile.user_id
