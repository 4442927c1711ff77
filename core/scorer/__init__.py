#!/usr/bin/env python3
"""
Scoring Module - pure compatibility rules between two study profiles.

Public API:
- CompatibilityScorer: config-bound scorer used by every consumer
- Profile, CompatibilityBreakdown, ScoredCandidate: data structures
- qualifies, calculate_compatibility, calculate_completeness, ranking_key

Modules:

- models.py: Data structures (Profile, CompatibilityBreakdown, ScoredCandidate)
- normalization.py: Case folding, placeholders and stored-value coercion
- qualification.py: Course <-> interest cross-match predicate
- compatibility.py: Weighted 0-100 score with breakdown
- completeness.py: Profile completeness percentage
- ranking.py: Display ordering
- service.py: CompatibilityScorer
"""

from core.scorer.models import Profile, CompatibilityBreakdown, ScoredCandidate
from core.scorer.qualification import qualifies
from core.scorer.compatibility import calculate_compatibility
from core.scorer.completeness import calculate_completeness
from core.scorer.ranking import ranking_key
from core.scorer.service import CompatibilityScorer

__all__ = [
    'CompatibilityScorer',
    'Profile',
    'CompatibilityBreakdown',
    'ScoredCandidate',
    'qualifies',
    'calculate_compatibility',
    'calculate_completeness',
    'ranking_key',
]
