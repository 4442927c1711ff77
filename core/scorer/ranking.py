#!/usr/bin/env python3
"""
Ranking - deterministic display order for scored candidates.
"""

from typing import Tuple

from core.scorer.models import ScoredCandidate


def ranking_key(score: int, candidate: ScoredCandidate) -> Tuple[int, int, str]:
    """
    Sort key for display: score desc, candidate completeness desc, user_id asc.

    score is passed separately because listings order by the score stored
    on the suggestion row, not by the candidate's directional score.
    """
    return (-score, -candidate.completeness, candidate.user_id)
