#!/usr/bin/env python3
"""
Qualification - whether two users are eligible to be suggested to each other.

A pair qualifies when at least one user can teach a course the other wants
to learn. Shared interests or shared courses alone never qualify a pair.
"""

from typing import Iterable, List

from core.scorer.models import Profile
from core.scorer.normalization import term_index


def cross_matches(courses: Iterable[str], interests: Iterable[str]) -> List[str]:
    """
    Courses (in their original casing) that appear among the interests.

    Each course is reported once, in the order it was first listed.
    """
    wanted = set(term_index(interests))
    return [
        original for key, original in term_index(courses).items()
        if key in wanted
    ]


def _has_cross_match(courses: Iterable[str], interests: Iterable[str]) -> bool:
    return bool(cross_matches(courses, interests))


def qualifies(a: Profile, b: Profile) -> bool:
    """
    True iff a course of one user matches an interest of the other.

    Comparison is case-insensitive. The predicate is symmetric.
    """
    return (
        _has_cross_match(a.courses, b.interests)
        or _has_cross_match(b.courses, a.interests)
    )
