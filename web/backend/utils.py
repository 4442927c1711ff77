#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional, Any, List
from datetime import datetime


def safe_int(value: Optional[Any], default: int = 0) -> int:
    """
    Safely convert value to int.

    Args:
        value: Value to convert.
        default: Default value if conversion fails or value is None.
    """
    if value is None:
        return default

    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """Convert a datetime to an ISO format string, passing None through."""
    if dt is None:
        return None
    return dt.isoformat()


def sorted_terms(terms: Optional[List[str]]) -> List[str]:
    """Case-insensitively sorted copy of a course/interest list for display."""
    return sorted(terms or [], key=str.lower)
