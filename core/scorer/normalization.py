#!/usr/bin/env python3
"""
Normalization helpers - turn stored profile values into clean string lists.

Profile rows have historically stored courses/interests as native arrays,
JSON-encoded strings or comma-separated strings. Store adapters run every
value through coerce_string_collection() so the scorer only ever sees lists
of non-empty strings.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.exceptions import InvalidProfileData

DEFAULT_UNSPECIFIED_VALUES = ("Not specified",)


def normalize_term(value: str) -> str:
    """Comparison key for a course, interest or attribute value."""
    return value.strip().lower()


def is_specified(
    value: Optional[str],
    unspecified_values: Sequence[str] = DEFAULT_UNSPECIFIED_VALUES
) -> bool:
    """True if value is a non-blank string that is not a placeholder."""
    if not value or not isinstance(value, str):
        return False
    key = normalize_term(value)
    if not key:
        return False
    return key not in {normalize_term(v) for v in unspecified_values}


def dedupe_terms(values: Iterable[str]) -> List[str]:
    """
    Strip, drop blanks and collapse case-insensitive duplicates.

    The first spelling of each term wins, so ["CS101", "cs101"] -> ["CS101"].
    """
    seen = set()
    result = []
    for value in values:
        stripped = value.strip()
        key = stripped.lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(stripped)
    return result


def term_index(values: Iterable[str]) -> Dict[str, str]:
    """Map normalized term -> first original spelling."""
    index: Dict[str, str] = {}
    for value in values:
        key = normalize_term(value)
        if key and key not in index:
            index[key] = value.strip()
    return index


def _require_strings(items: Iterable[Any], field_name: str, original: Any) -> List[str]:
    items = list(items)
    if not all(isinstance(item, str) for item in items):
        raise InvalidProfileData(field_name, original)
    return dedupe_terms(items)


def coerce_string_collection(value: Any, field_name: str = "value") -> List[str]:
    """
    Coerce a stored courses/interests value into a list of strings.

    Accepts None, lists/tuples/sets of strings, JSON-encoded arrays and
    comma-separated strings.

    Raises:
        InvalidProfileData: if the value cannot be read as a string collection
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple, set, frozenset)):
        return _require_strings(value, field_name, value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith('['):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                raise InvalidProfileData(field_name, value)
            if not isinstance(parsed, list):
                raise InvalidProfileData(field_name, value)
            return _require_strings(parsed, field_name, value)
        return dedupe_terms(text.split(','))

    raise InvalidProfileData(field_name, value)


def clean_optional(
    value: Any,
    unspecified_values: Sequence[str] = DEFAULT_UNSPECIFIED_VALUES
) -> Optional[str]:
    """Return the stripped string, or None for blanks and placeholders."""
    if value is None:
        return None
    text = str(value).strip()
    return text if is_specified(text, unspecified_values) else None
