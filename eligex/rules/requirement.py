"""
Requirement shape classification.

Exam documents write the same logical field in several shapes. Checkers call
classify_requirement once and branch on the result instead of probing types
inline.
"""

import re
from enum import Enum
from typing import Any

from eligex.rules.normalize import is_sentinel

YEAR_PATTERN = re.compile(r'\d{4}')


class RequirementShape(str, Enum):
    """Shape of one requirement value"""
    SENTINEL = "SENTINEL"
    FLAT_LIST = "FLAT_LIST"
    KEYED_VARIANT = "KEYED_VARIANT"
    SESSION_MAP = "SESSION_MAP"
    EDUCATION_LEVELS = "EDUCATION_LEVELS"


def looks_like_session_map(value: Any) -> bool:
    """A mapping whose first key carries a 4-digit year"""
    if not isinstance(value, dict) or not value:
        return False
    first_key = next(iter(value))
    return bool(YEAR_PATTERN.search(str(first_key)))


def classify_requirement(value: Any, kind: str = 'default') -> RequirementShape:
    """
    Classify a requirement value.

    Args:
        value: Raw value from the exam document
        kind: Sentinel kind used to decide whether a scalar is a sentinel

    Returns:
        The RequirementShape of the value
    """
    if isinstance(value, dict):
        if not value:
            return RequirementShape.SENTINEL
        if looks_like_session_map(value):
            return RequirementShape.SESSION_MAP
        if all(isinstance(item, dict) for item in value.values()):
            return RequirementShape.EDUCATION_LEVELS
        return RequirementShape.KEYED_VARIANT
    if is_sentinel(value, kind):
        return RequirementShape.SENTINEL
    return RequirementShape.FLAT_LIST
