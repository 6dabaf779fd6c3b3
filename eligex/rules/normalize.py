"""
Normalization primitives shared by every checker.
"""

import re
from typing import Any, FrozenSet, List

# Sentinel sets per field kind. A requirement equal to one of these skips the check.
COMMON_SENTINELS: FrozenSet[str] = frozenset({'', 'ALL APPLICABLE', 'NOT APPLICABLE'})
GENDER_SENTINELS = COMMON_SENTINELS
# PWD "NOT APPLICABLE" excludes PWD candidates, so it is not a sentinel here
PWD_SENTINELS: FrozenSet[str] = frozenset({'', 'ALL APPLICABLE'})
EDUCATION_SENTINELS: FrozenSet[str] = COMMON_SENTINELS | {'ANY'}
NCC_SENTINELS: FrozenSet[str] = COMMON_SENTINELS | {'ANY', 'NA', 'NOT REQUIRED', 'NONE'}
SCALAR_SENTINELS: FrozenSet[str] = COMMON_SENTINELS | {'ANY', 'NA'}
EXPERIENCE_SENTINELS: FrozenSet[str] = SCALAR_SENTINELS | {'NOT REQUIRED', '0'}

SENTINELS_BY_KIND = {
    'default': COMMON_SENTINELS,
    'gender': GENDER_SENTINELS,
    'pwd': PWD_SENTINELS,
    'education': EDUCATION_SENTINELS,
    'ncc': NCC_SENTINELS,
    'scalar': SCALAR_SENTINELS,
    'experience': EXPERIENCE_SENTINELS,
}


def normalize(value: Any) -> str:
    """Trim and upper-case a string; anything that is not a string becomes ''"""
    if not isinstance(value, str):
        return ''
    return value.strip().upper()


def normalize_text(value: Any) -> str:
    """Like normalize, but numbers are rendered first (heights, years, marks)"""
    if isinstance(value, bool):
        return 'YES' if value else 'NO'
    if isinstance(value, (int, float)):
        return normalize(str(value))
    return normalize(value)


def normalize_loose(value: Any) -> str:
    """Normalize and strip everything but letters and digits ("AIR FORCE" == "AIRFORCE")"""
    return re.sub(r'[^A-Z0-9]', '', normalize_text(value))


def is_sentinel(value: Any, kind: str = 'default') -> bool:
    """
    Check whether a requirement value means "no restriction" for a field kind.

    None and empty containers count as the empty sentinel. Mappings and
    lists that carry data are never sentinels.
    """
    if value is None:
        return True
    if isinstance(value, (dict, list, tuple)):
        return len(value) == 0
    sentinels = SENTINELS_BY_KIND.get(kind, COMMON_SENTINELS)
    return normalize_text(value) in sentinels


def split_list(value: Any, kind: str = 'default') -> List[str]:
    """
    Split a comma-separated requirement into normalized tokens.

    Lists are accepted as already split. Empty and sentinel tokens are dropped.
    """
    if isinstance(value, (list, tuple)):
        tokens = [normalize_text(item) for item in value]
    elif isinstance(value, (str, int, float)):
        tokens = [normalize_text(item) for item in str(value).split(',')]
    else:
        return []
    sentinels = SENTINELS_BY_KIND.get(kind, COMMON_SENTINELS)
    return [token for token in tokens if token and token not in sentinels]


def display(value: Any) -> str:
    """Render a requirement or candidate value for CheckResult display strings"""
    if value is None:
        return ''
    if isinstance(value, dict):
        return '; '.join(f"{key}: {display(item)}" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return ', '.join(display(item) for item in value)
    return str(value)


def contains_either_way(left: str, right: str) -> bool:
    """Substring match in either direction on normalized, non-empty values"""
    if not left or not right:
        return False
    return left == right or left in right or right in left
