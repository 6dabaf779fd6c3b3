"""
EligEX Rules

Shared primitives used by the field checkers:
- normalize: casing, sentinel detection and comma-list parsing
- requirement: requirement shape classification
- keyed_variant: resolution of values keyed by a secondary attribute
- session: resolution of values keyed by exam sitting
- dates: date parsing, age arithmetic and range parsing
"""

from .normalize import normalize, normalize_loose, is_sentinel, split_list
from .requirement import RequirementShape, classify_requirement
from .keyed_variant import NO_BRANCH_IS_INELIGIBLE, keys_match, resolve_keyed_variant
from .session import (
    SessionOption,
    extract_cycle,
    extract_year,
    get_exam_sessions,
    get_reference_date,
    resolve_session_value,
)
from .dates import (
    calculate_age,
    format_age,
    format_date,
    parse_age_range,
    parse_date,
    parse_dob_range,
)

__all__ = [
    # Normalization
    'normalize',
    'normalize_loose',
    'is_sentinel',
    'split_list',

    # Shapes
    'RequirementShape',
    'classify_requirement',

    # Keyed variants
    'NO_BRANCH_IS_INELIGIBLE',
    'keys_match',
    'resolve_keyed_variant',

    # Sessions
    'SessionOption',
    'extract_cycle',
    'extract_year',
    'get_exam_sessions',
    'get_reference_date',
    'resolve_session_value',

    # Dates
    'calculate_age',
    'format_age',
    'format_date',
    'parse_age_range',
    'parse_date',
    'parse_dob_range',
]
