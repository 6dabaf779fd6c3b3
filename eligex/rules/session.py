"""
Session resolution.

Age and DOB cutoffs are often keyed by exam sitting: a bare year ("2026"),
a year and cycle ("2026-I") or an exam-code token ("NDA-I-2026"). Documents
do not agree on one convention, so resolution walks a fallback chain.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from eligex.rules.requirement import YEAR_PATTERN

logger = logging.getLogger(__name__)

CYCLE_PATTERN = re.compile(r'[-_](I{1,3}|[12])(?=[-_]|$)', re.IGNORECASE)

# Cycle markers that name the same sitting
CYCLE_EQUIVALENTS = {
    'I': ('I', '1'),
    '1': ('I', '1'),
    'II': ('II', '2'),
    '2': ('II', '2'),
    'III': ('III',),
}

# Reference (month, day) per canonical cycle; anything else uses August 1
CYCLE_REFERENCE_DAYS = {
    'I': (4, 1),
    'II': (8, 1),
}
DEFAULT_REFERENCE_DAY = (8, 1)

# Fields that may carry a session map, in the order sessions are discovered
SESSION_FIELDS = (
    'between_dob',
    'between_age',
    'minimum_dob',
    'maximum_dob',
    'starting_age',
    'ending_age',
    'no_age_limit',
)

# Wrapper some documents put around the per-session map
CANDIDATE_GROUP_KEY = 'regular_candidates'


@dataclass(frozen=True)
class SessionOption:
    """A session token found in a document plus its display label"""
    value: str
    label: str


def extract_year(session: Any) -> Optional[str]:
    """First 4-digit year in a session token"""
    if session is None:
        return None
    match = YEAR_PATTERN.search(str(session))
    return match.group(0) if match else None


def extract_cycle(session: Any) -> Optional[str]:
    """Canonical cycle marker ('I', 'II', 'III') of a session token, if any"""
    if session is None:
        return None
    match = CYCLE_PATTERN.search(str(session))
    if not match:
        return None
    marker = match.group(1).upper()
    return {'1': 'I', '2': 'II'}.get(marker, marker)


def get_reference_date(session: Optional[str], today: date) -> date:
    """
    Date on which a candidate's age is measured for a session.

    Args:
        session: Session token, or None
        today: Date used when the token carries no year

    Returns:
        April 1 for cycle I, August 1 for cycle II or no cycle, of the
        token's year; today when no year can be extracted
    """
    year = extract_year(session)
    if not year:
        return today
    month, day = CYCLE_REFERENCE_DAYS.get(extract_cycle(session), DEFAULT_REFERENCE_DAY)
    return date(int(year), month, day)


def _key_has_cycle(key: str, cycle: str) -> bool:
    upper_key = key.upper()
    for marker in CYCLE_EQUIVALENTS.get(cycle, (cycle,)):
        for sep in ('-', '_'):
            if f"{sep}{marker}{sep}" in upper_key or upper_key.endswith(f"{sep}{marker}"):
                return True
    return False


def unwrap_candidate_group(data: Any) -> Any:
    """Return the regular_candidates map when a field is wrapped in one"""
    if isinstance(data, dict) and isinstance(data.get(CANDIDATE_GROUP_KEY), dict):
        return data[CANDIDATE_GROUP_KEY]
    return data


def _find_key(data: Dict[str, Any], candidate: str) -> Optional[str]:
    if candidate in data:
        return candidate
    lowered = candidate.lower()
    for key in data:
        if str(key).lower() == lowered:
            return key
    return None


def resolve_session_value(data: Any, session: Optional[str] = None, exam_code: Optional[str] = None) -> Any:
    """
    Resolve a possibly session-keyed requirement to the value for one session.

    Resolution order, first match wins:
    exact key, case-insensitive key, composed exam-code keys, then the year
    extracted from the token (a key equal to the year, or keys containing it,
    preferring one with the same cycle marker). With no session the first
    key's value is used.

    Args:
        data: Session map, or a plain value
        session: Requested session token
        exam_code: Exam code used to build composed keys

    Returns:
        The resolved value, or None when nothing applies
    """
    if isinstance(data, str):
        return data if data.strip() else None
    if isinstance(data, (int, float)) and not isinstance(data, bool):
        return data
    data = unwrap_candidate_group(data)
    if not isinstance(data, dict) or not data:
        return None

    if not session:
        return next(iter(data.values()))

    session = str(session)

    key = _find_key(data, session)
    if key is not None:
        return data[key]

    if exam_code:
        for composed in (f"{exam_code}-{session}", f"{exam_code}_{session}", f"{exam_code}{session}"):
            key = _find_key(data, composed)
            if key is not None:
                return data[key]

    year = extract_year(session)
    if year:
        if year in data:
            return data[year]
        year_keys = [k for k in data if year in str(k)]
        if year_keys:
            cycle = extract_cycle(session)
            if cycle:
                for k in year_keys:
                    if _key_has_cycle(str(k), cycle):
                        return data[k]
            return data[year_keys[0]]

    logger.debug(f"No session value for {session!r} among {list(data)}")
    return None


def get_exam_sessions(exam_data: Dict[str, Any]) -> List[SessionOption]:
    """
    Sessions declared by a document's age/DOB fields.

    The first field holding a mapping with a year-bearing key supplies the
    session list, in the document's key order.
    """
    if not isinstance(exam_data, dict):
        return []
    for field_name in SESSION_FIELDS:
        field_data = unwrap_candidate_group(exam_data.get(field_name))
        if not isinstance(field_data, dict) or not field_data:
            continue
        keys = [str(k) for k in field_data]
        if any(YEAR_PATTERN.search(k) for k in keys):
            return [SessionOption(value=k, label=k.replace('-', ' ')) for k in keys]
    return []
