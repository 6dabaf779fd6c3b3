"""
Nationality and domicile checkers.

Domicile only applies to Indian nationals; the orchestrator enforces that by
asking DomicileChecker.can_check, which looks at the candidate's nationality.
"""

import logging
from typing import Any, Dict, List

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.reference import (
    ALL_DOMICILES_KEYWORDS,
    NATIONALITY_SHORT_FORMS,
    STANDARD_NATIONALITIES,
)
from eligex.rules.normalize import is_sentinel, normalize_text, split_list

logger = logging.getLogger(__name__)

NATIONALITY_FIELD = 'nationality'
DOMICILE_FIELD = 'domicile'
INDIAN = 'INDIAN'


def normalize_nationality(value: Any) -> str:
    """Expand short forms (OCI, PIO) to the standard nationality names"""
    normalized = normalize_text(value)
    if normalized in STANDARD_NATIONALITIES:
        return normalized
    return NATIONALITY_SHORT_FORMS.get(normalized, normalized)


def check_nationality(user_nationality: Any, requirement: Any) -> CheckResult:
    """Check the candidate's nationality against the allowed list"""
    if is_sentinel(requirement):
        return make_result(
            NATIONALITY_FIELD, True, 'No nationality restriction for this exam',
            user_nationality or 'Not specified', requirement or 'No restriction',
        )

    user_value = normalize_nationality(user_nationality)
    if not user_value:
        return make_result(NATIONALITY_FIELD, False, 'Please specify your nationality', 'Not specified', requirement)

    allowed = [normalize_nationality(item) for item in split_list(requirement)]
    eligible = user_value in allowed
    logger.debug(f"Nationality {user_value} against {allowed}: {eligible}")
    reason = (
        f"Your nationality ({user_nationality}) is eligible for this exam"
        if eligible
        else f"Your nationality ({user_nationality}) is not in the allowed list: {requirement}"
    )
    return make_result(NATIONALITY_FIELD, eligible, reason, user_nationality, requirement)


def is_domicile_applicable(user_nationality: Any) -> bool:
    return normalize_nationality(user_nationality) == INDIAN


def check_domicile(user_domicile: Any, requirement: Any, user_nationality: Any = INDIAN) -> CheckResult:
    """
    Check the candidate's state/UT of domicile.

    Args:
        user_domicile: Candidate state or UT
        requirement: Single state, comma list, or an all-India keyword
        user_nationality: Candidate nationality; non-Indians always pass
    """
    if not is_domicile_applicable(user_nationality):
        return make_result(
            DOMICILE_FIELD, True, 'Domicile check not applicable for non-Indian nationals',
            user_domicile or 'Not applicable', requirement,
        )

    if is_sentinel(requirement) or normalize_text(requirement) in ALL_DOMICILES_KEYWORDS:
        return make_result(
            DOMICILE_FIELD, True, 'No domicile restriction for this exam - open for all Indian states/UTs',
            user_domicile or 'Not specified', requirement or 'All states/UTs',
        )

    user_value = normalize_text(user_domicile)
    if not user_value:
        return make_result(DOMICILE_FIELD, False, 'Please specify your domicile state/UT', 'Not specified', requirement)

    allowed = split_list(requirement)
    if len(allowed) == 1:
        if user_value == allowed[0]:
            return make_result(
                DOMICILE_FIELD, True, f"Your domicile ({user_domicile}) matches the requirement",
                user_domicile, requirement,
            )
        return make_result(
            DOMICILE_FIELD, False, f"This exam is only for candidates from {requirement}",
            user_domicile, requirement,
        )

    eligible = user_value in allowed
    reason = (
        f"Your domicile ({user_domicile}) is eligible for this exam"
        if eligible
        else f"Your domicile ({user_domicile}) is not in the allowed list: {requirement}"
    )
    return make_result(DOMICILE_FIELD, eligible, reason, user_domicile, requirement)


class NationalityChecker(BaseChecker):
    """Checks the nationality field"""

    field_name = NATIONALITY_FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_nationality(candidate.get(NATIONALITY_FIELD), exam_data.get(NATIONALITY_FIELD))]


class DomicileChecker(BaseChecker):
    """Checks the domicile field for Indian nationals"""

    field_name = DOMICILE_FIELD

    def can_check(self, exam_data: Dict[str, Any], candidate: CandidateProfile) -> bool:
        return bool(exam_data.get(DOMICILE_FIELD)) and is_domicile_applicable(candidate.get(NATIONALITY_FIELD))

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [
            check_domicile(
                candidate.get(DOMICILE_FIELD),
                exam_data.get(DOMICILE_FIELD),
                candidate.get(NATIONALITY_FIELD),
            )
        ]
