"""
Caste category checker.

Documents list short codes ("GEN, OBC, SC"); forms submit full names
("SC (SCHEDULED CASTE)"). Either side may use either form.
"""

import logging
from typing import Any, Dict, List

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.reference import CATEGORY_FULL_NAMES
from eligex.rules.normalize import is_sentinel, normalize_text, split_list

logger = logging.getLogger(__name__)

FIELD = 'caste_category'


def category_short_code(value: Any) -> str:
    """Short code of a category ("SC (SCHEDULED CASTE)" -> "SC")"""
    normalized = normalize_text(value)
    if '(' in normalized:
        return normalized.split('(')[0].strip()
    return normalized


def category_full_name(value: Any) -> str:
    normalized = normalize_text(value)
    return CATEGORY_FULL_NAMES.get(normalized, normalized)


def check_caste_category(user_category: Any, requirement: Any) -> CheckResult:
    """
    Check the candidate's category against the allowed categories.

    A candidate matches an allowed entry by short code or by full name.
    """
    if is_sentinel(requirement):
        return make_result(FIELD, True, 'All caste categories are eligible', user_category, requirement or 'No restriction')

    user_value = normalize_text(user_category)
    if not user_value:
        return make_result(FIELD, False, 'User caste category not specified', 'Not specified', requirement)

    user_code = category_short_code(user_value)
    user_full = category_full_name(user_code)
    allowed = split_list(requirement)

    eligible = any(
        code == user_code or category_full_name(code) in (user_value, user_full)
        for code in allowed
    )
    logger.debug(f"Category {user_code} against {allowed}: {eligible}")
    reason = (
        f"Caste category {user_category} is eligible"
        if eligible
        else f"Caste category {user_category} is not eligible. Allowed: {', '.join(allowed)}"
    )
    return make_result(FIELD, eligible, reason, user_category, requirement)


class CasteCategoryChecker(BaseChecker):
    """Checks the caste_category field"""

    field_name = FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_caste_category(candidate.get(FIELD), exam_data.get(FIELD))]
