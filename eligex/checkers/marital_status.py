"""
Marital status checker.

Requirements are keyed by gender: {"MALE": "UNMARRIED", "FEMALE": "UNMARRIED, WIDOW"}.
A gender with no branch, or an empty one, is ineligible. A flat string applies to every gender.
"""

import logging
from typing import Any, Dict, List

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.keyed_variant import NO_BRANCH_IS_INELIGIBLE, resolve_keyed_variant
from eligex.rules.normalize import is_sentinel, normalize_text, split_list
from eligex.rules.requirement import RequirementShape, classify_requirement

logger = logging.getLogger(__name__)

FIELD = 'marital_status'


def check_marital_status(user_status: Any, requirement: Any, user_gender: Any) -> CheckResult:
    """
    Check marital status against a gender-keyed requirement.

    Args:
        user_status: Candidate marital status
        requirement: Gender-keyed mapping, flat list, or sentinel
        user_gender: Candidate gender, used to pick the branch

    Returns:
        CheckResult for the marital_status field
    """
    shape = classify_requirement(requirement)
    if shape == RequirementShape.SENTINEL:
        return make_result(FIELD, True, 'No marital status restriction defined', user_status or 'Not specified', 'No restriction')

    if shape == RequirementShape.FLAT_LIST:
        allowed = split_list(requirement)
        requirement_text = ', '.join(allowed)
    else:
        if not normalize_text(user_gender):
            return make_result(
                FIELD, False, 'Gender not specified (required for marital status check)',
                user_status or 'Not specified', requirement,
            )
        allowed = resolve_keyed_variant(requirement, user_gender)
        if not allowed:
            # A missing or empty branch accepts no status for this gender
            return make_result(
                FIELD, not NO_BRANCH_IS_INELIGIBLE,
                f"No marital status rules defined for gender: {user_gender}",
                user_status or 'Not specified', f"For {user_gender}: No rules defined",
            )
        requirement_text = f"For {user_gender}: {', '.join(allowed)}"

    user_value = normalize_text(user_status)
    if not user_value:
        return make_result(FIELD, False, 'User marital status not specified', 'Not specified', requirement_text)

    eligible = user_value in allowed
    logger.debug(f"Marital status {user_value} against {allowed}: {eligible}")
    if eligible:
        reason = f"Marital status {user_status} is eligible" + (f" for {user_gender}" if user_gender else '')
    else:
        reason = (
            f"Marital status {user_status} is not allowed"
            + (f" for {user_gender}" if user_gender else '')
            + f". Allowed: {', '.join(allowed)}"
        )
    return make_result(FIELD, eligible, reason, user_status, requirement_text)


class MaritalStatusChecker(BaseChecker):
    """Checks the marital_status field"""

    field_name = FIELD

    def can_check(self, exam_data: Dict[str, Any], candidate: CandidateProfile) -> bool:
        requirement = exam_data.get(FIELD)
        if isinstance(requirement, dict):
            return True
        return not is_sentinel(requirement)

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_marital_status(candidate.get(FIELD), exam_data.get(FIELD), candidate.get('gender'))]
