"""
Gender checker.
"""

import logging
from typing import Any, Dict, List

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.normalize import is_sentinel, normalize_text, split_list

logger = logging.getLogger(__name__)

FIELD = 'gender'


def check_gender(user_gender: Any, requirement: Any) -> CheckResult:
    """
    Check the candidate's gender against a comma list of allowed genders.

    Args:
        user_gender: Candidate gender
        requirement: Exam gender requirement

    Returns:
        CheckResult for the gender field
    """
    if is_sentinel(requirement, 'gender'):
        return make_result(FIELD, True, 'All genders are eligible', user_gender, requirement or 'No restriction')

    user_value = normalize_text(user_gender)
    if not user_value:
        return make_result(FIELD, False, 'User gender not specified', 'Not specified', requirement)

    allowed = split_list(requirement, 'gender')
    eligible = user_value in allowed
    logger.debug(f"Gender {user_value} against {allowed}: {eligible}")
    reason = (
        f"Gender {user_gender} is eligible"
        if eligible
        else f"Gender {user_gender} is not eligible. Allowed: {', '.join(allowed)}"
    )
    return make_result(FIELD, eligible, reason, user_gender, requirement)


class GenderChecker(BaseChecker):
    """Checks the gender field"""

    field_name = FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_gender(candidate.get(FIELD), exam_data.get(FIELD))]
