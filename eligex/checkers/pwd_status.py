"""
PWD (persons with disability) status checker.

"NOT APPLICABLE" is not a sentinel here: it means PWD candidates are
excluded, as in posts that require full physical fitness.
"""

import logging
from typing import Any, Dict, List

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.normalize import is_sentinel, normalize_text

logger = logging.getLogger(__name__)

FIELD = 'pwd_status'

APPLICABLE = 'APPLICABLE'
NOT_APPLICABLE = 'NOT APPLICABLE'


def is_pwd(value: Any) -> bool:
    """True for YES / true candidate values"""
    return value is True or normalize_text(value) in ('YES', 'TRUE')


def check_pwd_status(user_pwd: Any, requirement: Any) -> CheckResult:
    """
    Check PWD status.

    "" / "ALL APPLICABLE" and "APPLICABLE" admit everyone. "NOT APPLICABLE"
    admits only candidates who declare NO. A mapping (a PWD marks table)
    carries no status restriction.
    """
    user_display = normalize_text(user_pwd) or 'Not specified'

    if isinstance(requirement, dict) or is_sentinel(requirement, 'pwd'):
        return make_result(FIELD, True, 'All candidates (PWD and non-PWD) are eligible', user_display, 'No restriction')

    required = normalize_text(requirement)
    if required == APPLICABLE:
        reason = (
            'PWD candidate is eligible (PWD provisions available)'
            if is_pwd(user_pwd)
            else 'Non-PWD candidate is eligible'
        )
        return make_result(FIELD, True, reason, user_display, requirement)

    if required == NOT_APPLICABLE:
        user_value = normalize_text(user_pwd)
        if not user_value:
            return make_result(FIELD, False, 'PWD status not specified', user_display, requirement)
        eligible = user_value in ('NO', 'FALSE')
        reason = (
            'Non-PWD candidate is eligible'
            if eligible
            else 'PWD candidates are not eligible for this exam (physical fitness required)'
        )
        return make_result(FIELD, eligible, reason, user_display, requirement)

    logger.warning(f"Unknown PWD requirement: {requirement!r}")
    return make_result(FIELD, True, f"Unknown PWD requirement: {requirement}", user_display, requirement)


class PwdStatusChecker(BaseChecker):
    """Checks the pwd_status field"""

    field_name = FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_pwd_status(candidate.get(FIELD), exam_data.get(FIELD))]
