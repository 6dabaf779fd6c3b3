"""
NCC (National Cadet Corps) checkers.

The three fields form a dependent chain: the wing picks the certificate
branch, and the certificate picks the grade branch.

    ncc_wing:              "ARMY, NAVY"
    ncc_certificate:       {"ARMY": "C", "AIR FORCE": "B, C"}
    ncc_certificate_grade: {"C CERTIFICATE": "A, B"}
"""

import logging
from typing import Any, Dict, List, Optional

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.keyed_variant import NO_BRANCH_IS_INELIGIBLE, KeyMatcher, keys_match, resolve_keyed_variant
from eligex.rules.normalize import (
    contains_either_way,
    is_sentinel,
    normalize_loose,
    normalize_text,
    split_list,
)

logger = logging.getLogger(__name__)

WING_FIELD = 'ncc_wing'
CERTIFICATE_FIELD = 'ncc_certificate'
GRADE_FIELD = 'ncc_certificate_grade'

# Requirements that accept any held certificate or grade, but need one to be held
ANY_CERTIFICATE = frozenset({'ALL', 'ALL CERTIFICATES'})
ANY_GRADE = frozenset({'ALL', 'ALL GRADES'})

NOT_HELD = frozenset({'', 'NO', 'NONE'})


def certificate_keys_match(candidate_key: Any, variant_key: Any) -> bool:
    """Loose equality, or one key is a prefix of the other ("C" and "C CERTIFICATE")"""
    left = normalize_loose(candidate_key)
    right = normalize_loose(variant_key)
    if not left or not right:
        return False
    return left == right or left.startswith(right) or right.startswith(left)


def _value_matches(user_value: str, allowed: List[str]) -> bool:
    return any(
        contains_either_way(user_value, item) or normalize_loose(user_value) == normalize_loose(item)
        for item in allowed
    )


def check_ncc_wing(user_wing: Any, requirement: Any) -> CheckResult:
    """Check the candidate's NCC wing against a comma list"""
    if is_sentinel(requirement, 'ncc'):
        return make_result(WING_FIELD, True, 'NCC wing not required for this exam', user_wing or 'Not specified', requirement or 'Not Required')

    user_value = normalize_text(user_wing)
    if not user_value:
        return make_result(WING_FIELD, False, 'NCC wing not specified', 'Not specified', requirement)

    allowed = split_list(requirement, 'ncc')
    eligible = any(contains_either_way(user_value, wing) for wing in allowed)
    reason = (
        f"NCC Wing {user_wing} is accepted"
        if eligible
        else f"NCC Wing {user_wing} not in allowed list: {', '.join(allowed)}"
    )
    return make_result(WING_FIELD, eligible, reason, user_wing, requirement)


def _check_dependent(
    field: str,
    label: str,
    any_keywords: frozenset,
    user_value: Any,
    requirement: Any,
    parent_label: str,
    parent_value: Any,
    matcher: KeyMatcher,
) -> CheckResult:
    """Shared flow for certificate (keyed by wing) and grade (keyed by certificate)"""
    if is_sentinel(requirement, 'ncc'):
        return make_result(field, True, f"{label} not required for this exam", user_value or 'Not specified', requirement or 'Not Required')

    normalized_user = normalize_text(user_value)

    if not isinstance(requirement, dict) and normalize_text(requirement) in any_keywords:
        if normalized_user in NOT_HELD:
            return make_result(field, False, f"{label} is required but not provided", user_value or 'Not specified', f"Any {label}")
        return make_result(field, True, f"Any {label} is accepted", user_value, f"Any {label}")

    allowed: Optional[List[str]]
    if isinstance(requirement, dict):
        if not normalize_text(parent_value):
            return make_result(field, False, f"{parent_label} not specified", user_value or 'Not specified', requirement)
        allowed = resolve_keyed_variant(requirement, parent_value, matcher)
        if not allowed:
            # An empty branch accepts nothing for this parent value
            return make_result(
                field, not NO_BRANCH_IS_INELIGIBLE,
                f"No {label} rules found for {parent_label} {parent_value}",
                user_value or 'Not specified', f"{parent_value} not accepted",
            )
    else:
        allowed = split_list(requirement, 'ncc')

    if not normalized_user:
        return make_result(field, False, f"{label} not specified", 'Not specified', allowed)

    eligible = _value_matches(normalized_user, allowed)
    logger.debug(f"{label} {normalized_user} against {allowed}: {eligible}")
    if eligible:
        reason = f"{label} {user_value} is accepted" + (f" for {parent_value}" if parent_value else '')
    else:
        reason = f"{label} {user_value} not in allowed list: {', '.join(allowed)}"
    return make_result(field, eligible, reason, user_value, allowed)


def check_ncc_certificate(user_certificate: Any, requirement: Any, user_wing: Any) -> CheckResult:
    """
    Check the NCC certificate, keyed by the candidate's wing when the
    requirement is a mapping.
    """
    return _check_dependent(
        CERTIFICATE_FIELD, 'NCC certificate', ANY_CERTIFICATE,
        user_certificate, requirement, 'NCC wing', user_wing,
        matcher=keys_match,
    )


def check_ncc_certificate_grade(user_grade: Any, requirement: Any, user_certificate: Any) -> CheckResult:
    """
    Check the NCC certificate grade, keyed by the candidate's certificate
    when the requirement is a mapping.
    """
    return _check_dependent(
        GRADE_FIELD, 'NCC grade', ANY_GRADE,
        user_grade, requirement, 'NCC certificate', user_certificate,
        matcher=certificate_keys_match,
    )


class NccWingChecker(BaseChecker):
    """Checks the ncc_wing field"""

    field_name = WING_FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_ncc_wing(candidate.get(WING_FIELD), exam_data.get(WING_FIELD))]


class NccCertificateChecker(BaseChecker):
    """Checks the ncc_certificate field"""

    field_name = CERTIFICATE_FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [
            check_ncc_certificate(
                candidate.get(CERTIFICATE_FIELD), exam_data.get(CERTIFICATE_FIELD), candidate.get(WING_FIELD)
            )
        ]


class NccCertificateGradeChecker(BaseChecker):
    """Checks the ncc_certificate_grade field"""

    field_name = GRADE_FIELD

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [
            check_ncc_certificate_grade(
                candidate.get(GRADE_FIELD), exam_data.get(GRADE_FIELD), candidate.get(CERTIFICATE_FIELD)
            )
        ]
