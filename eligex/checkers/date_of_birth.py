"""
Date of birth / age checker.

Six criteria kinds, chosen by age_criteria_type:

    STARTING_AGE / MIN_AGE    years >= starting_age
    ENDING_AGE / MAX_AGE      years <= ending_age (falls back to minimum_dob)
    BETWEEN_AGE               min <= years <= max (falls back to between_dob)
    MINIMUM_DOB / MIN_DOB     birth date on or before minimum_dob
    MAXIMUM_DOB / MAX_DOB     birth date on or after maximum_dob
    BETWEEN_DOB               start <= birth date <= end

Every cutoff may be keyed by session. Without a recognised tag the first
resolvable field wins, in AUTO_DETECT_ORDER.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result, unparseable_result
from eligex.models.eligibility import AgeBreakdown, CandidateProfile, CheckResult, CriteriaKind
from eligex.rules.dates import (
    calculate_age,
    format_age,
    format_date,
    parse_age,
    parse_age_range,
    parse_date,
    parse_dob_range,
)
from eligex.rules.normalize import normalize_text
from eligex.rules.session import resolve_session_value

logger = logging.getLogger(__name__)

FIELD = 'date_of_birth'
CRITERIA_TAG = 'age_criteria_type'
NO_AGE_LIMIT_FIELD = 'no_age_limit'
NO_AGE_LIMIT_VALUE = 'NO AGE LIMIT'

KIND_FIELDS = {
    CriteriaKind.STARTING_AGE: 'starting_age',
    CriteriaKind.ENDING_AGE: 'ending_age',
    CriteriaKind.BETWEEN_AGE: 'between_age',
    CriteriaKind.MINIMUM_DOB: 'minimum_dob',
    CriteriaKind.MAXIMUM_DOB: 'maximum_dob',
    CriteriaKind.BETWEEN_DOB: 'between_dob',
}

# Fallback field when the tagged field has no value for the session
KIND_FALLBACKS = {
    CriteriaKind.ENDING_AGE: CriteriaKind.MINIMUM_DOB,
    CriteriaKind.BETWEEN_AGE: CriteriaKind.BETWEEN_DOB,
}

AUTO_DETECT_ORDER = (
    CriteriaKind.BETWEEN_DOB,
    CriteriaKind.MINIMUM_DOB,
    CriteriaKind.MAXIMUM_DOB,
    CriteriaKind.BETWEEN_AGE,
    CriteriaKind.STARTING_AGE,
    CriteriaKind.ENDING_AGE,
)

KIND_LABELS = {
    CriteriaKind.STARTING_AGE: 'Minimum age',
    CriteriaKind.ENDING_AGE: 'Maximum age',
    CriteriaKind.BETWEEN_AGE: 'Age range',
    CriteriaKind.MINIMUM_DOB: 'Latest date of birth',
    CriteriaKind.MAXIMUM_DOB: 'Earliest date of birth',
    CriteriaKind.BETWEEN_DOB: 'Date of birth range',
}


@dataclass(frozen=True)
class CriteriaOutcome:
    """Verdict of one criteria-kind evaluator"""
    eligible: bool
    reason: str
    exam_requirement: str
    parsed: bool = True


def _years(value: float) -> str:
    return f"{value:g}"


def evaluate_starting_age(age: AgeBreakdown, value: Any) -> CriteriaOutcome:
    """eligible iff years >= minimum age"""
    minimum = parse_age(value)
    if minimum is None:
        return CriteriaOutcome(True, 'Could not parse minimum age', str(value), parsed=False)
    eligible = age.years >= minimum
    relation = 'meets' if eligible else 'is below'
    return CriteriaOutcome(
        eligible,
        f"Your age ({age.years} years) {relation} the minimum age requirement of {_years(minimum)} years",
        f"Minimum age: {_years(minimum)} years",
    )


def evaluate_ending_age(age: AgeBreakdown, value: Any) -> CriteriaOutcome:
    """eligible iff years <= maximum age"""
    maximum = parse_age(value)
    if maximum is None:
        return CriteriaOutcome(True, 'Could not parse maximum age', str(value), parsed=False)
    eligible = age.years <= maximum
    relation = 'is within' if eligible else 'exceeds'
    return CriteriaOutcome(
        eligible,
        f"Your age ({age.years} years) {relation} the maximum age limit of {_years(maximum)} years",
        f"Maximum age: {_years(maximum)} years",
    )


def evaluate_between_age(age: AgeBreakdown, value: Any) -> CriteriaOutcome:
    """eligible iff min <= years <= max"""
    bounds = parse_age_range(value)
    if bounds is None:
        return CriteriaOutcome(True, 'Could not parse age range format', str(value), parsed=False)
    low, high = bounds
    eligible = low <= age.years <= high
    relation = 'is within' if eligible else 'is outside'
    requirement = f"Age: {_years(low)} to {_years(high)} years"
    return CriteriaOutcome(
        eligible,
        f"Your age ({age.years} years) {relation} the required range of {_years(low)} to {_years(high)} years",
        requirement,
    )


def evaluate_minimum_dob(birth_date: date, value: Any) -> CriteriaOutcome:
    """eligible iff born on or before the cutoff"""
    cutoff = parse_date(value)
    if cutoff is None:
        return CriteriaOutcome(True, 'Could not parse date of birth cutoff', str(value), parsed=False)
    shown_dob, shown_cutoff = format_date(birth_date), format_date(cutoff)
    if birth_date <= cutoff:
        reason = f"Your date of birth ({shown_dob}) is on or before {shown_cutoff}"
    else:
        reason = f"Your date of birth ({shown_dob}) is after {shown_cutoff}. You must be born on or before {shown_cutoff}"
    return CriteriaOutcome(birth_date <= cutoff, reason, f"Born on or before: {shown_cutoff}")


def evaluate_maximum_dob(birth_date: date, value: Any) -> CriteriaOutcome:
    """eligible iff born on or after the cutoff"""
    cutoff = parse_date(value)
    if cutoff is None:
        return CriteriaOutcome(True, 'Could not parse date of birth cutoff', str(value), parsed=False)
    shown_dob, shown_cutoff = format_date(birth_date), format_date(cutoff)
    if birth_date >= cutoff:
        reason = f"Your date of birth ({shown_dob}) is on or after {shown_cutoff}"
    else:
        reason = f"Your date of birth ({shown_dob}) is before {shown_cutoff}. You must be born on or after {shown_cutoff}"
    return CriteriaOutcome(birth_date >= cutoff, reason, f"Born on or after: {shown_cutoff}")


def evaluate_between_dob(birth_date: date, value: Any) -> CriteriaOutcome:
    """eligible iff start <= birth date <= end, both ends inclusive"""
    bounds = parse_dob_range(value)
    if bounds is None:
        return CriteriaOutcome(True, 'Could not parse DOB range format', str(value), parsed=False)
    start, end = bounds
    shown_dob, shown_start, shown_end = format_date(birth_date), format_date(start), format_date(end)
    requirement = f"DOB between: {shown_start} to {shown_end}"
    if birth_date < start:
        reason = f"Your date of birth ({shown_dob}) is before the eligible range. You must be born on or after {shown_start}"
        return CriteriaOutcome(False, reason, requirement)
    if birth_date > end:
        reason = f"Your date of birth ({shown_dob}) is after the eligible range. You must be born on or before {shown_end}"
        return CriteriaOutcome(False, reason, requirement)
    return CriteriaOutcome(True, f"Your date of birth ({shown_dob}) falls within the eligible range", requirement)


def evaluate_criteria(kind: CriteriaKind, value: Any, birth_date: date, age: AgeBreakdown) -> CriteriaOutcome:
    """Dispatch a resolved cutoff to its criteria-kind evaluator"""
    if kind == CriteriaKind.STARTING_AGE:
        return evaluate_starting_age(age, value)
    if kind == CriteriaKind.ENDING_AGE:
        return evaluate_ending_age(age, value)
    if kind == CriteriaKind.BETWEEN_AGE:
        return evaluate_between_age(age, value)
    if kind == CriteriaKind.MINIMUM_DOB:
        return evaluate_minimum_dob(birth_date, value)
    if kind == CriteriaKind.MAXIMUM_DOB:
        return evaluate_maximum_dob(birth_date, value)
    if kind == CriteriaKind.BETWEEN_DOB:
        return evaluate_between_dob(birth_date, value)
    raise ValueError(f"No evaluator for criteria kind: {kind}")


def _resolve(exam_data: Dict[str, Any], kind: CriteriaKind, context: EvaluationContext) -> Any:
    value = resolve_session_value(exam_data.get(KIND_FIELDS[kind]), context.session, context.exam_code)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def has_age_requirement(exam_data: Dict[str, Any]) -> bool:
    """True when any age/DOB cutoff field carries data"""
    return any(exam_data.get(field) not in (None, '', {}) for field in KIND_FIELDS.values())


def _is_no_age_limit(value: Any) -> bool:
    return re.sub(r'[\s_]+', ' ', normalize_text(value)) == NO_AGE_LIMIT_VALUE


def check_date_of_birth(user_dob: Any, exam_data: Dict[str, Any], context: EvaluationContext) -> CheckResult:
    """
    Check the candidate's date of birth against the document's age criteria.

    Args:
        user_dob: Birth date as DD-MM-YYYY or DD.MM.YYYY
        exam_data: Division-level requirement document
        context: Session, exam code, reference date and strict mode

    Returns:
        CheckResult for the date_of_birth field
    """
    tag = exam_data.get(CRITERIA_TAG)
    kind = CriteriaKind.from_tag(tag)

    if kind == CriteriaKind.NO_AGE_LIMIT and (not has_age_requirement(exam_data) or exam_data.get(NO_AGE_LIMIT_FIELD)):
        no_limit = resolve_session_value(exam_data.get(NO_AGE_LIMIT_FIELD), context.session, context.exam_code)
        return make_result(FIELD, True, 'No age limit for this exam', user_dob or 'Not specified', no_limit or 'No age restriction')

    if not isinstance(user_dob, str) or not user_dob.strip():
        return make_result(FIELD, False, 'Please provide your date of birth', 'Not specified', 'Date of birth required')

    birth_date = parse_date(user_dob)
    if birth_date is None:
        return make_result(FIELD, False, 'Invalid date format. Please use DD-MM-YYYY format', user_dob, 'Valid date required')

    age = calculate_age(birth_date, context.reference_date)
    user_value = f"DOB: {format_date(birth_date)} (Age: {format_age(age)})"

    if kind in KIND_FIELDS:
        value = _resolve(exam_data, kind, context)
        if value is None and kind in KIND_FALLBACKS:
            fallback = KIND_FALLBACKS[kind]
            fallback_value = _resolve(exam_data, fallback, context)
            if fallback_value is not None:
                logger.debug(f"{kind.value} has no value for {context.session!r}; using {fallback.value}")
                kind, value = fallback, fallback_value
        if value is None:
            label = KIND_LABELS[kind]
            return make_result(
                FIELD, True, f"{label} not specified for selected session", user_value, f"No {label.lower()} specified"
            )
    else:
        if tag not in (None, '') and kind is None:
            logger.debug(f"Unrecognised {CRITERIA_TAG} {tag!r}; detecting criteria from fields")
        value = None
        for candidate_kind in AUTO_DETECT_ORDER:
            value = _resolve(exam_data, candidate_kind, context)
            if value is not None:
                kind = candidate_kind
                break
        if value is None:
            return make_result(FIELD, True, 'No age/DOB criteria found for this exam', user_value, 'No age restriction')

    if _is_no_age_limit(value):
        return make_result(FIELD, True, 'No age limit for selected session', user_value, NO_AGE_LIMIT_VALUE)

    outcome = evaluate_criteria(kind, value, birth_date, age)
    if not outcome.parsed:
        return unparseable_result(FIELD, outcome.reason, user_value, value, context.strict_mode)
    logger.debug(f"{kind.value} for session {context.session!r}: {outcome.eligible}")
    return make_result(FIELD, outcome.eligible, outcome.reason, user_value, outcome.exam_requirement)


class DateOfBirthChecker(BaseChecker):
    """Checks age/DOB criteria"""

    field_name = FIELD

    def can_check(self, exam_data: Dict[str, Any], candidate: CandidateProfile) -> bool:
        kind = CriteriaKind.from_tag(exam_data.get(CRITERIA_TAG))
        if kind is not None and kind != CriteriaKind.NO_AGE_LIMIT:
            return True
        if CRITERIA_TAG in exam_data and kind is None:
            return True
        return has_age_requirement(exam_data) or NO_AGE_LIMIT_FIELD in exam_data

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return [check_date_of_birth(candidate.get(FIELD), exam_data, context)]
