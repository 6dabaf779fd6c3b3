"""
Simple scalar field checkers.

Physical standards, experience, licences and yes/no flags. Each function
takes (candidate value, requirement) and returns a CheckResult; the
ScalarFieldChecker class binds one of them to a document field.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result, unparseable_result
from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.normalize import contains_either_way, is_sentinel, normalize_text, split_list

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r'-?\d+(?:\.\d+)?')
RANGE_TO = re.compile(r'\s+to\s+', re.IGNORECASE)

LICENSE_ALIASES: Dict[str, List[str]] = {
    'LMV': ['LMV', 'LIGHT MOTOR VEHICLE'],
    'MCWG': ['MCWG', 'MOTORCYCLE WITH GEAR'],
    'MCWOG': ['MCWOG', 'MOTORCYCLE WITHOUT GEAR'],
    'HMV': ['HMV', 'HEAVY MOTOR VEHICLE', 'HTV', 'HEAVY TRANSPORT VEHICLE'],
    'HGMV': ['HGMV', 'HEAVY GOODS MOTOR VEHICLE'],
    'HPV': ['HPV', 'HEAVY PASSENGER VEHICLE'],
}

YES_VALUES = frozenset({'YES', 'TRUE', 'HAVE'})
NO_VALUES = frozenset({'NO', 'FALSE'})


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ''


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = NUMBER_PATTERN.search(str(value or ''))
    return float(match.group(0)) if match else None


def parse_numeric_requirement(requirement: Any) -> Optional[Tuple[Optional[float], Optional[float]]]:
    """
    Parse "157", "157-170", "157 to 170" (units allowed) into (min, max).

    A single number is a minimum. Returns None when no number is present.
    """
    if isinstance(requirement, (int, float)) and not isinstance(requirement, bool):
        return float(requirement), None
    text = str(requirement or '').strip()
    parts = RANGE_TO.split(text, maxsplit=1) if RANGE_TO.search(text) else text.split('-', 1)
    if len(parts) == 2:
        low, high = _to_float(parts[0]), _to_float(parts[1])
        if low is not None and high is not None:
            return low, high
    single = _to_float(text)
    if single is None:
        return None
    return single, None


def _format_number(value: float) -> str:
    return f"{value:g}"


def _check_numeric(
    field: str, label: str, unit: str, user_value: Any, requirement: Any, kind: str, strict_mode: bool = False,
) -> CheckResult:
    if is_sentinel(requirement, kind):
        return make_result(field, True, f"No {label} requirement", user_value if _present(user_value) else 'Not specified', requirement or 'Not Applicable')
    if not _present(user_value):
        return make_result(field, False, f"{label.capitalize()} not specified", 'Not specified', requirement)

    user_number = _to_float(user_value)
    bounds = parse_numeric_requirement(requirement)
    if user_number is None or bounds is None:
        return unparseable_result(field, f"Unable to compare {label}", user_value, requirement, strict_mode)

    low, high = bounds
    shown_user = f"{_format_number(user_number)}{unit}"
    if high is not None:
        eligible = low <= user_number <= high
        requirement_text = f"{_format_number(low)} - {_format_number(high)}{unit}"
        reason = (
            f"Your {label} ({shown_user}) is within the required range"
            if eligible
            else f"Your {label} ({shown_user}) is outside the required range of {requirement_text}"
        )
    else:
        eligible = user_number >= low
        requirement_text = f"Minimum {_format_number(low)}{unit}"
        reason = (
            f"Your {label} ({shown_user}) meets the minimum of {_format_number(low)}{unit}"
            if eligible
            else f"Your {label} ({shown_user}) is below the minimum of {_format_number(low)}{unit}"
        )
    return make_result(field, eligible, reason, shown_user, requirement_text)


def check_height_cm(user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    return _check_numeric('height_cm', 'height', ' cm', user_value, requirement, 'scalar', strict_mode)


def check_weight_kg(user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    return _check_numeric('weight_kg', 'weight', ' kg', user_value, requirement, 'scalar', strict_mode)


def check_work_experience_years(user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    return _check_numeric('work_experience_years', 'work experience', ' years', user_value, requirement, 'experience', strict_mode)


def _check_list(field: str, label: str, user_value: Any, requirement: Any, variations: Optional[List[str]] = None) -> CheckResult:
    """Comma list with substring match in either direction"""
    if is_sentinel(requirement, 'scalar'):
        return make_result(field, True, f"No {label} requirement", user_value or 'Not specified', requirement or 'Not Required')
    user_normalized = normalize_text(user_value)
    if not user_normalized:
        return make_result(field, False, f"{label.capitalize()} not specified", 'Not specified', requirement)

    allowed = split_list(requirement, 'scalar')
    candidates = variations or [user_normalized]
    eligible = any(contains_either_way(option, item) for item in allowed for option in candidates)
    reason = (
        f"Your {label} ({user_value}) meets the requirement"
        if eligible
        else f"Your {label} ({user_value}) is not in the accepted list: {', '.join(allowed)}"
    )
    return make_result(field, eligible, reason, user_value, requirement)


def check_driving_license_type(user_value: Any, requirement: Any) -> CheckResult:
    """Licence types match through their alias groups (HMV also covers HTV)"""
    user_normalized = normalize_text(user_value)
    variations = [user_normalized] if user_normalized else []
    for aliases in LICENSE_ALIASES.values():
        if any(alias == user_normalized or alias in user_normalized for alias in aliases):
            variations.extend(aliases)
            break
    return _check_list('driving_license_type', 'driving license', user_value, requirement, variations)


def check_vision_eyesight(user_value: Any, requirement: Any) -> CheckResult:
    return _check_list('vision_eyesight', 'eyesight', user_value, requirement)


def check_language_proficiency(user_value: Any, requirement: Any) -> CheckResult:
    """Eligible when any language the candidate knows is an accepted one"""
    if is_sentinel(requirement, 'scalar'):
        return make_result('language_proficiency', True, 'No language requirement', user_value or 'Not specified', requirement or 'Not Required')
    known = split_list(user_value)
    if not known:
        return make_result('language_proficiency', False, 'Language proficiency not specified', 'Not specified', requirement)
    allowed = split_list(requirement, 'scalar')
    matched = [language for language in known if any(contains_either_way(language, item) for item in allowed)]
    if matched:
        return make_result('language_proficiency', True, f"Language {matched[0]} meets the requirement", user_value, requirement)
    return make_result(
        'language_proficiency', False,
        f"None of your languages are accepted. Required: {', '.join(allowed)}", user_value, requirement,
    )


def check_sports_quota_eligibility(user_value: Any, requirement: Any) -> CheckResult:
    return _check_list('sports_quota_eligibility', 'sports quota', user_value, requirement)


def check_current_employment_status(user_value: Any, requirement: Any) -> CheckResult:
    return _check_list('current_employment_status', 'employment status', user_value, requirement)


def check_ex_servicemen_status(user_value: Any, requirement: Any) -> CheckResult:
    """YES/REQUIRED/ONLY needs an ex-serviceman; NO/NOT ALLOWED excludes one"""
    field = 'ex_servicemen_status'
    required = normalize_text(requirement)
    user_normalized = normalize_text(user_value)
    if required in ('YES', 'REQUIRED', 'ONLY'):
        eligible = user_normalized in YES_VALUES
        reason = 'Ex-servicemen status confirmed' if eligible else 'This exam is only for ex-servicemen'
        return make_result(field, eligible, reason, user_value or 'Not specified', 'Ex-servicemen only')
    if required in ('NO', 'NOT ALLOWED'):
        eligible = user_normalized in NO_VALUES
        reason = 'Non ex-servicemen candidate is eligible' if eligible else 'Ex-servicemen are not eligible for this exam'
        if not user_normalized:
            reason = 'Ex-servicemen status not specified'
        return make_result(field, eligible, reason, user_value or 'Not specified', 'Ex-servicemen not allowed')
    return make_result(field, True, 'Open to ex-servicemen and others', user_value or 'Not specified', requirement or 'Not Applicable')


def check_cpl_holder(user_value: Any, requirement: Any) -> CheckResult:
    """YES/REQUIRED needs a Commercial Pilot Licence; anything else is advisory"""
    field = 'cpl_holder'
    required = normalize_text(requirement)
    if required in ('YES', 'REQUIRED'):
        eligible = normalize_text(user_value) in YES_VALUES
        reason = 'Commercial Pilot Licence held' if eligible else 'A Commercial Pilot Licence is required'
        return make_result(field, eligible, reason, user_value or 'Not specified', 'CPL required')
    return make_result(field, True, 'Commercial Pilot Licence not mandatory', user_value or 'Not specified', requirement or 'Not Required')


def _check_allowance(field: str, label: str, user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    """NO/NONE/0/NOT ALLOWED means zero; a number is a maximum; YES/ALLOWED is open"""
    required = normalize_text(requirement) if not isinstance(requirement, (int, float)) else str(requirement)
    user_number = _to_float(user_value) or 0
    shown_user = _format_number(user_number)

    if is_sentinel(requirement, 'scalar') or required in ('APPLICABLE', 'YES', 'ALLOWED'):
        return make_result(field, True, f"{label.capitalize()} are allowed", user_value if _present(user_value) else 'Not specified', requirement or 'Allowed')
    if required in ('NO', 'NONE', '0', 'NOT ALLOWED'):
        eligible = user_number == 0
        reason = f"No {label} declared" if eligible else f"No {label} are allowed for this exam"
        return make_result(field, eligible, reason, shown_user, f"No {label} allowed")

    maximum = _to_float(requirement)
    if maximum is None:
        return unparseable_result(field, f"Unknown {label} requirement", user_value, requirement, strict_mode)
    eligible = user_number <= maximum
    reason = (
        f"Your {label} ({shown_user}) are within the maximum of {_format_number(maximum)}"
        if eligible
        else f"Your {label} ({shown_user}) exceed the maximum of {_format_number(maximum)}"
    )
    return make_result(field, eligible, reason, shown_user, f"Maximum {_format_number(maximum)} {label}")


def check_gap_years_allowed(user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    return _check_allowance('gap_years_allowed', 'gap years', user_value, requirement, strict_mode)


def check_active_backlogs_allowed(user_value: Any, requirement: Any, strict_mode: bool = False) -> CheckResult:
    return _check_allowance('active_backlogs_allowed', 'active backlogs', user_value, requirement, strict_mode)


# Document field -> (candidate field, check function)
SCALAR_CHECKS: Dict[str, Tuple[str, Callable[..., CheckResult]]] = {
    'height_cm': ('height_cm', check_height_cm),
    'weight_kg': ('weight_kg', check_weight_kg),
    'work_experience_years': ('work_experience_years', check_work_experience_years),
    'driving_license_type': ('driving_license_type', check_driving_license_type),
    'vision_eyesight': ('vision_eyesight', check_vision_eyesight),
    'language_proficiency': ('language_proficiency', check_language_proficiency),
    'sports_quota_eligibility': ('sports_quota_eligibility', check_sports_quota_eligibility),
    'current_employment_status': ('current_employment_status', check_current_employment_status),
    'ex_servicemen_status': ('ex_servicemen_status', check_ex_servicemen_status),
    'cpl_holder': ('cpl_holder', check_cpl_holder),
    'gap_years_allowed': ('gap_years', check_gap_years_allowed),
    'active_backlogs_allowed': ('active_backlogs', check_active_backlogs_allowed),
}

# Checks that parse numbers from the document and honour strict mode
STRICT_AWARE_CHECKS = frozenset({
    'height_cm', 'weight_kg', 'work_experience_years', 'gap_years_allowed', 'active_backlogs_allowed',
})


class ScalarFieldChecker(BaseChecker):
    """Binds one scalar check function to a document field"""

    def __init__(self, field_name: str):
        if field_name not in SCALAR_CHECKS:
            raise ValueError(f"No scalar check registered for field: {field_name}")
        self.field_name = field_name
        self.candidate_field, self._check = SCALAR_CHECKS[field_name]

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        user_value = candidate.get(self.candidate_field)
        requirement = exam_data.get(self.field_name)
        if self.field_name in STRICT_AWARE_CHECKS:
            return [self._check(user_value, requirement, strict_mode=context.strict_mode)]
        return [self._check(user_value, requirement)]
