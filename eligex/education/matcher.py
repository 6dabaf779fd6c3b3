"""
Education Hierarchy Matcher

Checks the candidate's highest qualification against the exam's, then
walks every level from the required one down to 10th and validates the
course, subject and marks recorded for each.

Exam documents describe levels like:

    "education_levels": {
        "graduation": {
            "course": {"options": ["B.SC", "B.TECH"]},
            "subject": {"B.SC": ["PHYSICS", "MATHEMATICS"]},
            "marks_percentage": {"GEN": "60%", "SC": "55%"}
        },
        "12th_higher_secondary": {"course": {"options": ["SCIENCE"]}}
    }

A PWD candidate is held to the document's pwd_status marks table, when it
has one, instead of the level's category table.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from eligex.checkers.base import BaseChecker, EvaluationContext, make_result, unparseable_result
from eligex.checkers.caste_category import category_short_code
from eligex.checkers.pwd_status import is_pwd
from eligex.education.hierarchy import (
    DIPLOMA,
    EQUIVALENT_LEVELS,
    HIGHER_SECONDARY,
    SECONDARY,
    get_education_level,
    get_education_rank,
    get_level_name,
    get_waterfall_levels,
    highest_level_key,
)
from eligex.models.eligibility import CandidateProfile, CheckResult, EducationRecord
from eligex.reference import CATEGORY_MARKS_KEYS
from eligex.rules.normalize import contains_either_way, is_sentinel, normalize_text, split_list

logger = logging.getLogger(__name__)

HIGHEST_FIELD = 'highest_education_qualification'
LEVELS_FIELD = 'education_levels'
EQUIVALENCY_FIELD = 'diploma_12th_equivalency'
NO_SPECIFIC_REQUIREMENT = 'No specific requirement'

ALL_COURSES = frozenset({'ALL', 'ALL COURSES'})
ALL_SUBJECTS = frozenset({'ALL', 'ALL SUBJECTS'})
OTHER_OPTION = 'OTHER'

# Document-level subject conditions, keyed by the level they apply to
SUBJECT_CONDITION_FIELDS = {
    'subjects_at_12th': HIGHER_SECONDARY,
    'subjects_at_10th': SECONDARY,
}


def _level_data(exam_levels: Any, level_key: str) -> Any:
    if not isinstance(exam_levels, dict):
        return None
    return exam_levels.get(level_key)


def _is_defined(level_data: Any) -> bool:
    return level_data not in (None, '', {})


def _options(value: Any) -> List[str]:
    if isinstance(value, dict):
        value = value.get('options', [])
    return split_list(value, 'education')


def _option_matches(user_value: str, options: List[str]) -> bool:
    return any(option == OTHER_OPTION or contains_either_way(user_value, option) for option in options)


def parse_percentage(value: Any) -> Optional[float]:
    """Parse "60%", "60" or 60 into 60.0"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace('%', '').strip())
    except ValueError:
        return None


def _format_percentage(value: float) -> str:
    return f"{value:g}%"


def check_highest_education_qualification(user_education: Any, requirement: Any) -> CheckResult:
    """eligible iff the candidate's rank is at least the required rank"""
    if is_sentinel(requirement, 'education'):
        return make_result(HIGHEST_FIELD, True, 'No specific education requirement', user_education or 'Not specified', requirement or 'No minimum requirement')
    if not normalize_text(user_education):
        return make_result(HIGHEST_FIELD, False, 'Education qualification not provided', 'Not specified', requirement)

    if get_education_level(requirement) is None:
        logger.warning(f"Unknown education qualification in document: {requirement!r}")

    eligible = get_education_rank(user_education) >= get_education_rank(requirement)
    reason = (
        f"Your education level ({user_education}) meets or exceeds the requirement ({requirement})"
        if eligible
        else f"Your education level ({user_education}) is below the minimum requirement ({requirement})"
    )
    return make_result(HIGHEST_FIELD, eligible, reason, user_education, requirement)


def check_education_course(user_course: Any, exam_levels: Any, level_key: str) -> CheckResult:
    """Course check for one level; "OTHER" in the options accepts any course"""
    field = f"education_course_{level_key}"
    level_name = get_level_name(level_key)
    level_data = _level_data(exam_levels, level_key)

    if not _is_defined(level_data):
        return make_result(field, True, f"No specific course requirement for {level_name}", user_course or 'Not specified', 'All courses accepted')

    options = []
    if isinstance(level_data, dict):
        options = _options(level_data.get('course') or level_data.get('course_stream'))
    if normalize_text(level_data) in ALL_COURSES or not options or ALL_COURSES & set(options):
        return make_result(field, True, f"All courses are accepted for {level_name}", user_course or 'Not specified', 'All courses accepted')

    user_value = normalize_text(user_course)
    if not user_value:
        return make_result(field, False, f"Course not specified for {level_name}", 'Not specified', options)

    eligible = _option_matches(user_value, options)
    reason = (
        f"Course {user_course} is accepted for {level_name}"
        if eligible
        else f"Course {user_course} is not in the allowed list for {level_name}"
    )
    return make_result(field, eligible, reason, user_course, options)


def check_education_subject(user_subject: Any, exam_levels: Any, level_key: str, user_course: Any = None) -> CheckResult:
    """
    Subject check for one level.

    Subject options are narrowed to the candidate's course when the
    document keys subjects by course.
    """
    field = f"education_subject_{level_key}"
    level_name = get_level_name(level_key)
    level_data = _level_data(exam_levels, level_key)

    if not _is_defined(level_data):
        return make_result(field, True, f"No specific subject requirement for {level_name}", user_subject or 'Not specified', 'All subjects accepted')

    options: List[str] = []
    subjects = level_data.get('subject') if isinstance(level_data, dict) else None
    if isinstance(subjects, dict):
        course_key = next((key for key in subjects if normalize_text(key) == normalize_text(user_course)), None)
        if user_course and course_key is not None:
            options = split_list(subjects[course_key], 'education')
        elif 'options' in subjects:
            options = split_list(subjects['options'], 'education')
        else:
            for value in subjects.values():
                options.extend(split_list(value, 'education'))
    elif subjects is not None:
        options = split_list(subjects, 'education')

    if normalize_text(level_data) in ALL_SUBJECTS or not options or ALL_SUBJECTS & set(options):
        return make_result(field, True, f"All subjects are accepted for {level_name}", user_subject or 'Not specified', 'All subjects accepted')

    user_value = normalize_text(user_subject)
    if not user_value:
        return make_result(field, False, f"Subject not specified for {level_name}", 'Not specified', options)

    eligible = _option_matches(user_value, options)
    reason = (
        f"Subject {user_subject} is accepted for {level_name}"
        if eligible
        else f"Subject {user_subject} is not in the allowed list for {level_name}"
    )
    return make_result(field, eligible, reason, user_subject, options)


def marks_category_key(category: Any, default_category: str = 'GEN') -> str:
    """Short code a marks table is keyed by ("SC (SCHEDULED CASTE)" -> "SC")"""
    normalized = normalize_text(category)
    if not normalized:
        return default_category
    return CATEGORY_MARKS_KEYS.get(normalized, category_short_code(normalized))


def _threshold_for(table: Dict[str, Any], keys: Tuple[str, ...], fallback: float) -> Any:
    """First threshold present for the given category keys; 0 is a real threshold"""
    for key in keys:
        if key in table and table[key] not in (None, ''):
            return table[key]
    return fallback


def check_marks_percentage(
    user_marks: Any,
    exam_data: Dict[str, Any],
    level_key: str,
    category: Any = None,
    pwd_candidate: bool = False,
    context: Optional[EvaluationContext] = None,
) -> CheckResult:
    """
    Marks check for one level.

    Args:
        user_marks: Candidate percentage ("72%", "72" or 72)
        exam_data: Division-level requirement document
        level_key: Education level key
        category: Candidate category (short code or full name)
        pwd_candidate: Whether the candidate declared PWD
        context: Supplies default category, fallback threshold and strict mode

    Returns:
        CheckResult for the marks_percentage_<level> field
    """
    field = f"marks_percentage_{level_key}"
    level_name = get_level_name(level_key)
    default_category = context.default_category if context else 'GEN'
    default_marks = context.default_marks_percentage if context else 33.0
    strict_mode = context.strict_mode if context else False

    level_data = _level_data(exam_data.get(LEVELS_FIELD), level_key)
    table: Any = None
    source = ''
    pwd_table = exam_data.get('pwd_status')
    if pwd_candidate and isinstance(pwd_table, dict) and pwd_table:
        table, source = pwd_table, 'PWD'
    elif isinstance(level_data, dict) and level_data.get('marks_percentage'):
        table, source = level_data['marks_percentage'], 'Standard'

    if not table:
        shown = f"{user_marks}%" if user_marks not in (None, '') else 'Not specified'
        return make_result(field, True, f"No specific marks requirement for {level_name}", shown, 'No minimum percentage')

    category_key = marks_category_key(category, default_category)
    if isinstance(table, dict):
        required_raw = _threshold_for(table, (category_key, default_category, 'GEN'), default_marks)
    else:
        required_raw = table
    requirement_text = f"{required_raw} ({category_key}, {source})"

    if user_marks in (None, ''):
        return make_result(field, False, f"Marks percentage not provided for {level_name}", 'Not specified', requirement_text)

    user_percent = parse_percentage(user_marks)
    required_percent = parse_percentage(required_raw)
    if required_percent is None:
        return unparseable_result(field, 'Unable to parse percentage values', user_marks, required_raw, strict_mode)
    if user_percent is None:
        return make_result(field, False, f"Marks percentage for {level_name} is not a number", user_marks, requirement_text)

    eligible = user_percent >= required_percent
    relation = 'meet' if eligible else 'are below'
    reason = (
        f"Your marks ({_format_percentage(user_percent)}) {relation} the {source} requirement "
        f"({_format_percentage(required_percent)}) for {level_name}"
    )
    return make_result(
        field, eligible, reason,
        _format_percentage(user_percent), f"{_format_percentage(required_percent)} ({category_key}, {source})",
    )


def _has_level(records: Dict[str, EducationRecord], level_key: str) -> bool:
    record = records.get(level_key)
    return bool(record and record.is_populated())


def check_diploma_12th_equivalency(records: Dict[str, EducationRecord], exam_levels: Any) -> CheckResult:
    """
    Diploma/12th equivalency.

    Both levels defined by the document: the candidate needs both. One
    defined: either satisfies it.
    """
    has_diploma = _has_level(records, DIPLOMA)
    has_12th = _has_level(records, HIGHER_SECONDARY)
    user_value = f"Diploma: {'Yes' if has_diploma else 'No'}, 12th: {'Yes' if has_12th else 'No'}"
    requires_diploma = _is_defined(_level_data(exam_levels, DIPLOMA))
    requires_12th = _is_defined(_level_data(exam_levels, HIGHER_SECONDARY))

    if requires_diploma and requires_12th:
        eligible = has_diploma and has_12th
        reason = (
            'You have both Diploma and 12th qualifications'
            if eligible
            else 'Both Diploma and 12th qualifications are required'
        )
        return make_result(EQUIVALENCY_FIELD, eligible, reason, user_value, 'Both Diploma and 12th required')

    if requires_diploma or requires_12th:
        eligible = has_diploma or has_12th
        reason = (
            'You have the required qualification (Diploma/12th)'
            if eligible
            else 'Either Diploma or 12th qualification is required'
        )
        return make_result(EQUIVALENCY_FIELD, eligible, reason, user_value, 'Diploma or 12th (equivalent)')

    return make_result(EQUIVALENCY_FIELD, True, 'No specific Diploma/12th requirement', user_value, NO_SPECIFIC_REQUIREMENT)


def check_subject_specific_condition(user_subject: Any, level_key: str, required_subjects: Any) -> CheckResult:
    """Every required subject must appear in the candidate's subject text"""
    field = f"subject_condition_{level_key}"
    level_name = get_level_name(level_key)
    required = split_list(required_subjects, 'education')
    if not required:
        return make_result(field, True, 'No subject-specific conditions', 'N/A', 'No specific subjects required')

    requirement_text = f"Required: {', '.join(required)}"
    user_value = normalize_text(user_subject)
    if not user_value:
        return make_result(field, False, f"Subject not specified for {level_name}", 'Not specified', requirement_text)

    missing = [subject for subject in required if subject not in user_value]
    if missing:
        return make_result(
            field, False, f"Missing required subjects ({', '.join(missing)}) for {level_name}", user_subject, requirement_text
        )
    return make_result(field, True, f"Your subjects include all required subjects for {level_name}", user_subject, requirement_text)


def _candidate_highest(candidate: CandidateProfile) -> Any:
    declared = candidate.get(HIGHEST_FIELD)
    if declared:
        return declared
    populated = [key for key, record in candidate.education_levels.items() if record.is_populated()]
    key = highest_level_key(populated)
    return get_level_name(key) if key else None


def get_required_education_levels(exam_data: Dict[str, Any]) -> List[str]:
    """
    Waterfall of level keys the candidate must substantiate.

    Derived from highest_education_qualification, or from the highest level
    the document defines when that field is absent or a sentinel.
    """
    required = exam_data.get(HIGHEST_FIELD)
    if is_sentinel(required, 'education') or get_education_level(required) is None:
        exam_levels = exam_data.get(LEVELS_FIELD)
        defined = [key for key, data in exam_levels.items() if _is_defined(data)] if isinstance(exam_levels, dict) else []
        key = highest_level_key(defined)
        return get_waterfall_levels(key) if key else []
    return get_waterfall_levels(required)


def check_education(candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
    """
    Full education evaluation for one document.

    Returns the highest-qualification result (when the document names one),
    then course, subject and marks results for every waterfall level, any
    subject conditions, and the diploma/12th equivalency result when the
    document constrains either level.
    """
    results: List[CheckResult] = []

    if HIGHEST_FIELD in exam_data:
        highest = check_highest_education_qualification(_candidate_highest(candidate), exam_data.get(HIGHEST_FIELD))
        results.append(highest)
        if not highest.eligible:
            return results

    exam_levels = exam_data.get(LEVELS_FIELD) or {}
    records = candidate.education_levels
    both_defined = _is_defined(_level_data(exam_levels, DIPLOMA)) and _is_defined(_level_data(exam_levels, HIGHER_SECONDARY))
    category = candidate.get('caste_category')
    pwd_candidate = is_pwd(candidate.get('pwd_status'))

    for level_key in get_required_education_levels(exam_data):
        record = records.get(level_key)
        level_name = get_level_name(level_key)

        if not (record and record.is_populated()):
            equivalent = EQUIVALENT_LEVELS.get(level_key)
            if equivalent and _has_level(records, equivalent) and not both_defined:
                logger.debug(f"{level_key} not recorded; covered by {equivalent}")
                continue
            results.append(make_result(
                f"education_record_{level_key}", False,
                f"{level_name} details not provided", 'Not specified', f"{level_name} required",
            ))
            continue

        results.append(check_education_course(record.course, exam_levels, level_key))
        results.append(check_education_subject(record.subject, exam_levels, level_key, record.course))
        results.append(check_marks_percentage(record.marks_percentage, exam_data, level_key, category, pwd_candidate, context))

        level_data = _level_data(exam_levels, level_key)
        if isinstance(level_data, dict) and level_data.get('required_subjects'):
            results.append(check_subject_specific_condition(record.subject, level_key, level_data['required_subjects']))

    for field_name, level_key in SUBJECT_CONDITION_FIELDS.items():
        if not is_sentinel(exam_data.get(field_name)):
            record = records.get(level_key)
            results.append(check_subject_specific_condition(record.subject if record else '', level_key, exam_data[field_name]))

    equivalency = check_diploma_12th_equivalency(records, exam_levels)
    if equivalency.exam_requirement != NO_SPECIFIC_REQUIREMENT:
        results.append(equivalency)

    return results


class EducationChecker(BaseChecker):
    """Checks highest qualification and the per-level education waterfall"""

    field_name = LEVELS_FIELD

    def can_check(self, exam_data: Dict[str, Any], candidate: CandidateProfile) -> bool:
        return HIGHEST_FIELD in exam_data or bool(exam_data.get(LEVELS_FIELD)) or any(
            field_name in exam_data for field_name in SUBJECT_CONDITION_FIELDS
        )

    def check(self, candidate: CandidateProfile, exam_data: Dict[str, Any], context: EvaluationContext) -> List[CheckResult]:
        return check_education(candidate, exam_data, context)
