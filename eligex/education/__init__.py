"""
EligEX Education

- hierarchy: the ranked order of qualifications and their level keys
- matcher: highest-qualification, per-level course/subject/marks and
  diploma/12th equivalency checks
"""

from .hierarchy import (
    EDUCATION_LEVELS,
    EducationLevel,
    get_education_level,
    get_education_rank,
    get_waterfall_levels,
)
from .matcher import (
    EducationChecker,
    check_diploma_12th_equivalency,
    check_education,
    check_education_course,
    check_education_subject,
    check_highest_education_qualification,
    check_marks_percentage,
    check_subject_specific_condition,
    get_required_education_levels,
)

__all__ = [
    'EDUCATION_LEVELS',
    'EducationLevel',
    'get_education_level',
    'get_education_rank',
    'get_waterfall_levels',
    'EducationChecker',
    'check_diploma_12th_equivalency',
    'check_education',
    'check_education_course',
    'check_education_subject',
    'check_highest_education_qualification',
    'check_marks_percentage',
    'check_subject_specific_condition',
    'get_required_education_levels',
]
