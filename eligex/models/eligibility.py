"""
Eligibility Data Models with Pydantic Validation

Defines the candidate profile, the per-field check result and the
per-(division, session) eligibility report produced by the engine.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CriteriaKind(str, Enum):
    """Age/DOB criteria kinds selected by age_criteria_type"""
    STARTING_AGE = "STARTING_AGE"
    ENDING_AGE = "ENDING_AGE"
    BETWEEN_AGE = "BETWEEN_AGE"
    MINIMUM_DOB = "MINIMUM_DOB"
    MAXIMUM_DOB = "MAXIMUM_DOB"
    BETWEEN_DOB = "BETWEEN_DOB"
    NO_AGE_LIMIT = "NO_AGE_LIMIT"

    @classmethod
    def from_tag(cls, tag: Any) -> Optional['CriteriaKind']:
        """Map a raw age_criteria_type value (and its short aliases) to a kind"""
        if not isinstance(tag, str):
            return None
        key = re.sub(r'\s+', '_', tag.strip().upper())
        if key in ('', 'NOT_APPLICABLE'):
            return cls.NO_AGE_LIMIT
        return CRITERIA_ALIASES.get(key)


CRITERIA_ALIASES = {
    'STARTING_AGE': CriteriaKind.STARTING_AGE,
    'MIN_AGE': CriteriaKind.STARTING_AGE,
    'ENDING_AGE': CriteriaKind.ENDING_AGE,
    'MAX_AGE': CriteriaKind.ENDING_AGE,
    'BETWEEN_AGE': CriteriaKind.BETWEEN_AGE,
    'MINIMUM_DOB': CriteriaKind.MINIMUM_DOB,
    'MIN_DOB': CriteriaKind.MINIMUM_DOB,
    'MAXIMUM_DOB': CriteriaKind.MAXIMUM_DOB,
    'MAX_DOB': CriteriaKind.MAXIMUM_DOB,
    'BETWEEN_DOB': CriteriaKind.BETWEEN_DOB,
    'NO_AGE_LIMIT': CriteriaKind.NO_AGE_LIMIT,
}


class AgeBreakdown(BaseModel):
    """Calendar age with borrow, plus a decimal figure for display only"""
    model_config = ConfigDict(frozen=True)

    years: int
    months: int
    days: int
    total_years: float


class CheckResult(BaseModel):
    """Outcome of one evaluated eligibility dimension"""
    model_config = ConfigDict(frozen=True)

    field: str
    user_value: str = ""
    exam_requirement: str = ""
    eligible: bool
    reason: str

    @field_validator('user_value', 'exam_requirement', mode='before')
    @classmethod
    def stringify(cls, v: Any) -> str:
        """Display strings; lists are joined the way the documents write them"""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item) for item in v)
        return str(v)


class EligibilityReport(BaseModel):
    """Pass/fail outcome with per-field detail for one division and session"""

    division: Optional[str] = None
    session: Optional[str] = None
    session_label: Optional[str] = None
    exam_name: Optional[str] = None
    exam_code: Optional[str] = None
    eligible: bool = True
    results: List[CheckResult] = Field(default_factory=list)

    @model_validator(mode='after')
    def compute_eligible(self) -> 'EligibilityReport':
        """eligible is always the AND of every result"""
        self.eligible = all(result.eligible for result in self.results)
        return self

    @property
    def summary(self) -> str:
        return 'Eligible' if self.eligible else 'Not Eligible'

    def failed_checks(self) -> List[CheckResult]:
        """Results that made this report ineligible"""
        return [result for result in self.results if not result.eligible]


class EducationRecord(BaseModel):
    """Candidate record for one education level"""
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    course: str = ""
    subject: str = ""
    marks_percentage: str = Field("", alias="marksPercentage")
    status: str = ""
    completed_year: str = Field("", alias="completedYear")

    @field_validator('course', 'subject', 'marks_percentage', 'status', 'completed_year', mode='before')
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Documents and forms mix numbers and strings"""
        if v is None:
            return ""
        return str(v)

    def is_populated(self) -> bool:
        return bool(self.course)


# Education table labels used by entry forms, mapped to level keys
EDUCATION_FORM_KEYS = {
    'POST DOCTORATE': 'post_doctorate',
    'PHD': 'phd',
    'POST GRADUATION': 'post_graduation',
    'GRADUATION': 'graduation',
    'DIPLOMA / ITI (POLYTECHNIC, ITI, DPHARM, PGDCA)': 'diploma',
    '(12TH)HIGHER SECONDARY': '12th_higher_secondary',
    '(12TH) HIGHER SECONDARY': '12th_higher_secondary',
    '(10TH)SECONDARY': '10th_secondary',
    '(10TH) SECONDARY': '10th_secondary',
}


class CandidateProfile(BaseModel):
    """
    Candidate profile evaluated against exam documents.

    Scalar fields (gender, nationality, height_cm, ...) are kept as extra
    attributes so any field an exam document names can be looked up with
    get(). Education records are validated into EducationRecord objects.
    """
    model_config = ConfigDict(extra='allow', frozen=True)

    date_of_birth: Optional[str] = None
    education_levels: Dict[str, EducationRecord] = Field(default_factory=dict)

    @field_validator('education_levels', mode='before')
    @classmethod
    def drop_empty_levels(cls, v: Any) -> Dict[str, Any]:
        if not v:
            return {}
        if not isinstance(v, dict):
            raise ValueError("education_levels must be a mapping of level key to record")
        return {key: record for key, record in v.items() if record}

    def get(self, field_name: str, default: Any = None) -> Any:
        """Look up a profile field by name, declared or extra"""
        if field_name in type(self).model_fields:
            value = getattr(self, field_name)
        else:
            value = (self.model_extra or {}).get(field_name, default)
        return default if value is None else value

    def education_record(self, level_key: str) -> Optional[EducationRecord]:
        return self.education_levels.get(level_key)

    @classmethod
    def from_form(cls, form_data: Dict[str, Any], education_table: Optional[Dict[str, Any]] = None) -> 'CandidateProfile':
        """
        Build a profile from entry-form data.

        Args:
            form_data: Flat form values; date_of_birth in YYYY-MM-DD
            education_table: Rows keyed by table label with course, subject,
                marks, completionStatus and completedYear

        Returns:
            CandidateProfile with the birth date in DD-MM-YYYY
        """
        data = dict(form_data)
        dob = data.get('date_of_birth')
        if dob:
            parts = str(dob).split('-')
            if len(parts) == 3 and len(parts[0]) == 4:
                data['date_of_birth'] = f"{parts[2]}-{parts[1]}-{parts[0]}"

        levels: Dict[str, Dict[str, Any]] = {}
        for label, row in (education_table or {}).items():
            if not row or not (row.get('course') or row.get('marks') or row.get('subject')):
                continue
            key = EDUCATION_FORM_KEYS.get(label, label.lower().replace(' ', '_'))
            levels[key] = {
                'course': row.get('course', ''),
                'subject': row.get('subject', ''),
                'marks_percentage': row.get('marks', ''),
                'status': row.get('completionStatus', ''),
                'completed_year': row.get('completedYear', ''),
            }
        data['education_levels'] = levels
        return cls(**data)
