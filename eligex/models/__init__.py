"""
EligEX Models

Pydantic models for candidate profiles and eligibility results.
"""

from .eligibility import (
    AgeBreakdown,
    CandidateProfile,
    CheckResult,
    CriteriaKind,
    EducationRecord,
    EligibilityReport,
)

__all__ = [
    'AgeBreakdown',
    'CandidateProfile',
    'CheckResult',
    'CriteriaKind',
    'EducationRecord',
    'EligibilityReport',
]
