"""
EligEX - Exam Eligibility Engine

This library evaluates candidate profiles against semi-structured exam
eligibility documents and explains every verdict field by field.

Basic usage:
    from datetime import date
    from eligex import CandidateProfile, evaluate_exam, is_eligible_for_exam

    candidate = CandidateProfile(
        gender='FEMALE',
        date_of_birth='15-06-2003',
        education_levels={
            'graduation': {'course': 'B.SC', 'subject': 'PHYSICS', 'marksPercentage': '72'},
        },
    )

    # One report per division and session of the exam
    reports = evaluate_exam(exam_document, candidate, today=date(2026, 6, 1))
    for report in reports:
        print(report.division, report.session, report.summary)
        for result in report.failed_checks():
            print('  ', result.field, result.reason)

    print(is_eligible_for_exam(reports))
"""

from eligex.config.eligex_config import EligEXConfig
from eligex.exceptions import (
    CatalogError,
    ConfigurationError,
    EligibilityError,
    InvalidEvaluationCallError,
)
from eligex.models.eligibility import CandidateProfile, CheckResult, EducationRecord, EligibilityReport
from eligex.orchestrator import evaluate_exam, is_eligible_for_exam

__all__ = [
    'EligEXConfig',
    'CandidateProfile',
    'CheckResult',
    'EducationRecord',
    'EligibilityReport',
    'evaluate_exam',
    'is_eligible_for_exam',
    'EligibilityError',
    'InvalidEvaluationCallError',
    'ConfigurationError',
    'CatalogError',
]

__version__ = '0.1.0'
