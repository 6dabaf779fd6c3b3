"""
EligEX Orchestrator

Fans one exam document out into (division, session) pairs, runs every
applicable checker for each pair and collects the results into one
EligibilityReport per pair.

Usage:
    from eligex import evaluate_exam

    reports = evaluate_exam(exam_document, candidate, today=date(2026, 6, 1))
    for report in reports:
        print(report.division, report.session, report.summary)
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from eligex.checkers.base import BaseChecker, EvaluationContext
from eligex.checkers.caste_category import CasteCategoryChecker
from eligex.checkers.date_of_birth import DateOfBirthChecker
from eligex.checkers.gender import GenderChecker
from eligex.checkers.marital_status import MaritalStatusChecker
from eligex.checkers.nationality import DomicileChecker, NationalityChecker
from eligex.checkers.ncc import NccCertificateChecker, NccCertificateGradeChecker, NccWingChecker
from eligex.checkers.pwd_status import PwdStatusChecker
from eligex.checkers.scalar import SCALAR_CHECKS, ScalarFieldChecker
from eligex.config.eligex_config import EligEXConfig
from eligex.education.matcher import EducationChecker
from eligex.exceptions import InvalidEvaluationCallError
from eligex.models.eligibility import CandidateProfile, CheckResult, EligibilityReport
from eligex.rules.session import get_exam_sessions, get_reference_date

logger = logging.getLogger(__name__)

# Comma list of division names some documents carry next to the container
DIVISION_NAMES_FIELD = 'posts_classes_courses_departments_academies'


def build_checkers() -> List[BaseChecker]:
    """Checkers in the order their results appear in a report"""
    checkers: List[BaseChecker] = [
        GenderChecker(),
        MaritalStatusChecker(),
        PwdStatusChecker(),
        CasteCategoryChecker(),
        NationalityChecker(),
        DomicileChecker(),
        DateOfBirthChecker(),
        EducationChecker(),
        NccWingChecker(),
        NccCertificateChecker(),
        NccCertificateGradeChecker(),
    ]
    checkers.extend(ScalarFieldChecker(field_name) for field_name in SCALAR_CHECKS)
    return checkers


def detect_divisions(exam_document: Dict[str, Any], division_keys: List[str]) -> Optional[Tuple[str, List[str]]]:
    """
    Find the division container of a document.

    Args:
        exam_document: Raw exam document
        division_keys: Container keys in lookup order

    Returns:
        (container key, division names) or None when the document has no
        divisions. Names listed in the document's division-name field come
        first, in that order; the rest follow in container order.
    """
    for key in division_keys:
        container = exam_document.get(key)
        if not isinstance(container, dict) or not container:
            continue
        names = [name for name, data in container.items() if isinstance(data, dict)]
        if not names:
            logger.warning(f"Division container {key!r} holds no division documents")
            continue

        hint = exam_document.get(DIVISION_NAMES_FIELD)
        if isinstance(hint, str) and hint.strip():
            hinted = [name.strip() for name in hint.split(',') if name.strip() in names]
            names = hinted + [name for name in names if name not in hinted]
        return key, names
    return None


def get_division_data(exam_document: Dict[str, Any], container_key: str, division: str) -> Optional[Dict[str, Any]]:
    container = exam_document.get(container_key)
    if not isinstance(container, dict):
        return None
    data = container.get(division)
    return data if isinstance(data, dict) else None


def _as_profile(candidate: Union[CandidateProfile, Dict[str, Any], None]) -> CandidateProfile:
    if isinstance(candidate, CandidateProfile):
        return candidate
    if isinstance(candidate, dict):
        return CandidateProfile.model_validate(candidate)
    raise InvalidEvaluationCallError("A candidate profile is required")


def check_full_eligibility(
    candidate: CandidateProfile,
    exam_data: Dict[str, Any],
    context: EvaluationContext,
    checkers: Optional[List[BaseChecker]] = None,
) -> List[CheckResult]:
    """
    Run every applicable checker against one division document.

    A checker is skipped entirely when its field is absent from the document.
    """
    results: List[CheckResult] = []
    for checker in checkers or build_checkers():
        if not checker.can_check(exam_data, candidate):
            continue
        checker_results = checker.check(candidate, exam_data, context)
        for result in checker_results:
            logger.debug(f"{result.field}: {'eligible' if result.eligible else 'not eligible'} ({result.reason})")
        results.extend(checker_results)
    return results


def evaluate_exam(
    exam_document: Optional[Dict[str, Any]],
    candidate: Union[CandidateProfile, Dict[str, Any], None],
    today: Optional[date] = None,
    session: Optional[str] = None,
    config: Optional[EligEXConfig] = None,
) -> List[EligibilityReport]:
    """
    Evaluate a candidate against every division and session of an exam.

    Args:
        exam_document: Parsed exam document
        candidate: CandidateProfile or a mapping accepted by it
        today: Date session reference dates are derived from; defaults to today
        session: Evaluate only this session token instead of every session
            the document declares
        config: Engine settings; defaults to the shared configuration

    Returns:
        One EligibilityReport per (division, session) pair

    Raises:
        InvalidEvaluationCallError: If the document or the candidate is missing
    """
    if exam_document is None:
        raise InvalidEvaluationCallError("An exam document is required")
    if not isinstance(exam_document, dict):
        raise InvalidEvaluationCallError(
            f"Exam document must be a mapping, got {type(exam_document).__name__}"
        )
    profile = _as_profile(candidate)
    config = config or EligEXConfig()
    today = today or date.today()

    exam_name = exam_document.get('exam_name')
    exam_name = str(exam_name) if exam_name else None
    exam_code = exam_document.get('exam_code')
    exam_code = str(exam_code) if exam_code else None

    divisions: List[Tuple[Optional[str], Dict[str, Any]]] = []
    detected = detect_divisions(exam_document, config.get('engine.division_keys', []))
    if detected:
        container_key, names = detected
        for name in names:
            divisions.append((name, get_division_data(exam_document, container_key, name)))
    else:
        divisions.append((None, exam_document))

    checkers = build_checkers()
    reports: List[EligibilityReport] = []
    for division, division_data in divisions:
        if session is not None:
            sessions: List[Tuple[Optional[str], Optional[str]]] = [(session, session.replace('-', ' '))]
        else:
            sessions = [(option.value, option.label) for option in get_exam_sessions(division_data)] or [(None, None)]

        for session_value, session_label in sessions:
            context = EvaluationContext(
                reference_date=get_reference_date(session_value, today),
                session=session_value,
                exam_code=exam_code,
                strict_mode=bool(config.get('engine.strict_mode', False)),
                default_category=config.get('engine.default_category', 'GEN'),
                default_marks_percentage=float(config.get('engine.default_marks_percentage', 33)),
            )
            results = check_full_eligibility(profile, division_data, context, checkers)
            report = EligibilityReport(
                division=division,
                session=session_value,
                session_label=session_label,
                exam_name=exam_name,
                exam_code=exam_code,
                results=results,
            )
            logger.info(
                f"{exam_name or exam_code or 'exam'} division={division} session={session_value}: {report.summary}"
            )
            reports.append(report)

    return reports


def is_eligible_for_exam(reports: List[EligibilityReport]) -> bool:
    """Eligible for the exam overall when at least one report is fully eligible"""
    return any(report.eligible for report in reports)
