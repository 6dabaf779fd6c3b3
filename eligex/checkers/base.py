from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from eligex.models.eligibility import CandidateProfile, CheckResult
from eligex.rules.normalize import display

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """Per-evaluation inputs shared by all checkers"""
    reference_date: date
    session: Optional[str] = None
    exam_code: Optional[str] = None
    strict_mode: bool = False
    default_category: str = 'GEN'
    default_marks_percentage: float = 33.0


def make_result(field: str, eligible: bool, reason: str, user_value: Any = '', exam_requirement: Any = '') -> CheckResult:
    """Build a CheckResult with display-formatted values"""
    return CheckResult(
        field=field,
        user_value=display(user_value),
        exam_requirement=display(exam_requirement),
        eligible=eligible,
        reason=reason,
    )


def unparseable_result(
    field: str,
    reason: str,
    user_value: Any = '',
    exam_requirement: Any = '',
    strict_mode: bool = False,
) -> CheckResult:
    """
    Result for exam data that could not be parsed.

    Lenient by default: the check passes and a warning is logged. In strict
    mode the check fails and the reason names the malformed value.
    """
    logger.warning(f"Malformed exam data for {field}: {exam_requirement!r} ({reason})")
    if strict_mode:
        return make_result(
            field, False, f"{reason}: {display(exam_requirement)}", user_value, exam_requirement
        )
    return make_result(field, True, reason, user_value, exam_requirement)


class BaseChecker(ABC):
    """Base class for EligEX field checkers"""

    #: Exam document field this checker reads
    field_name: str = ''

    def can_check(self, exam_data: Dict[str, Any], candidate: CandidateProfile) -> bool:
        """Check whether this checker applies to the given document

        Args:
            exam_data: Division-level requirement document
            candidate: Candidate profile

        Returns:
            True when the document carries this checker's field
        """
        return self.field_name in exam_data

    @abstractmethod
    def check(
        self,
        candidate: CandidateProfile,
        exam_data: Dict[str, Any],
        context: EvaluationContext,
    ) -> List[CheckResult]:
        """Evaluate the candidate against the document

        Args:
            candidate: Candidate profile
            exam_data: Division-level requirement document
            context: Session, reference date and engine settings

        Returns:
            One or more CheckResults
        """
        pass
