"""
EligEX Checkers

One checker per exam document field. Each exposes a plain check_* function
(candidate value, requirement value) and a BaseChecker subclass the
orchestrator runs when the field is present in a division document.
"""

from .base import BaseChecker, EvaluationContext, make_result
from .gender import GenderChecker, check_gender
from .marital_status import MaritalStatusChecker, check_marital_status
from .pwd_status import PwdStatusChecker, check_pwd_status, is_pwd
from .caste_category import CasteCategoryChecker, check_caste_category
from .nationality import DomicileChecker, NationalityChecker, check_domicile, check_nationality
from .date_of_birth import DateOfBirthChecker, check_date_of_birth
from .ncc import (
    NccCertificateChecker,
    NccCertificateGradeChecker,
    NccWingChecker,
    check_ncc_certificate,
    check_ncc_certificate_grade,
    check_ncc_wing,
)
from .scalar import SCALAR_CHECKS, ScalarFieldChecker

__all__ = [
    'BaseChecker',
    'EvaluationContext',
    'make_result',
    'GenderChecker',
    'check_gender',
    'MaritalStatusChecker',
    'check_marital_status',
    'PwdStatusChecker',
    'check_pwd_status',
    'is_pwd',
    'CasteCategoryChecker',
    'check_caste_category',
    'NationalityChecker',
    'DomicileChecker',
    'check_nationality',
    'check_domicile',
    'DateOfBirthChecker',
    'check_date_of_birth',
    'NccWingChecker',
    'NccCertificateChecker',
    'NccCertificateGradeChecker',
    'check_ncc_wing',
    'check_ncc_certificate',
    'check_ncc_certificate_grade',
    'SCALAR_CHECKS',
    'ScalarFieldChecker',
]
