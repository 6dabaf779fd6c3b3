"""
Tests for the NCC wing, certificate and grade chain
"""

from datetime import date

from eligex.checkers.base import EvaluationContext
from eligex.checkers.ncc import (
    NccCertificateGradeChecker,
    certificate_keys_match,
    check_ncc_certificate,
    check_ncc_certificate_grade,
    check_ncc_wing,
)
from eligex.models.eligibility import CandidateProfile


class TestNccWing:
    """Test check_ncc_wing"""

    def test_wing_in_list(self):
        """Test an accepted wing"""
        assert check_ncc_wing('Army', 'ARMY, NAVY').eligible

    def test_wing_not_in_list(self):
        """Test a wing outside the list"""
        result = check_ncc_wing('AIR FORCE', 'ARMY, NAVY')
        assert not result.eligible
        assert result.reason == 'NCC Wing AIR FORCE not in allowed list: ARMY, NAVY'

    def test_not_required(self):
        """Test NCC sentinels"""
        assert check_ncc_wing(None, 'NOT REQUIRED').eligible
        assert check_ncc_wing(None, '').eligible

    def test_missing_wing(self):
        """Test a missing wing against a real requirement"""
        assert not check_ncc_wing('', 'ARMY').eligible


class TestNccCertificate:
    """Test check_ncc_certificate"""

    def test_keyed_by_wing(self):
        """Test that the candidate's wing picks the branch"""
        requirement = {'ARMY': 'C', 'AIRFORCE': 'B, C'}
        assert check_ncc_certificate('B', requirement, 'AIR FORCE').eligible
        assert not check_ncc_certificate('B', requirement, 'ARMY').eligible

    def test_wing_without_branch(self):
        """Test a wing the requirement does not list"""
        result = check_ncc_certificate('C', {'ARMY': 'C'}, 'NAVY')
        assert not result.eligible
        assert result.reason == 'No NCC certificate rules found for NCC wing NAVY'

    def test_wing_missing(self):
        """Test a keyed requirement without the candidate's wing"""
        assert not check_ncc_certificate('C', {'ARMY': 'C'}, None).eligible

    def test_all_certificates_needs_one(self):
        """Test that ALL CERTIFICATES still needs a held certificate"""
        assert check_ncc_certificate('B', 'ALL CERTIFICATES', 'ARMY').eligible
        assert not check_ncc_certificate('NONE', 'ALL CERTIFICATES', 'ARMY').eligible

    def test_permissive_sentinels(self):
        """Test ALL APPLICABLE and ANY"""
        assert check_ncc_certificate(None, 'ALL APPLICABLE', None).eligible
        assert check_ncc_certificate(None, 'ANY', None).eligible

    def test_flat_list(self):
        """Test a certificate list not keyed by wing"""
        assert check_ncc_certificate('C CERTIFICATE', 'B, C', 'ARMY').eligible


class TestNccGrade:
    """Test check_ncc_certificate_grade"""

    def test_certificate_keys_match_loosely(self):
        """Test abbreviated certificate keys"""
        assert certificate_keys_match('C', 'C CERTIFICATE')
        assert certificate_keys_match('C-Certificate', 'C CERTIFICATE')
        assert not certificate_keys_match('B', 'C CERTIFICATE')

    def test_keyed_by_certificate(self):
        """Test that the candidate's certificate picks the grade branch"""
        requirement = {'C CERTIFICATE': 'A, B', 'B CERTIFICATE': 'A'}
        assert check_ncc_certificate_grade('B', requirement, 'C').eligible
        assert not check_ncc_certificate_grade('B', requirement, 'B').eligible

    def test_empty_branch_accepts_nothing(self):
        """Test a certificate branch with no grades"""
        result = check_ncc_certificate_grade('A', {'C CERTIFICATE': ''}, 'C')
        assert not result.eligible

    def test_checker_uses_candidate_certificate(self):
        """Test the grade checker reads the certificate from the profile"""
        candidate = CandidateProfile(ncc_certificate='C', ncc_certificate_grade='A')
        context = EvaluationContext(reference_date=date(2026, 8, 1))
        results = NccCertificateGradeChecker().check(
            candidate, {'ncc_certificate_grade': {'C CERTIFICATE': 'A, B'}}, context
        )
        assert len(results) == 1
        assert results[0].eligible
