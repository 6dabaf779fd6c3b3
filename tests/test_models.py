"""
Tests for EligEX models
"""

import pytest
from pydantic import ValidationError

from eligex.models.eligibility import CandidateProfile, CheckResult, EligibilityReport


def result(field: str, eligible: bool) -> CheckResult:
    return CheckResult(field=field, eligible=eligible, reason='test')


class TestEligibilityReport:
    """Test report aggregation"""

    def test_eligible_is_and_of_results(self):
        """Test that one failed result fails the report"""
        report = EligibilityReport(results=[result('gender', True), result('date_of_birth', False)])
        assert report.eligible is False
        assert report.summary == 'Not Eligible'
        assert [item.field for item in report.failed_checks()] == ['date_of_birth']

    def test_eligible_cannot_be_forced(self):
        """Test that a passed-in verdict is recomputed"""
        report = EligibilityReport(eligible=True, results=[result('gender', False)])
        assert report.eligible is False

    def test_no_results_is_eligible(self):
        """Test an empty report"""
        assert EligibilityReport().eligible is True

    def test_check_result_values_are_display_strings(self):
        """Test list and number formatting of result values"""
        item = CheckResult(field='gender', user_value=None, exam_requirement=['MALE', 'FEMALE'], eligible=True, reason='ok')
        assert item.user_value == ''
        assert item.exam_requirement == 'MALE, FEMALE'


class TestCandidateProfile:
    """Test candidate profiles"""

    def test_extra_fields_are_readable(self):
        """Test get() for declared and extra fields"""
        profile = CandidateProfile(gender='MALE', date_of_birth='15-06-2003')
        assert profile.get('gender') == 'MALE'
        assert profile.get('date_of_birth') == '15-06-2003'
        assert profile.get('height_cm', 'none') == 'none'

    def test_education_records(self):
        """Test validation of education records"""
        profile = CandidateProfile(education_levels={
            'graduation': {'course': 'B.SC', 'marksPercentage': 72},
            'diploma': {},
        })
        assert set(profile.education_levels) == {'graduation'}
        assert profile.education_record('graduation').marks_percentage == '72'

    def test_education_levels_must_be_mapping(self):
        """Test that a malformed education map is rejected"""
        with pytest.raises(ValidationError):
            CandidateProfile(education_levels=['graduation'])

    def test_from_form(self):
        """Test building a profile from entry-form data"""
        profile = CandidateProfile.from_form(
            {'gender': 'FEMALE', 'date_of_birth': '2003-06-15'},
            {
                '(12TH) HIGHER SECONDARY': {'course': 'SCIENCE', 'subject': 'PCM', 'marks': '80', 'completedYear': '2021'},
                'GRADUATION': {'course': '', 'subject': '', 'marks': ''},
            },
        )
        assert profile.date_of_birth == '15-06-2003'
        assert list(profile.education_levels) == ['12th_higher_secondary']
        record = profile.education_record('12th_higher_secondary')
        assert record.marks_percentage == '80'
        assert record.completed_year == '2021'
