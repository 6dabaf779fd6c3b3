"""
Tests for the division x session fan-out
"""

from datetime import date

import pytest

from eligex.config.eligex_config import EligEXConfig
from eligex.exceptions import InvalidEvaluationCallError
from eligex.models.eligibility import CandidateProfile
from eligex.orchestrator import (
    build_checkers,
    detect_divisions,
    evaluate_exam,
    get_division_data,
    is_eligible_for_exam,
)


DIVISION_KEYS = ['academies', 'posts', 'divisions', 'departments', 'branches', 'courses', 'classes']

NDA_EXAM = {
    'exam_name': 'National Defence Academy',
    'exam_code': 'NDA',
    'posts_classes_courses_departments_academies': 'NAVAL ACADEMY, ARMY',
    'academies': {
        'ARMY': {
            'gender': 'MALE, FEMALE',
            'marital_status': {'MALE': 'UNMARRIED', 'FEMALE': 'UNMARRIED'},
            'age_criteria_type': 'BETWEEN_DOB',
            'between_dob': {
                'NDA-I-2026': '02-01-2007 to 01-01-2010',
                'NDA-II-2026': '02-07-2007 to 01-07-2010',
            },
        },
        'NAVAL ACADEMY': {
            'gender': 'MALE',
            'age_criteria_type': 'BETWEEN_DOB',
            'between_dob': '02-01-2007 to 01-01-2010',
        },
    },
}


class TestDivisions:
    """Test division detection"""

    def test_detects_container_with_hint_order(self):
        """Test that the division-name field orders the divisions"""
        assert detect_divisions(NDA_EXAM, DIVISION_KEYS) == ('academies', ['NAVAL ACADEMY', 'ARMY'])

    def test_container_order_without_hint(self):
        """Test container order when the document has no division names"""
        exam = {'posts': {'CLERK': {'gender': 'MALE'}, 'OFFICER': {'gender': 'FEMALE'}}}
        assert detect_divisions(exam, DIVISION_KEYS) == ('posts', ['CLERK', 'OFFICER'])

    def test_no_divisions(self):
        """Test documents without a division container"""
        assert detect_divisions({'gender': 'MALE'}, DIVISION_KEYS) is None
        assert detect_divisions({'posts': {}}, DIVISION_KEYS) is None

    def test_get_division_data(self):
        """Test division document lookup"""
        assert get_division_data(NDA_EXAM, 'academies', 'NAVAL ACADEMY')['gender'] == 'MALE'
        assert get_division_data(NDA_EXAM, 'academies', 'AIR FORCE') is None


class TestEvaluateExam:
    """Test evaluate_exam"""

    def setup_method(self):
        """Set up test environment"""
        EligEXConfig.reset()
        self.today = date(2026, 1, 15)

    def teardown_method(self):
        """Clean up test environment"""
        EligEXConfig.reset()

    def test_end_to_end_scenario(self):
        """Test gender and a session-keyed age range on one document"""
        exam = {
            'gender': 'MALE, FEMALE',
            'age_criteria_type': 'BETWEEN_AGE',
            'between_age': {'2026': '19 - 25'},
        }
        candidate = {'gender': 'FEMALE', 'date_of_birth': '15-06-2003'}

        reports = evaluate_exam(exam, candidate, today=self.today, session='2026')

        assert len(reports) == 1
        report = reports[0]
        assert [result.field for result in report.results] == ['gender', 'date_of_birth']
        assert all(result.eligible for result in report.results)
        assert report.eligible is True
        assert 'Age: 23 years' in report.results[1].user_value

    def test_one_report_per_division_and_session(self):
        """Test the division x session fan-out"""
        candidate = CandidateProfile(gender='FEMALE', marital_status='UNMARRIED', date_of_birth='15-03-2008')
        reports = evaluate_exam(NDA_EXAM, candidate, today=self.today)

        assert [(report.division, report.session) for report in reports] == [
            ('NAVAL ACADEMY', None),
            ('ARMY', 'NDA-I-2026'),
            ('ARMY', 'NDA-II-2026'),
        ]
        assert reports[0].eligible is False
        assert reports[1].eligible is True
        assert reports[2].eligible is True
        assert reports[1].session_label == 'NDA I 2026'
        assert reports[1].exam_code == 'NDA'
        assert is_eligible_for_exam(reports)

    def test_session_changes_verdict(self):
        """Test that each session uses its own cutoff"""
        candidate = CandidateProfile(gender='MALE', marital_status='UNMARRIED', date_of_birth='15-03-2007')
        reports = evaluate_exam(NDA_EXAM, candidate, today=self.today)
        army = {report.session: report.eligible for report in reports if report.division == 'ARMY'}
        assert army == {'NDA-I-2026': True, 'NDA-II-2026': False}

    def test_absent_fields_are_skipped(self):
        """Test that checkers without a document field do not run"""
        reports = evaluate_exam({'gender': 'MALE'}, {'gender': 'MALE'}, today=self.today)
        assert [result.field for result in reports[0].results] == ['gender']

    def test_empty_document_is_eligible(self):
        """Test a document with no requirements"""
        reports = evaluate_exam({}, {}, today=self.today)
        assert len(reports) == 1
        assert reports[0].eligible
        assert reports[0].results == []

    def test_determinism(self):
        """Test that repeated evaluation gives identical reports"""
        candidate = CandidateProfile(gender='MALE', marital_status='UNMARRIED', date_of_birth='15-03-2007')
        first = evaluate_exam(NDA_EXAM, candidate, today=self.today)
        second = evaluate_exam(NDA_EXAM, candidate, today=self.today)
        assert [report.model_dump() for report in first] == [report.model_dump() for report in second]

    def test_missing_document_raises(self):
        """Test that a missing exam document is an invalid call"""
        with pytest.raises(InvalidEvaluationCallError, match="exam document is required"):
            evaluate_exam(None, {'gender': 'MALE'})

    def test_non_mapping_document_raises(self):
        """Test that a non-mapping document is an invalid call"""
        with pytest.raises(InvalidEvaluationCallError):
            evaluate_exam(['gender'], {'gender': 'MALE'})

    def test_missing_candidate_raises(self):
        """Test that a missing candidate is an invalid call"""
        with pytest.raises(InvalidEvaluationCallError, match="candidate profile is required"):
            evaluate_exam({'gender': 'MALE'}, None)

    def test_strict_mode_from_config(self):
        """Test that engine.strict_mode reaches the checkers"""
        exam = {'age_criteria_type': 'BETWEEN_DOB', 'between_dob': 'soon'}
        candidate = {'date_of_birth': '15-06-2003'}
        assert evaluate_exam(exam, candidate, today=self.today)[0].eligible

        config = EligEXConfig.setup(engine={'strict_mode': True})
        assert not evaluate_exam(exam, candidate, today=self.today, config=config)[0].eligible

    def test_strict_mode_reaches_scalar_checks(self):
        """Test that engine.strict_mode fails an unparseable height requirement"""
        exam = {'height_cm': 'TALL'}
        candidate = {'height_cm': '150'}
        assert evaluate_exam(exam, candidate, today=self.today)[0].eligible

        config = EligEXConfig.setup(engine={'strict_mode': True})
        report = evaluate_exam(exam, candidate, today=self.today, config=config)[0]
        assert report.eligible is False
        assert report.results[0].reason == 'Unable to compare height: TALL'


class TestBuildCheckers:
    """Test checker registration"""

    def test_order_and_coverage(self):
        """Test that every field checker is registered once"""
        fields = [checker.field_name for checker in build_checkers()]
        assert fields[:3] == ['gender', 'marital_status', 'pwd_status']
        assert 'education_levels' in fields
        assert 'ncc_certificate_grade' in fields
        assert 'height_cm' in fields
        assert len(fields) == len(set(fields))
