"""
Tests for the simple field checkers
"""

from datetime import date

import pytest

from eligex.checkers.base import EvaluationContext
from eligex.checkers.caste_category import check_caste_category
from eligex.checkers.gender import check_gender
from eligex.checkers.marital_status import check_marital_status
from eligex.checkers.nationality import DomicileChecker, check_domicile, check_nationality
from eligex.checkers.pwd_status import check_pwd_status
from eligex.checkers.scalar import (
    ScalarFieldChecker,
    check_active_backlogs_allowed,
    check_cpl_holder,
    check_driving_license_type,
    check_ex_servicemen_status,
    check_height_cm,
    check_language_proficiency,
    check_vision_eyesight,
    check_work_experience_years,
    parse_numeric_requirement,
)
from eligex.models.eligibility import CandidateProfile
from eligex.reference import ALL_MARITAL_STATUSES, marital_status_options


class TestSentinelPermissiveness:
    """Test that sentinel requirements pass any candidate value"""

    @pytest.mark.parametrize('requirement', ['', 'ALL APPLICABLE', 'NOT APPLICABLE'])
    @pytest.mark.parametrize('check', [check_gender, check_caste_category, check_nationality])
    def test_flat_list_fields(self, check, requirement):
        """Test gender, category and nationality sentinels"""
        assert check('ANYTHING', requirement).eligible
        assert check(None, requirement).eligible

    @pytest.mark.parametrize('requirement', ['', 'ALL APPLICABLE', 'NOT APPLICABLE', {}])
    def test_marital_status(self, requirement):
        """Test marital status sentinels"""
        assert check_marital_status('MARRIED', requirement, 'MALE').eligible


class TestGender:
    """Test check_gender"""

    def test_member_of_list(self):
        """Test an allowed gender"""
        result = check_gender('female', 'MALE, FEMALE')
        assert result.eligible
        assert result.field == 'gender'

    def test_not_in_list(self):
        """Test a gender outside the list"""
        result = check_gender('TRANSGENDER', 'MALE, FEMALE')
        assert not result.eligible
        assert result.reason == 'Gender TRANSGENDER is not eligible. Allowed: MALE, FEMALE'

    def test_missing_candidate_value(self):
        """Test that a missing gender is ineligible"""
        result = check_gender('', 'MALE')
        assert not result.eligible
        assert result.reason == 'User gender not specified'


class TestMaritalStatus:
    """Test check_marital_status"""

    def test_missing_branch_is_ineligible(self):
        """Test that a gender with no branch fails whatever the status"""
        requirement = {'MALE': 'UNMARRIED'}
        for status in ('UNMARRIED', 'MARRIED', '', None):
            result = check_marital_status(status, requirement, 'FEMALE')
            assert not result.eligible
            assert result.reason == 'No marital status rules defined for gender: FEMALE'

    def test_branch_membership(self):
        """Test the candidate's branch"""
        requirement = {'MALE': 'UNMARRIED', 'FEMALE': 'UNMARRIED, DIVORCED, WIDOWED'}
        assert check_marital_status('DIVORCED', requirement, 'FEMALE').eligible
        assert not check_marital_status('DIVORCED', requirement, 'MALE').eligible

    def test_gender_required_for_keyed_requirement(self):
        """Test that a keyed requirement needs the candidate's gender"""
        result = check_marital_status('UNMARRIED', {'MALE': 'UNMARRIED'}, None)
        assert not result.eligible
        assert result.reason == 'Gender not specified (required for marital status check)'

    def test_empty_branch_is_ineligible(self):
        """Test that a gender branch with no values accepts no status"""
        result = check_marital_status('MARRIED', {'MALE': '', 'FEMALE': 'UNMARRIED'}, 'MALE')
        assert result.eligible is False
        assert result.reason == 'No marital status rules defined for gender: MALE'

    def test_flat_list(self):
        """Test a requirement that is not keyed by gender"""
        assert check_marital_status('UNMARRIED', 'UNMARRIED, DIVORCED', 'MALE').eligible
        assert not check_marital_status('MARRIED', 'UNMARRIED, DIVORCED', 'MALE').eligible


class TestPwdStatus:
    """Test check_pwd_status"""

    def test_not_applicable_excludes_pwd_candidates(self):
        """Test the PWD asymmetry"""
        assert not check_pwd_status('YES', 'NOT APPLICABLE').eligible
        assert check_pwd_status('NO', 'NOT APPLICABLE').eligible

    def test_not_applicable_needs_a_status(self):
        """Test that a missing status fails a NOT APPLICABLE requirement"""
        result = check_pwd_status(None, 'NOT APPLICABLE')
        assert not result.eligible
        assert result.reason == 'PWD status not specified'

    @pytest.mark.parametrize('requirement', ['', 'ALL APPLICABLE', 'APPLICABLE', {'GEN': '40%'}])
    @pytest.mark.parametrize('user_pwd', ['YES', 'NO', None])
    def test_permissive_requirements(self, requirement, user_pwd):
        """Test requirements that admit everyone"""
        assert check_pwd_status(user_pwd, requirement).eligible


class TestCasteCategory:
    """Test check_caste_category"""

    def test_short_code_and_full_name(self):
        """Test that either category form matches"""
        assert check_caste_category('SC', 'GEN, OBC, SC').eligible
        assert check_caste_category('SC (SCHEDULED CASTE)', 'GEN, OBC, SC').eligible

    def test_not_allowed(self):
        """Test a category outside the list"""
        assert not check_caste_category('ST', 'GEN, OBC').eligible

    def test_missing(self):
        """Test a missing category"""
        assert not check_caste_category('', 'GEN').eligible


class TestNationalityAndDomicile:
    """Test nationality and domicile checks"""

    def test_nationality_membership(self):
        """Test an allowed nationality"""
        assert check_nationality('indian', 'INDIAN, CITIZEN OF NEPAL').eligible
        assert not check_nationality('CITIZEN OF BHUTAN', 'INDIAN').eligible

    def test_nationality_missing(self):
        """Test a missing nationality"""
        result = check_nationality(None, 'INDIAN')
        assert not result.eligible
        assert result.reason == 'Please specify your nationality'

    def test_domicile_list(self):
        """Test a list of states"""
        assert check_domicile('KERALA', 'KERALA, TAMIL NADU').eligible
        assert not check_domicile('GOA', 'KERALA, TAMIL NADU').eligible

    def test_domicile_single_state(self):
        """Test a single-state requirement"""
        result = check_domicile('GOA', 'KERALA')
        assert not result.eligible
        assert result.reason == 'This exam is only for candidates from KERALA'

    def test_domicile_all_india(self):
        """Test all-India keywords"""
        assert check_domicile('GOA', 'ALL INDIA').eligible
        assert check_domicile(None, '').eligible

    def test_domicile_missing_value(self):
        """Test a missing domicile"""
        result = check_domicile('', 'KERALA')
        assert not result.eligible
        assert result.reason == 'Please specify your domicile state/UT'

    def test_domicile_only_for_indian_nationals(self):
        """Test the nationality precondition of the domicile checker"""
        checker = DomicileChecker()
        exam = {'domicile': 'KERALA'}
        assert checker.can_check(exam, CandidateProfile(nationality='INDIAN'))
        assert not checker.can_check(exam, CandidateProfile(nationality='CITIZEN OF NEPAL'))


class TestScalarFields:
    """Test the simple scalar field checks"""

    def test_parse_numeric_requirement(self):
        """Test minimums and inclusive ranges"""
        assert parse_numeric_requirement('157') == (157.0, None)
        assert parse_numeric_requirement('157-170') == (157.0, 170.0)
        assert parse_numeric_requirement('157 cm to 170 cm') == (157.0, 170.0)
        assert parse_numeric_requirement('tall') is None

    def test_height_minimum(self):
        """Test a minimum height"""
        assert check_height_cm(170, '157').eligible
        assert not check_height_cm('150', '157').eligible

    def test_height_range_is_inclusive(self):
        """Test both ends of a height range"""
        assert check_height_cm(157, '157 to 170').eligible
        assert check_height_cm(170, '157 to 170').eligible
        assert not check_height_cm(171, '157 to 170').eligible

    def test_missing_height(self):
        """Test a missing candidate height"""
        assert not check_height_cm(None, '157').eligible

    def test_experience_sentinels(self):
        """Test experience requirements that impose nothing"""
        assert check_work_experience_years(None, 'NOT REQUIRED').eligible
        assert check_work_experience_years(None, '0').eligible

    def test_driving_license_aliases(self):
        """Test that licence aliases match"""
        assert check_driving_license_type('HTV', 'HMV').eligible
        assert check_driving_license_type('LIGHT MOTOR VEHICLE', 'LMV, MCWG').eligible
        assert not check_driving_license_type('MCWOG', 'HMV').eligible

    def test_vision_substring(self):
        """Test substring matching of list fields"""
        assert check_vision_eyesight('6/6', '6/6, 6/9').eligible

    def test_language_any_known(self):
        """Test that any one known language is enough"""
        assert check_language_proficiency('Hindi, English', 'ENGLISH').eligible
        assert not check_language_proficiency('Tamil', 'HINDI, ENGLISH').eligible

    def test_ex_servicemen(self):
        """Test ex-servicemen only and excluded requirements"""
        assert check_ex_servicemen_status('YES', 'ONLY').eligible
        assert not check_ex_servicemen_status('NO', 'YES').eligible
        assert not check_ex_servicemen_status('YES', 'NOT ALLOWED').eligible
        assert check_ex_servicemen_status(None, 'ALL APPLICABLE').eligible

    def test_cpl_holder(self):
        """Test a required commercial pilot licence"""
        assert check_cpl_holder('YES', 'REQUIRED').eligible
        assert not check_cpl_holder('NO', 'REQUIRED').eligible

    def test_backlogs(self):
        """Test backlog allowances"""
        assert check_active_backlogs_allowed(0, 'NO').eligible
        assert not check_active_backlogs_allowed(2, 'NO').eligible
        assert check_active_backlogs_allowed(1, '2').eligible
        assert not check_active_backlogs_allowed(3, 2).eligible

    def test_scalar_checker_reads_candidate_field(self):
        """Test that the bound checker reads the mapped candidate field"""
        checker = ScalarFieldChecker('active_backlogs_allowed')
        candidate = CandidateProfile(active_backlogs=3)
        context = EvaluationContext(reference_date=date(2026, 8, 1))
        assert not checker.check(candidate, {'active_backlogs_allowed': '2'}, context)[0].eligible

    def test_unparseable_numeric_requirement(self):
        """Test lenient and strict handling of a height with no number"""
        lenient = check_height_cm(150, 'TALL')
        assert lenient.eligible
        assert lenient.reason == 'Unable to compare height'

        strict = check_height_cm(150, 'TALL', strict_mode=True)
        assert strict.eligible is False
        assert strict.reason == 'Unable to compare height: TALL'

    def test_scalar_checker_passes_strict_mode(self):
        """Test that the bound checker honours strict mode from the context"""
        candidate = CandidateProfile(gap_years=1)
        exam = {'gap_years_allowed': 'SOMETIMES'}
        checker = ScalarFieldChecker('gap_years_allowed')
        assert checker.check(candidate, exam, EvaluationContext(reference_date=date(2026, 8, 1)))[0].eligible
        strict = EvaluationContext(reference_date=date(2026, 8, 1), strict_mode=True)
        assert not checker.check(candidate, exam, strict)[0].eligible

    def test_unknown_scalar_field(self):
        """Test that only registered fields can be bound"""
        with pytest.raises(ValueError, match="No scalar check registered"):
            ScalarFieldChecker('shoe_size')


class TestReferenceData:
    """Test the reference lists used by entry forms"""

    def test_marital_status_options_by_gender(self):
        """Test gender-specific marital status options"""
        assert 'WIDOWER' in marital_status_options('male')
        assert 'WIDOW' in marital_status_options('FEMALE')
        assert marital_status_options('') == ALL_MARITAL_STATUSES
