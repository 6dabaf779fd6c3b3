"""
Tests for date parsing, age arithmetic and range parsing
"""

from datetime import date

import pytest

from eligex.models.eligibility import AgeBreakdown
from eligex.rules.dates import (
    calculate_age,
    format_age,
    format_date,
    parse_age,
    parse_age_range,
    parse_date,
    parse_dob_range,
)


class TestParseDate:
    """Test DD-MM-YYYY parsing"""

    def test_dash_and_dot_separators(self):
        """Test both accepted separators"""
        assert parse_date('15-06-2003') == date(2003, 6, 15)
        assert parse_date('15.06.2003') == date(2003, 6, 15)

    def test_date_objects_pass_through(self):
        """Test that a date is returned unchanged"""
        assert parse_date(date(2003, 6, 15)) == date(2003, 6, 15)

    @pytest.mark.parametrize('value', ['', '2003-06', '15/06/2003', '32-01-2003', '15-13-2003', '15-06-1850', 'aa-bb-cccc', None])
    def test_malformed_dates(self, value):
        """Test that malformed or out-of-range dates are rejected"""
        assert parse_date(value) is None

    def test_impossible_calendar_date(self):
        """Test that days past the end of the month are rejected"""
        assert parse_date('30-02-2000') is None
        assert parse_date('29-02-2000') == date(2000, 2, 29)
        assert parse_date('29-02-2001') is None

    def test_format_date_pads(self):
        """Test zero-padded formatting"""
        assert format_date(date(2003, 1, 2)) == '02-01-2003'


class TestCalculateAge:
    """Test calendar age arithmetic"""

    def test_whole_years(self):
        """Test an age on a birthday"""
        age = calculate_age(date(2003, 8, 1), date(2026, 8, 1))
        assert (age.years, age.months, age.days) == (23, 0, 0)

    def test_day_before_birthday(self):
        """Test that the year is not complete a day early"""
        age = calculate_age(date(2003, 8, 2), date(2026, 8, 1))
        assert age.years == 22
        assert age.months == 11

    def test_borrows_previous_month_length(self):
        """Test day borrowing from the month before the reference date"""
        age = calculate_age(date(2003, 1, 31), date(2026, 3, 1))
        assert (age.years, age.months, age.days) == (23, 1, 1)

    def test_end_to_end_age(self):
        """Test the age used in the end-to-end scenario"""
        assert calculate_age(date(2003, 6, 15), date(2026, 8, 1)).years == 23


class TestFormatAge:
    """Test age display"""

    def test_years_and_months(self):
        """Test plural and singular units"""
        assert format_age(AgeBreakdown(years=23, months=1, days=17, total_years=23.13)) == '23 years, 1 month'

    def test_days_only_under_one_year(self):
        """Test that days appear for infants"""
        assert format_age(AgeBreakdown(years=0, months=2, days=3, total_years=0.17)) == '2 months, 3 days'

    def test_zero(self):
        """Test an all-zero age"""
        assert format_age(AgeBreakdown(years=0, months=0, days=0, total_years=0)) == '0 days'


class TestRanges:
    """Test age and DOB range parsing"""

    @pytest.mark.parametrize('value', ['19 to 25', '19 TO 25', '19 - 25', '19-25'])
    def test_age_range_forms(self, value):
        """Test every accepted age range form"""
        assert parse_age_range(value) == (19.0, 25.0)

    def test_date_is_not_an_age_range(self):
        """Test that a date with hyphens is not read as an age range"""
        assert parse_age_range('02-01-2008') is None

    def test_large_hyphen_bounds_are_rejected(self):
        """Test that a bare hyphen with bounds over 100 is not an age range"""
        assert parse_age_range('2003-2008') is None

    def test_unparseable_age_range(self):
        """Test text without two numbers"""
        assert parse_age_range('twenty to thirty') is None
        assert parse_age_range(None) is None

    def test_dob_range(self):
        """Test DOB range parsing"""
        assert parse_dob_range('02-01-2003 to 01-01-2008') == (date(2003, 1, 2), date(2008, 1, 1))

    def test_malformed_dob_range(self):
        """Test DOB ranges with a missing or invalid end"""
        assert parse_dob_range('02-01-2003') is None
        assert parse_dob_range('02-01-2003 to 31-02-2008') is None

    def test_parse_age(self):
        """Test single age bounds"""
        assert parse_age(21) == 21.0
        assert parse_age('21 years') == 21.0
        assert parse_age('about') is None
