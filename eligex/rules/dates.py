"""
Date and age primitives for the DOB criteria.

Dates are written DD-MM-YYYY or DD.MM.YYYY. Parsing never raises: malformed
input returns None and callers decide how lenient to be.
"""

import calendar
import re
from datetime import date
from typing import Any, Optional, Tuple

from eligex.models.eligibility import AgeBreakdown

MIN_YEAR = 1900
MAX_YEAR = 2100

FULL_DATE_PATTERN = re.compile(r'\d{2}-\d{2}-\d{4}')
DOB_RANGE_SPLIT = re.compile(r'\s+to\s+', re.IGNORECASE)
AGE_RANGE_TO = re.compile(r'\s+to\s+', re.IGNORECASE)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse DD-MM-YYYY or DD.MM.YYYY.

    Returns:
        The date, or None for malformed, out-of-range or impossible dates
        (30-02-2000 included)
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    separator = '.' if '.' in text else '-'
    parts = text.split(separator)
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(part) for part in parts)
    except ValueError:
        return None
    if not (1 <= day <= 31 and 1 <= month <= 12 and MIN_YEAR <= year <= MAX_YEAR):
        return None
    if day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def format_date(value: date) -> str:
    """DD-MM-YYYY, zero padded"""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def calculate_age(birth_date: date, reference_date: date) -> AgeBreakdown:
    """
    Calendar age on a reference date.

    Day and month differences borrow from the previous month and year; a
    birth day past the end of that month counts from its last day.
    total_years is a rounded decimal for display; comparisons use years.
    """
    years = reference_date.year - birth_date.year
    months = reference_date.month - birth_date.month
    days = reference_date.day - birth_date.day

    if days < 0:
        months -= 1
        prev_month = reference_date.month - 1 or 12
        prev_year = reference_date.year if reference_date.month > 1 else reference_date.year - 1
        month_length = calendar.monthrange(prev_year, prev_month)[1]
        days = month_length - min(birth_date.day, month_length) + reference_date.day

    if months < 0:
        years -= 1
        months += 12

    total_years = round(years + months / 12 + days / 365, 2)
    return AgeBreakdown(years=years, months=months, days=days, total_years=total_years)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_age(age: AgeBreakdown) -> str:
    """Render an age as "N years, M months"; days only appear under one year"""
    parts = []
    if age.years > 0:
        parts.append(_plural(age.years, 'year'))
    if age.months > 0:
        parts.append(_plural(age.months, 'month'))
    if age.days > 0 and age.years == 0:
        parts.append(_plural(age.days, 'day'))
    return ', '.join(parts) if parts else '0 days'


def _to_number(text: str) -> Optional[float]:
    try:
        return float(text.strip())
    except ValueError:
        return None


def parse_age_range(value: Any) -> Optional[Tuple[float, float]]:
    """
    Parse "min to max", "min - max" or "min-max" age ranges.

    A bare hyphen is only read as a range when the text is not a date and
    both bounds are below 100.
    """
    if value is None:
        return None
    text = str(value).strip()

    if AGE_RANGE_TO.search(text):
        bounds = AGE_RANGE_TO.split(text, maxsplit=1)
    elif ' - ' in text:
        bounds = text.split(' - ', 1)
    elif '-' in text and not FULL_DATE_PATTERN.search(text):
        bounds = text.split('-', 1)
        low, high = _to_number(bounds[0]), _to_number(bounds[1])
        if low is None or high is None or low >= 100 or high >= 100:
            return None
        return low, high
    else:
        return None

    low, high = _to_number(bounds[0]), _to_number(bounds[1])
    if low is None or high is None:
        return None
    return low, high


def parse_dob_range(value: Any) -> Optional[Tuple[date, date]]:
    """Parse "DD-MM-YYYY to DD-MM-YYYY"; both ends must be valid dates"""
    if not isinstance(value, str):
        return None
    bounds = DOB_RANGE_SPLIT.split(value.strip())
    if len(bounds) != 2:
        return None
    start, end = parse_date(bounds[0]), parse_date(bounds[1])
    if start is None or end is None:
        return None
    return start, end


def parse_age(value: Any) -> Optional[float]:
    """Single age bound; accepts numbers and strings like "21" or "21 years" """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = re.match(r'\s*(\d+(?:\.\d+)?)', value)
        if match:
            return float(match.group(1))
    return None
