"""
Basic usage example for EligEX library.

This example demonstrates:
1. Building a candidate profile from entry-form data
2. Evaluating one exam document (one report per division and session)
3. Sweeping a candidate across several exam documents

No initialization is needed; the engine runs on in-memory documents.
"""

import asyncio
from datetime import date

from eligex import CandidateProfile, evaluate_exam, is_eligible_for_exam
from eligex.jobs import run_sweep


NDA_EXAM = {
    'exam_name': 'National Defence Academy',
    'exam_code': 'NDA',
    'academies': {
        'ARMY': {
            'gender': 'MALE, FEMALE',
            'marital_status': {'MALE': 'UNMARRIED', 'FEMALE': 'UNMARRIED'},
            'age_criteria_type': 'BETWEEN_DOB',
            'between_dob': {
                'NDA-I-2026': '02-01-2007 to 01-01-2010',
                'NDA-II-2026': '02-07-2007 to 01-07-2010',
            },
            'highest_education_qualification': '(12TH) HIGHER SECONDARY',
        },
    },
}

CGL_EXAM = {
    'exam_name': 'Combined Graduate Level',
    'exam_code': 'CGL',
    'age_criteria_type': 'BETWEEN_AGE',
    'between_age': {'2026': '18 - 27'},
    'nationality': 'INDIAN',
}


def main():
    candidate = CandidateProfile.from_form(
        {
            'gender': 'FEMALE',
            'marital_status': 'UNMARRIED',
            'nationality': 'INDIAN',
            'date_of_birth': '2008-03-15',
        },
        {
            '(12TH) HIGHER SECONDARY': {'course': 'SCIENCE', 'subject': 'PCM', 'marks': '82'},
            '(10TH) SECONDARY': {'course': 'CBSE', 'subject': 'ALL SUBJECTS', 'marks': '88'},
        },
    )
    today = date(2026, 1, 15)

    reports = evaluate_exam(NDA_EXAM, candidate, today=today)
    for report in reports:
        print(f"{report.exam_name} | {report.division} | {report.session_label}: {report.summary}")
        for result in report.failed_checks():
            print(f"  {result.field}: {result.reason}")
    print(f"Eligible for at least one entry: {is_eligible_for_exam(reports)}")

    result = asyncio.run(run_sweep(candidate, {'nda': NDA_EXAM, 'cgl': CGL_EXAM}, today=today))
    print(f"Eligible: {[entry.name for entry in result.eligible]}")
    print(f"Not eligible: {[entry.name for entry in result.ineligible]}")


if __name__ == '__main__':
    main()
