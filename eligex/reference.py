"""
Static reference data the checkers compare against.

Lists of states, nationalities and categories in the forms exam documents
and entry forms use.
"""

from typing import Dict, List

INDIAN_STATES: List[str] = [
    'ANDHRA PRADESH',
    'ARUNACHAL PRADESH',
    'ASSAM',
    'BIHAR',
    'CHHATTISGARH',
    'GOA',
    'GUJARAT',
    'HARYANA',
    'HIMACHAL PRADESH',
    'JHARKHAND',
    'KARNATAKA',
    'KERALA',
    'MADHYA PRADESH',
    'MAHARASHTRA',
    'MANIPUR',
    'MEGHALAYA',
    'MIZORAM',
    'NAGALAND',
    'ODISHA',
    'PUNJAB',
    'RAJASTHAN',
    'SIKKIM',
    'TAMIL NADU',
    'TELANGANA',
    'TRIPURA',
    'UTTAR PRADESH',
    'UTTARAKHAND',
    'WEST BENGAL',
]

UNION_TERRITORIES: List[str] = [
    'ANDAMAN AND NICOBAR ISLANDS',
    'CHANDIGARH',
    'DADRA AND NAGAR HAVELI AND DAMAN AND DIU',
    'DELHI',
    'JAMMU AND KASHMIR',
    'LADAKH',
    'LAKSHADWEEP',
    'PUDUCHERRY',
]

ALL_DOMICILES: List[str] = INDIAN_STATES + UNION_TERRITORIES

# Domicile requirements that open an exam to every state and UT
ALL_DOMICILES_KEYWORDS = frozenset({
    '',
    'ALL APPLICABLE',
    'NOT APPLICABLE',
    'ALL INDIA',
    'ALL STATES',
    'ALL INDIAN STATES',
    'PAN INDIA',
    'ANY',
    'NATIONWIDE',
})

PIO_PREFIX = 'PERSON OF INDIAN ORIGIN (PIO)'

STANDARD_NATIONALITIES: List[str] = [
    'INDIAN',
    'CITIZEN OF NEPAL',
    'CITIZEN OF BHUTAN',
    'TIBETAN REFUGEE (PRE-1962)',
    f'{PIO_PREFIX} FROM PAKISTAN',
    f'{PIO_PREFIX} FROM BURMA/MYANMAR',
    f'{PIO_PREFIX} FROM SRI LANKA',
    f'{PIO_PREFIX} FROM KENYA',
    f'{PIO_PREFIX} FROM UGANDA',
    f'{PIO_PREFIX} FROM TANZANIA',
    f'{PIO_PREFIX} FROM ZAMBIA',
    f'{PIO_PREFIX} FROM MALAWI',
    f'{PIO_PREFIX} FROM ZAIRE',
    f'{PIO_PREFIX} FROM ETHIOPIA',
    f'{PIO_PREFIX} FROM VIETNAM',
    'OCI (OVERSEAS CITIZEN OF INDIA)',
    'FOREIGN NATIONALS WITH INDIAN DEGREE',
    'FOREIGN NATIONALS WITH INDIAN ORIGIN',
]

NATIONALITY_SHORT_FORMS: Dict[str, str] = {
    'OCI': 'OCI (OVERSEAS CITIZEN OF INDIA)',
    'PIO': PIO_PREFIX,
    'TIBETAN REFUGEE': 'TIBETAN REFUGEE (PRE-1962)',
}

CATEGORY_FULL_NAMES: Dict[str, str] = {
    'GEN': 'GENERAL (UR/UNRESERVED)',
    'GENERAL': 'GENERAL (UR/UNRESERVED)',
    'UR': 'GENERAL (UR/UNRESERVED)',
    'UNRESERVED': 'GENERAL (UR/UNRESERVED)',
    'SC': 'SC (SCHEDULED CASTE)',
    'SCHEDULED CASTE': 'SC (SCHEDULED CASTE)',
    'ST': 'ST (SCHEDULED TRIBE)',
    'SCHEDULED TRIBE': 'ST (SCHEDULED TRIBE)',
    'OBC': 'OBC (OTHER BACKWARD CLASS)',
    'OBC-NCL': 'OBC (OTHER BACKWARD CLASS)',
    'EWS': 'EWS (ECONOMICALLY WEAKER SECTION)',
    'MINORITY': 'MINORITY',
}

STANDARD_CATEGORIES: List[str] = [
    'GENERAL (UR/UNRESERVED)',
    'SC (SCHEDULED CASTE)',
    'ST (SCHEDULED TRIBE)',
    'OBC (OTHER BACKWARD CLASS)',
    'EWS (ECONOMICALLY WEAKER SECTION)',
    'MINORITY',
]

# Marks tables are keyed by short code; map full names back
CATEGORY_MARKS_KEYS: Dict[str, str] = {
    'GENERAL (UR/UNRESERVED)': 'GEN',
    'GENERAL': 'GEN',
    'UR': 'GEN',
    'UNRESERVED': 'GEN',
    'SC (SCHEDULED CASTE)': 'SC',
    'ST (SCHEDULED TRIBE)': 'ST',
    'OBC (OTHER BACKWARD CLASS)': 'OBC',
    'OBC-NCL': 'OBC',
    'EWS (ECONOMICALLY WEAKER SECTION)': 'EWS',
}

MARITAL_STATUS_OPTIONS: Dict[str, List[str]] = {
    'MALE': ['UNMARRIED', 'MARRIED', 'SEPARATED', 'DIVORCED', 'WIDOWER'],
    'FEMALE': ['UNMARRIED', 'MARRIED', 'SEPARATED', 'DIVORCEE', 'WIDOW'],
}
ALL_MARITAL_STATUSES: List[str] = [
    'UNMARRIED', 'MARRIED', 'SEPARATED', 'DIVORCED', 'DIVORCEE', 'WIDOWER', 'WIDOW',
]


def marital_status_options(gender: str) -> List[str]:
    """Marital statuses offered for a gender; other genders get every status"""
    return MARITAL_STATUS_OPTIONS.get((gender or '').strip().upper(), ALL_MARITAL_STATUSES)
