"""
Education level hierarchy.

Qualification names, their ranks and the level keys education records are
stored under.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from eligex.rules.normalize import normalize_text

POST_DOCTORATE = 'post_doctorate'
PHD = 'phd'
POST_GRADUATION = 'post_graduation'
GRADUATION = 'graduation'
DIPLOMA = 'diploma'
HIGHER_SECONDARY = '12th_higher_secondary'
SECONDARY = '10th_secondary'
BELOW_SECONDARY = 'below_10th'
NO_EDUCATION = 'no_education'


@dataclass(frozen=True)
class EducationLevel:
    """One rank in the qualification order"""
    key: str
    name: str
    rank: int


# Highest first
EDUCATION_LEVELS: List[EducationLevel] = [
    EducationLevel(POST_DOCTORATE, 'POST DOCTORATE', 8),
    EducationLevel(PHD, 'PHD', 7),
    EducationLevel(POST_GRADUATION, 'POST GRADUATION', 6),
    EducationLevel(GRADUATION, 'GRADUATION', 5),
    EducationLevel(DIPLOMA, 'DIPLOMA / ITI (POLYTECHNIC, ITI, DPHARM, PGDCA)', 4),
    EducationLevel(HIGHER_SECONDARY, '(12TH) HIGHER SECONDARY', 3),
    EducationLevel(SECONDARY, '(10TH) SECONDARY', 2),
    EducationLevel(BELOW_SECONDARY, 'BELOW 10TH', 1),
    EducationLevel(NO_EDUCATION, 'NO EDUCATION', 0),
]

LEVELS_BY_KEY: Dict[str, EducationLevel] = {level.key: level for level in EDUCATION_LEVELS}

# Every spelling documents and forms use for a level
LEVEL_ALIASES: Dict[str, str] = {
    'POST DOCTORATE': POST_DOCTORATE,
    'PHD': PHD,
    'POST GRADUATION': POST_GRADUATION,
    'GRADUATION': GRADUATION,
    'DIPLOMA / ITI (POLYTECHNIC, ITI, DPHARM, PGDCA)': DIPLOMA,
    'DIPLOMA': DIPLOMA,
    '(12TH) HIGHER SECONDARY': HIGHER_SECONDARY,
    '(12TH)HIGHER SECONDARY': HIGHER_SECONDARY,
    '12TH': HIGHER_SECONDARY,
    '12TH HIGHER SECONDARY': HIGHER_SECONDARY,
    'HIGHER SECONDARY': HIGHER_SECONDARY,
    '(10TH) SECONDARY': SECONDARY,
    '(10TH)SECONDARY': SECONDARY,
    '10TH': SECONDARY,
    '10TH SECONDARY': SECONDARY,
    'SECONDARY': SECONDARY,
    'BELOW 10TH': BELOW_SECONDARY,
    'NO EDUCATION': NO_EDUCATION,
}

# Diploma and 12th substitute for one another
EQUIVALENT_LEVELS: Dict[str, str] = {
    DIPLOMA: HIGHER_SECONDARY,
    HIGHER_SECONDARY: DIPLOMA,
}

# Lowest level a waterfall asks the candidate to substantiate
WATERFALL_FLOOR = LEVELS_BY_KEY[SECONDARY].rank


def get_education_level(value: Any) -> Optional[EducationLevel]:
    """Resolve a qualification name or level key to its EducationLevel"""
    if isinstance(value, str) and value.strip().lower() in LEVELS_BY_KEY:
        return LEVELS_BY_KEY[value.strip().lower()]
    key = LEVEL_ALIASES.get(normalize_text(value))
    return LEVELS_BY_KEY[key] if key else None


def get_education_rank(value: Any) -> int:
    """Rank of a qualification; unknown names rank as no education"""
    level = get_education_level(value)
    return level.rank if level else 0


def get_level_name(key: str) -> str:
    level = LEVELS_BY_KEY.get(key)
    return level.name if level else key.upper()


def get_waterfall_levels(required: Any) -> List[str]:
    """
    Level keys a candidate must substantiate for a required qualification.

    Every level from the required one down to 10th, highest first.
    """
    rank = get_education_rank(required)
    return [level.key for level in EDUCATION_LEVELS if WATERFALL_FLOOR <= level.rank <= rank]


def highest_level_key(level_keys) -> Optional[str]:
    """Highest-ranked key among the given level keys"""
    known = [LEVELS_BY_KEY[key] for key in level_keys if key in LEVELS_BY_KEY]
    if not known:
        return None
    return max(known, key=lambda level: level.rank).key
