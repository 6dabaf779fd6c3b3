"""
Keyed-variant resolution.

A keyed-variant requirement maps a secondary candidate attribute (gender,
NCC wing, NCC certificate) to the values allowed for that attribute.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from eligex.rules.normalize import normalize_loose, normalize_text, split_list

logger = logging.getLogger(__name__)

# A candidate whose key has no branch in the variant is ineligible.
NO_BRANCH_IS_INELIGIBLE = True


def keys_match(candidate_key: Any, variant_key: Any) -> bool:
    """Normalized equality, or equality once non-alphanumerics are stripped"""
    left = normalize_text(candidate_key)
    right = normalize_text(variant_key)
    if not left or not right:
        return False
    return left == right or normalize_loose(left) == normalize_loose(right)


KeyMatcher = Callable[[Any, Any], bool]


def find_branch(
    variant: Dict[str, Any],
    candidate_key: Any,
    matcher: KeyMatcher = keys_match,
) -> Tuple[Optional[str], Any]:
    """
    Find the variant branch for a candidate key.

    Returns:
        (matched key, branch value), or (None, None) when no branch matches
    """
    for key, value in variant.items():
        if matcher(candidate_key, key):
            return key, value
    return None, None


def resolve_keyed_variant(
    variant: Dict[str, Any],
    candidate_key: Any,
    matcher: KeyMatcher = keys_match,
) -> Optional[List[str]]:
    """
    Resolve a keyed variant to the flat allowed-set for a candidate key.

    Args:
        variant: Mapping of secondary-dimension value to a FlatList or list
        candidate_key: Candidate's value for the secondary dimension
        matcher: Key comparison; loose alphanumeric equality by default

    Returns:
        Normalized allowed values, or None when no branch matches the key
    """
    matched_key, branch = find_branch(variant, candidate_key, matcher)
    if matched_key is None:
        logger.debug(f"No variant branch for key {candidate_key!r} among {list(variant)}")
        return None
    return split_list(branch)
