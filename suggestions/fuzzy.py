"""Keyword matching with typo tolerance.

A description matches a keyword when the keyword appears anywhere in the
normalized description, or when any single word of the description is within
``fuzzy_threshold`` edits (Levenshtein distance) of the keyword.
"""

from typing import List, Optional, Sequence

from models.category import Category
from models.suggestion import KEYWORD, SuggestionResult
from suggestions.keywords import KeywordDictionary, default_keyword_dictionary
from suggestions.normalize import normalize_description
from logger import get_logger

logger = get_logger("suggestions")

DEFAULT_FUZZY_THRESHOLD = 2


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings.

    Substitution, insertion and deletion each cost 1. Computed over a full
    (len(b) + 1) x (len(a) + 1) matrix.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,  # insertion
                    matrix[i - 1][j] + 1,  # deletion
                )

    return matrix[len(b)][len(a)]


def matches_keyword(
    description: str,
    keyword: str,
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
) -> bool:
    """Check whether a description matches a keyword, exactly or fuzzily.

    Args:
        description: Transaction description (normalized here as well).
        keyword: Keyword to look for.
        fuzzy_threshold: Maximum edit distance accepted for a single word.

    Returns:
        True on substring containment or a word within the threshold.
    """
    normalized_desc = normalize_description(description)
    normalized_keyword = normalize_description(keyword)
    if not normalized_desc or not normalized_keyword:
        return False

    if normalized_keyword in normalized_desc:
        return True

    return any(
        levenshtein_distance(word, normalized_keyword) <= fuzzy_threshold
        for word in normalized_desc.split()
    )


def match_keywords(
    description: Optional[str],
    categories: Sequence[Category],
    dictionary: Optional[KeywordDictionary] = None,
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
) -> List[SuggestionResult]:
    """Match a description against the keyword dictionary.

    Slugs are scanned in dictionary order; the first matching keyword of a
    slug resolves to the category whose name equals the slug's display name.
    Slugs whose category is missing, or whose category was already emitted,
    are skipped.

    Args:
        description: Transaction description.
        categories: The caller's current categories.
        dictionary: Keyword dictionary; defaults to the built-in one.
        fuzzy_threshold: Maximum edit distance for a fuzzy word match.

    Returns:
        Keyword-sourced suggestions in dictionary slug order, one per category.
    """
    normalized = normalize_description(description)
    if not normalized:
        return []

    if dictionary is None:
        dictionary = default_keyword_dictionary()

    by_name = {}
    for category in categories:
        by_name.setdefault(category.name, category)

    results: List[SuggestionResult] = []
    seen_ids = set()

    for slug, keywords in dictionary.items():
        for keyword in keywords:
            if not matches_keyword(normalized, keyword, fuzzy_threshold):
                continue

            category = by_name.get(dictionary.name_for_slug(slug))
            if category is None:
                logger.debug(f"Keyword '{keyword}' matched slug '{slug}' with no category")
            elif category.id not in seen_ids:
                logger.debug(f"Keyword '{keyword}' matched category '{category.name}'")
                results.append(SuggestionResult(category=category, source=KEYWORD))
                seen_ids.add(category.id)
            break

    return results
