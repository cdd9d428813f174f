"""Suggestions from a user's learned description -> category patterns."""

from typing import List, Optional, Sequence

from models.category import Category
from models.pattern import UserAssignmentPattern
from models.suggestion import LEARNED, SuggestionResult
from suggestions.normalize import normalize_description

DEFAULT_MIN_PATTERN_COUNT = 3


def find_learned_patterns(
    description: Optional[str],
    patterns: Sequence[UserAssignmentPattern],
    categories: Sequence[Category],
    min_count: int = DEFAULT_MIN_PATTERN_COUNT,
) -> List[SuggestionResult]:
    """Find categories the user has repeatedly assigned to this description.

    Only patterns whose description equals the normalized description exactly
    and whose count is at least ``min_count`` are considered. They are ranked
    by count, highest first; equal counts keep their input order.

    Args:
        description: Transaction description.
        patterns: The user's assignment patterns.
        categories: The user's current categories.
        min_count: Minimum number of observations before a pattern is trusted.

    Returns:
        Learned suggestions, one per category, patterns for deleted
        categories skipped.
    """
    normalized = normalize_description(description)
    if not normalized or not patterns:
        return []

    matching = sorted(
        (p for p in patterns if p.description == normalized and p.count >= min_count),
        key=lambda p: p.count,
        reverse=True,
    )

    by_id = {category.id: category for category in categories}
    results: List[SuggestionResult] = []
    seen_ids = set()

    for pattern in matching:
        category = by_id.get(pattern.category_id)
        if category is None or category.id in seen_ids:
            continue
        results.append(SuggestionResult(category=category, source=LEARNED))
        seen_ids.add(category.id)

    return results
