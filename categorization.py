"""Category suggestions for transaction descriptions.

This module combines the two suggestion sources:
- Learned patterns: categories the user assigned to the exact same
  description at least ``min_pattern_count`` times.
- Keyword matching: a static keyword dictionary with typo tolerance.

Learned patterns always win. When any learned suggestion exists, keyword
matching is not consulted at all; the two sources are never merged.
"""

from typing import List, Optional, Sequence

from models.category import Category
from models.pattern import UserAssignmentPattern
from models.transaction import Transaction
from suggestions.fuzzy import DEFAULT_FUZZY_THRESHOLD, match_keywords
from suggestions.keywords import KeywordDictionary
from suggestions.learned import DEFAULT_MIN_PATTERN_COUNT, find_learned_patterns
from suggestions.normalize import normalize_description
from logger import get_logger

logger = get_logger("suggestions")

MAX_SUGGESTIONS = 3


def get_suggested_categories(
    description: Optional[str],
    categories: Sequence[Category],
    user_patterns: Optional[Sequence[UserAssignmentPattern]] = None,
    dictionary: Optional[KeywordDictionary] = None,
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
    min_pattern_count: int = DEFAULT_MIN_PATTERN_COUNT,
    max_results: int = MAX_SUGGESTIONS,
) -> List[Category]:
    """Suggest up to ``max_results`` categories for a transaction description.

    Args:
        description: Transaction description as typed by the user.
        categories: All of the user's categories.
        user_patterns: The user's learned assignment patterns.
        dictionary: Keyword dictionary; defaults to the built-in one.
        fuzzy_threshold: Maximum edit distance for fuzzy keyword matches.
        min_pattern_count: Observations required before a pattern is used.
        max_results: Maximum number of suggestions returned.

    Returns:
        Suggested categories, best first. Empty for a blank description or
        when nothing matches.
    """
    if not normalize_description(description):
        return []

    learned = find_learned_patterns(
        description, user_patterns or [], categories, min_count=min_pattern_count
    )
    if learned:
        logger.debug(f"Using {len(learned)} learned suggestion(s) for '{description}'")
        return [s.category for s in learned[:max_results]]

    keyword_matches = match_keywords(
        description, categories, dictionary=dictionary, fuzzy_threshold=fuzzy_threshold
    )
    logger.debug(f"Using {len(keyword_matches)} keyword suggestion(s) for '{description}'")
    return [s.category for s in keyword_matches[:max_results]]


def auto_categorize(
    transactions: List[Transaction],
    categories: List[Category],
    user_patterns: List[UserAssignmentPattern],
    **suggestion_options,
) -> List[Transaction]:
    """Set auto_category_id on uncategorized transactions.

    Each transaction without a category gets the top suggestion for its
    description, or None when there is no suggestion. Transactions that
    already have a category are left untouched.

    Args:
        transactions: Transactions to categorize.
        categories: All of the user's categories.
        user_patterns: The user's learned assignment patterns.
        **suggestion_options: Passed through to get_suggested_categories.

    Returns:
        The same list of transactions.
    """
    logger.info(
        f"Auto-categorization called with {len(transactions)} transactions, "
        f"{len(categories)} categories, "
        f"{len(user_patterns)} learned patterns"
    )

    if not categories:
        logger.warning("No categories available - cannot categorize transactions")
        return transactions

    for txn in transactions:
        if txn.category_id is not None:
            continue
        suggestions = get_suggested_categories(
            txn.description, categories, user_patterns, **suggestion_options
        )
        txn.auto_category_id = suggestions[0].id if suggestions else None
        if txn.auto_category_id is not None:
            logger.debug(f"Transaction {txn.id} auto-categorized as {txn.auto_category_id}")

    categorized_count = sum(1 for txn in transactions if txn.auto_category_id is not None)
    logger.info(f"Auto-categorized {categorized_count}/{len(transactions)} transactions")

    return transactions
