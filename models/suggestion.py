"""Suggestion result produced by the category matchers."""

from dataclasses import dataclass
from typing import Optional

from models.category import Category

KEYWORD = "keyword"
LEARNED = "learned"


@dataclass(frozen=True)
class SuggestionResult:
    """A candidate category and the matcher that produced it.

    The source is informational only and never affects ranking.
    """

    category: Category
    source: str  # 'keyword' or 'learned'
    confidence: Optional[float] = None
