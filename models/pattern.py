"""Learned description to category assignment pattern."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class UserAssignmentPattern:
    """How often a normalized description was assigned to a category.

    Attributes:
        description: Normalized (lowercase, trimmed) transaction description.
        category_id: Category the description was assigned to.
        count: Number of times this assignment was observed (starts at 1).
        last_used: Timestamp of the most recent observation.
        id: Database identifier, None for patterns not yet persisted.
    """

    description: str
    category_id: int
    count: int = 1
    last_used: Optional[datetime] = None
    id: Optional[int] = None
