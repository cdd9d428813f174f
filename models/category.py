"""Category model for transaction categorization."""

from dataclasses import dataclass
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
CATEGORY_TYPES = (INCOME, EXPENSE)


@dataclass
class Category:
    """Represents a user transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Display name, unique case-insensitively (e.g., "Food & Dining").
        type: Either "income" or "expense".
        icon: Optional icon name used by the UI (e.g., "Utensils").
        color: Optional hex color code (e.g., "#f59e0b").
        is_default: True for seeded categories, False for custom ones.
    """

    id: int
    name: str
    type: str
    icon: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
