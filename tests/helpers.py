"""Helper utilities for tests."""

import json
from typing import List

from config import get_seed_dir
from models.category import Category
from models.pattern import UserAssignmentPattern


def make_default_categories() -> List[Category]:
    """Build in-memory copies of the seeded default categories.

    Returns:
        Categories with ids 1..15 in seed file order.
    """
    with open(get_seed_dir() / "categories.json", "r", encoding="utf-8") as f:
        data = json.load(f)

    return [
        Category(
            id=index,
            name=item["name"],
            type=item["type"],
            icon=item.get("icon"),
            color=item.get("color"),
            is_default=True,
        )
        for index, item in enumerate(data, start=1)
    ]


def make_pattern(description: str, category_id: int, count: int) -> UserAssignmentPattern:
    """Build an in-memory learned pattern."""
    return UserAssignmentPattern(description=description, category_id=category_id, count=count)
