"""Pattern service for learned description -> category assignments."""

from datetime import datetime
from typing import List, Optional

from models.pattern import UserAssignmentPattern
from suggestions.normalize import normalize_description
from logger import get_logger

logger = get_logger("services")

_PATTERN_SELECT_FIELDS = "id, description, category_id, count, last_used"


def _row_to_pattern(row) -> UserAssignmentPattern:
    return UserAssignmentPattern(
        id=row[0],
        description=row[1],
        category_id=row[2],
        count=row[3],
        last_used=datetime.fromisoformat(row[4]) if row[4] else None,
    )


class PatternService:
    """Service for recording and reading learned assignment patterns."""

    def __init__(self, db_manager):
        """Initialize the pattern service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[UserAssignmentPattern]:
        """Get all patterns, ordered by description then highest count.

        Returns:
            List of UserAssignmentPattern objects.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_PATTERN_SELECT_FIELDS} FROM category_patterns "
                "ORDER BY description, count DESC, id"
            )
            return [_row_to_pattern(row) for row in cursor.fetchall()]

    def find_by_description(self, description: str) -> List[UserAssignmentPattern]:
        """Get the patterns recorded for a description.

        The description is normalized before lookup, so "Starbucks " and
        "starbucks" find the same patterns.

        Args:
            description: Raw or normalized transaction description.

        Returns:
            Patterns for that description in insertion order; empty if blank.
        """
        normalized = normalize_description(description)
        if not normalized:
            return []

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_PATTERN_SELECT_FIELDS} FROM category_patterns "
                "WHERE description = ? ORDER BY id",
                (normalized,),
            )
            return [_row_to_pattern(row) for row in cursor.fetchall()]

    def record_assignment(
        self, description: str, category_id: int
    ) -> Optional[UserAssignmentPattern]:
        """Record that a description was assigned to a category.

        Creates the pattern with count 1 on first sight, otherwise increments
        its count and refreshes last_used. Each (description, category) pair
        is tracked separately.

        Args:
            description: Raw transaction description.
            category_id: Category the user assigned.

        Returns:
            The updated pattern, or None if the description is blank.
        """
        normalized = normalize_description(description)
        if not normalized:
            logger.debug("Skipping pattern for blank description")
            return None

        now = datetime.now().isoformat()
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO category_patterns (description, category_id, count, last_used)
                VALUES (?, ?, 1, ?)
                ON CONFLICT (description, category_id)
                DO UPDATE SET count = count + 1, last_used = excluded.last_used
                """,
                (normalized, category_id, now),
            )
            conn.commit()

            cursor = conn.execute(
                f"SELECT {_PATTERN_SELECT_FIELDS} FROM category_patterns "
                "WHERE description = ? AND category_id = ?",
                (normalized, category_id),
            )
            pattern = _row_to_pattern(cursor.fetchone())

        logger.info(
            f"Recorded '{pattern.description}' -> category {category_id} "
            f"(count: {pattern.count})"
        )
        return pattern

    def delete_for_category(self, category_id: int) -> int:
        """Delete every pattern pointing at a category.

        Returns:
            Number of patterns deleted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM category_patterns WHERE category_id = ?", (category_id,)
            )
            conn.commit()
            return cursor.rowcount
