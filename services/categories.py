"""Category service for database operations and suggestions."""

import json
import sqlite3
from pathlib import Path
from typing import List, Optional

from categorization import get_suggested_categories
from config import Config, get_seed_dir
from models.category import CATEGORY_TYPES, Category
from suggestions.keywords import (
    KeywordDictionary,
    default_keyword_dictionary,
    load_keyword_dictionary,
)
from logger import get_logger

logger = get_logger("services")

_CATEGORY_SELECT_FIELDS = "id, name, category_type, icon, color, is_default"


class CategoryError(ValueError):
    """Raised when a category cannot be created or updated."""


def _row_to_category(row) -> Category:
    return Category(
        id=row[0],
        name=row[1],
        type=row[2],
        icon=row[3],
        color=row[4],
        is_default=bool(row[5]),
    )


class CategoryService:
    """Service for managing categories and suggesting them for descriptions."""

    def __init__(self, db_manager, patterns=None, config: Optional[Config] = None):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
            patterns: PatternService used for learned suggestions and cleanup.
            config: Application config with suggestion settings. Defaults apply if None.

        Raises:
            KeywordDictionaryError: If the configured keyword dictionary is malformed.
        """
        self.db_manager = db_manager
        self.patterns = patterns
        self.config = config

        if config is not None and config.keywords_file is not None:
            self.dictionary: KeywordDictionary = load_keyword_dictionary(config.keywords_file)
        else:
            self.dictionary = default_keyword_dictionary()

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name"
            )
            return [_row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()
            return _row_to_category(row) if row else None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name, ignoring case.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
                "WHERE name = ? COLLATE NOCASE",
                (name.strip(),),
            )
            row = cursor.fetchone()
            return _row_to_category(row) if row else None

    def _validate(self, name: str, category_type: str, category_id: Optional[int] = None) -> str:
        name = (name or "").strip()
        if not name:
            raise CategoryError("Category name cannot be empty")
        if category_type not in CATEGORY_TYPES:
            raise CategoryError(
                f"Invalid category type '{category_type}' (expected income or expense)"
            )
        existing = self.find_by_name(name)
        if existing and existing.id != category_id:
            raise CategoryError(f"Category '{existing.name}' already exists")
        return name

    def create(
        self,
        name: str,
        category_type: str,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        is_default: bool = False,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name, unique ignoring case.
            category_type: "income" or "expense".
            icon: Optional icon name.
            color: Optional hex color.
            is_default: Whether this is a seeded default category.

        Returns:
            The created Category object with id populated.

        Raises:
            CategoryError: If the name is blank or taken, or the type is invalid.
        """
        name = self._validate(name, category_type)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (name, category_type, icon, color, is_default) "
                "VALUES (?, ?, ?, ?, ?)",
                (name, category_type, icon, color, int(is_default)),
            )
            conn.commit()
            category_id = cursor.lastrowid

        logger.info(f"Created category '{name}' (ID: {category_id})")
        return Category(
            id=category_id,
            name=name,
            type=category_type,
            icon=icon,
            color=color,
            is_default=is_default,
        )

    def update(
        self,
        category_id: int,
        name: str,
        category_type: str,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Update an existing category.

        Returns:
            The updated Category object.

        Raises:
            CategoryError: If the category is not found or the new values are invalid.
        """
        existing = self.find(category_id)
        if existing is None:
            raise CategoryError(f"Category with ID {category_id} not found")

        name = self._validate(name, category_type, category_id=category_id)

        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE categories SET name = ?, category_type = ?, icon = ?, color = ?, "
                "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (name, category_type, icon, color, category_id),
            )
            conn.commit()

        return Category(
            id=category_id,
            name=name,
            type=category_type,
            icon=icon,
            color=color,
            is_default=existing.is_default,
        )

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID, along with its learned patterns.

        Transactions keep their category_id; use
        TransactionService.reassign_category first to move them.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted and self.patterns is not None:
            removed = self.patterns.delete_for_category(category_id)
            if removed:
                logger.info(f"Removed {removed} learned pattern(s) for category {category_id}")
        return deleted

    def _parse_seed(self, categories_data) -> List[Category]:
        """Validate seed entries and build unsaved categories from them.

        Raises:
            CategoryError: If any entry is malformed or names repeat.
        """
        if not isinstance(categories_data, list):
            raise CategoryError("Seed file must contain a list of categories")

        parsed = []
        seen_names = set()
        for index, data in enumerate(categories_data):
            if not isinstance(data, dict) or "name" not in data or "type" not in data:
                raise CategoryError(f"Seed entry {index} needs 'name' and 'type'")
            name = data["name"].strip() if isinstance(data["name"], str) else ""
            if not name:
                raise CategoryError(f"Seed entry {index} has an empty name")
            if data["type"] not in CATEGORY_TYPES:
                raise CategoryError(
                    f"Seed entry {index} has invalid type '{data['type']}'"
                )
            if name.lower() in seen_names:
                raise CategoryError(f"Seed file lists '{name}' more than once")
            seen_names.add(name.lower())
            parsed.append(
                Category(
                    id=None,
                    name=name,
                    type=data["type"],
                    icon=data.get("icon"),
                    color=data.get("color"),
                    is_default=True,
                )
            )
        return parsed

    def seed_defaults(self, seed_file: Optional[Path] = None) -> List[Category]:
        """Create the default categories if there are no categories yet.

        Safe to call repeatedly: nothing is created when any category exists.
        The whole file is validated first and inserted in a single
        transaction, so a bad seed file leaves the table empty.

        Args:
            seed_file: JSON list of {name, type, icon, color}. Defaults to db/seed/categories.json.

        Returns:
            The categories created (empty if already seeded).

        Raises:
            CategoryError: If the seed file is malformed.
        """
        if self.find_all():
            logger.info("Categories already exist - skipping seed")
            return []

        if seed_file is None:
            seed_file = get_seed_dir() / "categories.json"

        with open(seed_file, "r", encoding="utf-8") as f:
            categories = self._parse_seed(json.load(f))

        with self.db_manager.connect() as conn:
            try:
                for category in categories:
                    cursor = conn.execute(
                        "INSERT INTO categories (name, category_type, icon, color, is_default) "
                        "VALUES (?, ?, ?, ?, 1)",
                        (category.name, category.type, category.icon, category.color),
                    )
                    category.id = cursor.lastrowid
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error seeding categories: {e}")
                raise

        logger.info(f"Seeded {len(categories)} default categories")
        return categories

    def get_suggested_categories(self, description: str) -> List[Category]:
        """Suggest categories for a transaction description.

        Loads the current categories and the learned patterns for this
        description, then applies the configured thresholds.

        Returns:
            Up to max_suggestions categories, best first.
        """
        categories = self.find_all()
        patterns = self.patterns.find_by_description(description) if self.patterns else []

        options = {}
        if self.config is not None:
            options = {
                "fuzzy_threshold": self.config.fuzzy_threshold,
                "min_pattern_count": self.config.min_pattern_count,
                "max_results": self.config.max_suggestions,
            }

        return get_suggested_categories(
            description, categories, patterns, dictionary=self.dictionary, **options
        )
