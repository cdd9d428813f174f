import pytest

from services.categories import CategoryError, CategoryService


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category(self, services):
        """Test creating a simple category."""
        category = services.categories.create("Groceries", "expense")

        assert category.id is not None
        assert category.id > 0
        assert category.name == "Groceries"
        assert category.type == "expense"
        assert category.icon is None
        assert category.is_default is False

    def test_create_category_with_icon_and_color(self, services):
        """Test creating a category with display attributes."""
        category = services.categories.create(
            "Pets", "expense", icon="PawPrint", color="#abcdef"
        )

        found = services.categories.find(category.id)
        assert found.icon == "PawPrint"
        assert found.color == "#abcdef"

    def test_create_strips_name(self, services):
        """Test that surrounding whitespace is removed from names."""
        category = services.categories.create("  Rent  ", "expense")

        assert category.name == "Rent"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_create_blank_name_raises(self, services, name):
        """Test that blank names are rejected."""
        with pytest.raises(CategoryError, match="cannot be empty"):
            services.categories.create(name, "expense")

    def test_create_invalid_type_raises(self, services):
        """Test that only income and expense types are allowed."""
        with pytest.raises(CategoryError, match="Invalid category type"):
            services.categories.create("Savings", "transfer")

    def test_create_duplicate_name_raises(self, services):
        """Test that names are unique ignoring case."""
        services.categories.create("Shopping", "expense")

        with pytest.raises(CategoryError, match="already exists"):
            services.categories.create("shopping", "expense")

    def test_find_category_by_id(self, services):
        """Test finding a category by ID."""
        created = services.categories.create("Transport", "expense")

        found = services.categories.find(created.id)

        assert found == created

    def test_find_category_by_id_not_found(self, services):
        """Test finding a non-existent category returns None."""
        assert services.categories.find(9999) is None

    def test_find_by_name_case_insensitive(self, services):
        """Test that category name lookup ignores case."""
        services.categories.create("Entertainment", "expense")

        found = services.categories.find_by_name("ENTERTAINMENT")

        assert found is not None
        assert found.name == "Entertainment"

    def test_find_by_name_not_found(self, services):
        """Test finding a non-existent category by name returns None."""
        assert services.categories.find_by_name("Nonexistent") is None

    def test_find_all_empty(self, services):
        """Test finding all categories when database is empty."""
        categories = services.categories.find_all()

        assert categories == []
        assert isinstance(categories, list)

    def test_find_all_ordered_by_name(self, services):
        """Test that find_all returns categories sorted by name."""
        services.categories.create("Utilities", "expense")
        services.categories.create("Salary", "income")
        services.categories.create("Food & Dining", "expense")

        names = [c.name for c in services.categories.find_all()]

        assert names == ["Food & Dining", "Salary", "Utilities"]

    def test_update_category(self, services):
        """Test updating a category's fields."""
        category = services.categories.create("Gifts", "expense")

        updated = services.categories.update(category.id, "Gift", "income", icon="Gift")

        assert updated.name == "Gift"
        assert updated.type == "income"
        found = services.categories.find(category.id)
        assert found.name == "Gift"
        assert found.icon == "Gift"

    def test_update_keeps_own_name(self, services):
        """Test that a category can be updated without renaming."""
        category = services.categories.create("Health", "expense")

        updated = services.categories.update(category.id, "health", "expense")

        assert updated.name == "health"

    def test_update_to_taken_name_raises(self, services):
        """Test that renaming onto another category's name is rejected."""
        services.categories.create("Rent", "expense")
        other = services.categories.create("Housing", "expense")

        with pytest.raises(CategoryError, match="already exists"):
            services.categories.update(other.id, "rent", "expense")

    def test_update_not_found_raises(self, services):
        """Test updating a non-existent category."""
        with pytest.raises(CategoryError, match="not found"):
            services.categories.update(9999, "Anything", "expense")

    def test_delete_category(self, services):
        """Test deleting a category."""
        category = services.categories.create("Temporary", "expense")

        assert services.categories.delete(category.id) is True
        assert services.categories.find(category.id) is None

    def test_delete_not_found(self, services):
        """Test deleting a non-existent category returns False."""
        assert services.categories.delete(9999) is False

    def test_delete_removes_learned_patterns(self, services):
        """Test that deleting a category drops the patterns pointing at it."""
        coffee = services.categories.create("Coffee", "expense")
        snacks = services.categories.create("Snacks", "expense")
        services.patterns.record_assignment("Starbucks", coffee.id)
        services.patterns.record_assignment("Starbucks", snacks.id)

        services.categories.delete(coffee.id)

        patterns = services.patterns.find_all()
        assert [p.category_id for p in patterns] == [snacks.id]


class TestSeedDefaults:
    """Tests for seeding the default categories."""

    def test_seed_creates_default_categories(self, services):
        """Test that all 15 default categories are created."""
        created = services.categories.seed_defaults()

        assert len(created) == 15
        assert all(c.is_default for c in created)
        names = {c.name for c in services.categories.find_all()}
        assert {"Food & Dining", "Other Income", "Other Expense", "Salary"} <= names

    def test_seed_types(self, services):
        """Test that income and expense defaults are typed correctly."""
        services.categories.seed_defaults()

        assert services.categories.find_by_name("Salary").type == "income"
        assert services.categories.find_by_name("Rent").type == "expense"

    def test_seed_is_idempotent(self, services):
        """Test that seeding twice creates nothing the second time."""
        services.categories.seed_defaults()

        assert services.categories.seed_defaults() == []
        assert len(services.categories.find_all()) == 15

    def test_seed_skipped_when_categories_exist(self, services):
        """Test that a user's own categories prevent seeding."""
        services.categories.create("Mine", "expense")

        assert services.categories.seed_defaults() == []
        assert len(services.categories.find_all()) == 1

    def test_seed_from_custom_file(self, services, tmp_path):
        """Test seeding from a custom JSON file."""
        seed_file = tmp_path / "categories.json"
        seed_file.write_text('[{"name": "Pets", "type": "expense"}]')

        created = services.categories.seed_defaults(seed_file)

        assert [c.name for c in created] == ["Pets"]

    @pytest.mark.parametrize(
        "content",
        [
            '[{"name": "Pets", "type": "expense"}, {"name": "Kids"}]',
            '[{"name": "Pets", "type": "expense"}, {"name": "Kids", "type": "transfer"}]',
            '[{"name": "Pets", "type": "expense"}, {"name": "  ", "type": "expense"}]',
            '[{"name": "Pets", "type": "expense"}, {"name": "pets", "type": "income"}]',
            '{"name": "Pets", "type": "expense"}',
        ],
    )
    def test_malformed_seed_file_creates_nothing(self, services, tmp_path, content):
        """Test that a bad entry anywhere in the file leaves the table empty."""
        seed_file = tmp_path / "categories.json"
        seed_file.write_text(content)

        with pytest.raises(CategoryError):
            services.categories.seed_defaults(seed_file)

        assert services.categories.find_all() == []

    def test_seed_after_failed_seed(self, services, tmp_path):
        """Test that the defaults can still be seeded after a failed attempt."""
        seed_file = tmp_path / "categories.json"
        seed_file.write_text('[{"name": "Pets", "type": "expense"}, {"type": "expense"}]')
        with pytest.raises(CategoryError):
            services.categories.seed_defaults(seed_file)

        created = services.categories.seed_defaults()

        assert len(created) == 15
        assert all(c.id is not None for c in created)


class TestCategorySuggestions:
    """Tests for CategoryService.get_suggested_categories."""

    def test_keyword_suggestion(self, services):
        """Test suggestions from the keyword dictionary."""
        services.categories.seed_defaults()

        suggestions = services.categories.get_suggested_categories("Starbucks Coffee")

        assert [c.name for c in suggestions] == ["Food & Dining"]

    def test_learned_suggestion_after_three_assignments(self, services):
        """Test that a description assigned three times overrides keywords."""
        services.categories.seed_defaults()
        shopping = services.categories.find_by_name("Shopping")

        for _ in range(2):
            services.patterns.record_assignment("Starbucks Coffee", shopping.id)
        assert [c.name for c in services.categories.get_suggested_categories(
            "Starbucks Coffee"
        )] == ["Food & Dining"]

        services.patterns.record_assignment("starbucks coffee ", shopping.id)
        suggestions = services.categories.get_suggested_categories("Starbucks Coffee")

        assert suggestions == [shopping]

    def test_no_categories_no_suggestions(self, services):
        """Test that nothing is suggested before categories exist."""
        assert services.categories.get_suggested_categories("Starbucks Coffee") == []

    def test_blank_description(self, services):
        """Test that blank descriptions produce no suggestions."""
        services.categories.seed_defaults()

        assert services.categories.get_suggested_categories("   ") == []

    def test_config_thresholds_applied(self, test_config, db_manager_with_schema):
        """Test that suggestion settings come from the config."""
        test_config.max_suggestions = 1
        test_config.fuzzy_threshold = 0
        service = CategoryService(db_manager_with_schema, config=test_config)
        service.seed_defaults()

        assert service.get_suggested_categories("netflx") == []
        assert len(service.get_suggested_categories("groceries and gas")) == 1

    def test_custom_keywords_file(self, test_config, db_manager_with_schema, tmp_path):
        """Test that a configured keyword dictionary replaces the built-in one."""
        keywords_file = tmp_path / "keywords.yaml"
        keywords_file.write_text(
            "keywords:\n  pets: [petco, vet]\nnames:\n  pets: Pets\n"
        )
        test_config.keywords_file = keywords_file
        service = CategoryService(db_manager_with_schema, config=test_config)
        service.create("Pets", "expense")
        service.create("Food & Dining", "expense")

        assert [c.name for c in service.get_suggested_categories("PETCO #1")] == ["Pets"]
        assert service.get_suggested_categories("Starbucks") == []

    def test_missing_keywords_file_fails_at_init(self, test_config, db_manager_with_schema, tmp_path):
        """Test that a bad keywords_file path fails when the service is built."""
        test_config.keywords_file = tmp_path / "missing.yaml"

        with pytest.raises(FileNotFoundError):
            CategoryService(db_manager_with_schema, config=test_config)
