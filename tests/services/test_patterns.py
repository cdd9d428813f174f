from datetime import datetime


class TestPatternService:
    """Tests for PatternService."""

    def test_record_creates_pattern(self, services):
        """Test that the first assignment creates a pattern with count 1."""
        category = services.categories.create("Food & Dining", "expense")

        pattern = services.patterns.record_assignment("Starbucks Coffee", category.id)

        assert pattern.id is not None
        assert pattern.description == "starbucks coffee"
        assert pattern.category_id == category.id
        assert pattern.count == 1
        assert isinstance(pattern.last_used, datetime)

    def test_record_increments_count(self, services):
        """Test that repeated assignments increment the same pattern."""
        category = services.categories.create("Food & Dining", "expense")

        services.patterns.record_assignment("Starbucks Coffee", category.id)
        services.patterns.record_assignment("STARBUCKS COFFEE", category.id)
        pattern = services.patterns.record_assignment("  starbucks coffee", category.id)

        assert pattern.count == 3
        assert len(services.patterns.find_all()) == 1

    def test_record_tracks_each_category_separately(self, services):
        """Test that one description can have patterns for several categories."""
        groceries = services.categories.create("Groceries", "expense")
        shopping = services.categories.create("Shopping", "expense")

        services.patterns.record_assignment("Target", groceries.id)
        services.patterns.record_assignment("Target", shopping.id)
        services.patterns.record_assignment("Target", shopping.id)

        patterns = services.patterns.find_by_description("target")
        assert [(p.category_id, p.count) for p in patterns] == [
            (groceries.id, 1),
            (shopping.id, 2),
        ]

    def test_record_blank_description_is_skipped(self, services):
        """Test that blank descriptions are never learned."""
        category = services.categories.create("Other Expense", "expense")

        assert services.patterns.record_assignment("   ", category.id) is None
        assert services.patterns.find_all() == []

    def test_record_refreshes_last_used(self, services):
        """Test that last_used moves forward on each assignment."""
        category = services.categories.create("Transport", "expense")

        first = services.patterns.record_assignment("Uber", category.id)
        second = services.patterns.record_assignment("Uber", category.id)

        assert second.last_used >= first.last_used

    def test_find_by_description_normalizes(self, services):
        """Test that lookups use the normalized description."""
        category = services.categories.create("Entertainment", "expense")
        services.patterns.record_assignment("Netflix", category.id)

        assert len(services.patterns.find_by_description("  NETFLIX ")) == 1
        assert services.patterns.find_by_description("netflix premium") == []

    def test_find_by_description_blank(self, services):
        """Test that a blank lookup returns nothing."""
        assert services.patterns.find_by_description("") == []

    def test_find_all_ordering(self, services):
        """Test that find_all groups by description, highest count first."""
        a = services.categories.create("A", "expense")
        b = services.categories.create("B", "expense")
        services.patterns.record_assignment("zeta", a.id)
        services.patterns.record_assignment("alpha", a.id)
        services.patterns.record_assignment("alpha", b.id)
        services.patterns.record_assignment("alpha", b.id)

        patterns = services.patterns.find_all()

        assert [(p.description, p.category_id) for p in patterns] == [
            ("alpha", b.id),
            ("alpha", a.id),
            ("zeta", a.id),
        ]

    def test_delete_for_category(self, services):
        """Test deleting all patterns for one category."""
        a = services.categories.create("A", "expense")
        b = services.categories.create("B", "expense")
        services.patterns.record_assignment("one", a.id)
        services.patterns.record_assignment("two", a.id)
        services.patterns.record_assignment("one", b.id)

        removed = services.patterns.delete_for_category(a.id)

        assert removed == 2
        assert [p.category_id for p in services.patterns.find_all()] == [b.id]
