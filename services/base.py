"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If None, one is created from config.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.patterns import PatternService
        from services.categories import CategoryService
        from services.transactions import TransactionService

        self.patterns = PatternService(self.db_manager)
        self.categories = CategoryService(self.db_manager, self.patterns, config)
        self.transactions = TransactionService(self.db_manager, self.patterns)
