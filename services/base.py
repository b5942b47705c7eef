"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database. The API builds one instance per
    application and hands it to every request through ``app.state``.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.users import UserService
        from services.categories import CategoryService
        from services.budgets import BudgetService
        from services.transactions import TransactionService
        from services.dashboard import DashboardService

        self.users = UserService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.budgets = BudgetService(self.db_manager)
        self.transactions = TransactionService(self.db_manager)
        self.dashboard = DashboardService(self.db_manager)
