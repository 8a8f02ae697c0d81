"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config
            is not used to open the database.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryStore
        from services.transactions import TransactionStore
        from services.ledger import LedgerService
        from services.fuelings import FuelingService
        from services.users import UserService

        self.users = UserService(self.db_manager)
        self.categories = CategoryStore(self.db_manager)
        self.transactions = TransactionStore(self.db_manager)
        self.ledger = LedgerService(self.categories, self.transactions)
        self.fuelings = FuelingService(self.db_manager)
