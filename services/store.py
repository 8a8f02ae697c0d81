"""Base class for services that talk to the database directly."""

import sqlite3
from contextlib import contextmanager

from errors import ConflictError, StorageError
from logger import get_logger

logger = get_logger()

# Largest value a SQLite INTEGER column can hold
MAX_ID = 2**63 - 1


class StoreService:
    """Wraps the database manager and classifies sqlite failures.

    Uniqueness violations become ``ConflictError``; every other sqlite error,
    including failing to open the database, becomes ``StorageError``. The raw
    backend message is logged here and never placed in the raised error.
    """

    # Shown to callers when a UNIQUE constraint fails
    conflict_message = "Record already exists"

    def __init__(self, db_manager):
        """Initialize the store.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    @contextmanager
    def connect(self):
        """Get a connection whose sqlite errors are translated.

        Uncommitted work is rolled back before the error propagates.

        Yields:
            sqlite3.Connection: Database connection.
        """
        try:
            with self.db_manager.connect() as conn:
                try:
                    yield conn
                except sqlite3.Error:
                    conn.rollback()
                    raise
        except sqlite3.IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                logger.warning(f"Uniqueness violation: {e}")
                raise ConflictError(self.conflict_message) from e
            logger.error(f"Integrity error: {e}")
            raise StorageError() from e
        except sqlite3.Error as e:
            logger.error(f"Database error: {e}")
            raise StorageError() from e
