"""Database manager for SQLite connections and path management."""

import sqlite3
import time
from contextlib import contextmanager
from config import Config, get_migrations_dir

# Number of SQLite VM instructions between deadline checks
_PROGRESS_INTERVAL = 1000


class DatabaseManager:
    """Manages database connections and paths.

    Every call to ``connect`` opens its own connection, so the manager can be
    shared by any number of concurrent callers.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Foreign keys are enforced. The deadline of
        ``config.statement_timeout`` seconds starts when the connection opens
        and covers every statement run inside this block; whichever statement
        is running when it passes is interrupted.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path, timeout=self.config.db_timeout)
        try:
            configure_connection(conn, self.config.statement_timeout)
            yield conn
        finally:
            conn.close()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()


def configure_connection(conn: sqlite3.Connection, statement_timeout: float) -> None:
    """Apply per-connection settings.

    Args:
        conn: Connection to configure.
        statement_timeout: Seconds from now after which any running statement
            on this connection is aborted. Zero or less disables the deadline.
    """
    conn.execute("PRAGMA foreign_keys = ON")

    if statement_timeout and statement_timeout > 0:
        deadline = time.monotonic() + statement_timeout

        def _past_deadline():
            # Non-zero return aborts the statement with "interrupted"
            return 1 if time.monotonic() > deadline else 0

        conn.set_progress_handler(_past_deadline, _PROGRESS_INTERVAL)
