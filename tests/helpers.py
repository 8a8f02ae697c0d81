"""Helper utilities for tests."""

from pathlib import Path
import sqlite3

from db.migrator import apply_pending


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    apply_pending(conn, migrations_dir)


class SharedConnectionManager:
    """Database manager that hands out one long-lived connection.

    An in-memory database only lives as long as its connection, so tests
    share a single connection instead of opening one per call.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def connect(self):
        """Return a context manager for the test connection."""
        return _SharedConnectionContext(self.conn)

    def get_db_path(self):
        """Return a fake path for the test database."""
        return Path(":memory:")


class _SharedConnectionContext:
    """Context manager for test database connections."""

    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Don't close the connection - let the fixture handle it
        return False
