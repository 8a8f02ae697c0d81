"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest

from config import Config, get_migrations_dir
from db.manager import configure_connection
from services.base import Services
from tests.helpers import SharedConnectionManager, run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    configure_connection(conn, statement_timeout=0)
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "tally",
        db_data_dir=tmp_path / "tally" / "db",
        db_filename="test.db",
        db_timeout=1.0,
        statement_timeout=5.0,
        log_level="DEBUG",
        log_dir=tmp_path / "tally" / "logs",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a database manager with schema already set up.

    This fixture provides a manager that uses an in-memory database
    with all migrations already applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        SharedConnectionManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())
    return SharedConnectionManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def alice(services):
    """A user who owns ledger data in most tests."""
    return services.users.create("alice")


@pytest.fixture
def bob(services):
    """A second user, used to check isolation between users."""
    return services.users.create("bob")
