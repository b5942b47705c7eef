"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from cli.migrate import apply_pending_migrations
from config import Config
from db.manager import DatabaseManager
from services.base import Services
from tests.helpers import TEST_SECRET


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "pft",
        db_data_dir=tmp_path / "pft" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "pft" / "logs",
        host="127.0.0.1",
        port=8080,
        jwt_secret=TEST_SECRET,
        token_ttl_hours=1,
        bcrypt_rounds=4,
    )


@pytest.fixture
def db_manager_with_schema(test_config):
    """Create a DatabaseManager with all migrations applied.

    Args:
        test_config: Test configuration fixture.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    db_manager = DatabaseManager(test_config)
    apply_pending_migrations(db_manager)
    return db_manager


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def alice(services):
    """A user created directly through the service."""
    return services.users.create("Alice", "alice@example.com", "unused-hash")


@pytest.fixture
def bob(services):
    """A second user, for tenant isolation checks."""
    return services.users.create("Bob", "bob@example.com", "unused-hash")


@pytest.fixture
def app(test_config, services):
    return create_app(test_config, services)


@pytest.fixture
def client(app):
    """HTTP client for the API backed by the test database."""
    return TestClient(app)
