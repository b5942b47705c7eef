"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


# Largest value a SQLite INTEGER column (and sqlite3 parameter) can hold
MAX_ROW_ID = 2**63 - 1


class DatabaseManager:
    """Manages database connections and paths.

    Every connection is opened for one logical operation and closed when the
    operation is done. Foreign key enforcement is switched on per connection,
    since SQLite leaves it off by default.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the database manager.

        Args:
            config: Config object containing database configuration.
        """
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self):
        """Get a connection inside a write transaction.

        The write lock is taken up front (BEGIN IMMEDIATE) so reads made inside
        the block cannot be invalidated by another writer before commit. The
        transaction is committed when the block exits normally and rolled back
        otherwise.

        Yields:
            sqlite3.Connection: Database connection with an open transaction.
        """
        with self.connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            conn.commit()

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
