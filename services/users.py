"""User service for database operations."""

import sqlite3
from datetime import datetime
from typing import Optional

from db.errors import translate_integrity_error
from models.user import User

_USER_SELECT_FIELDS = "id, name, email, password_hash, created_at"


class UserService:
    """Service for managing users.

    Emails are expected to arrive already normalized (see ``normalize_email``);
    the column is also case-insensitive so a stray uppercase address cannot
    slip past the uniqueness constraint.
    """

    def __init__(self, db_manager):
        """Initialize the user service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Create a new user.

        Args:
            name: Display name.
            email: Normalized email address.
            password_hash: Pre-computed bcrypt hash.

        Returns:
            The created User with id and created_at populated.

        Raises:
            ConflictError: If the email is already registered.
        """
        try:
            with self.db_manager.transaction() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (name, email, password_hash)
                    VALUES (?, ?, ?)
                    RETURNING {_USER_SELECT_FIELDS}
                    """,
                    (name, email, password_hash),
                ).fetchall()[0]
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, unique_code="email_in_use") from e

        return self._row_to_user(row)

    def find(self, user_id: int) -> Optional[User]:
        """Get a user by ID.

        Returns:
            User object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()

            return self._row_to_user(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by (normalized) email.

        Returns:
            User object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE email = ?",
                (email,),
            ).fetchone()

            return self._row_to_user(row) if row else None

    def _row_to_user(self, row: tuple) -> User:
        return User(
            id=row[0],
            name=row[1],
            email=row[2],
            password_hash=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()
