"""Category service for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from db.errors import translate_integrity_error
from models.category import Category

_CATEGORY_SELECT_FIELDS = "id, user_id, name, type, created_at"


class CategoryService:
    """Service for managing a user's categories.

    Every query is scoped by ``user_id``; a category id that belongs to
    another user behaves exactly like one that does not exist.
    """

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, user_id: int) -> List[Category]:
        """Get all categories owned by a user.

        Args:
            user_id: Owning user.

        Returns:
            List of Category objects, ordered by id.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ?
                ORDER BY id
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

            return [self._row_to_category(row) for row in rows]

    def find(self, user_id: int, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            user_id: Owning user.
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ? AND id = ?
                """,
                (user_id, category_id),
            ).fetchone()

            return self._row_to_category(row) if row else None

    def create(self, user_id: int, name: str, category_type: str) -> Category:
        """Create a new category.

        Args:
            user_id: Owning user.
            name: Category name.
            category_type: 'income' or 'expense'.

        Returns:
            The created Category object with id populated.

        Raises:
            ConflictError: If the user already has a category with this name and type.
        """
        try:
            with self.db_manager.transaction() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO categories (user_id, name, type)
                    VALUES (?, ?, ?)
                    RETURNING {_CATEGORY_SELECT_FIELDS}
                    """,
                    (user_id, name, category_type),
                ).fetchall()[0]
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, unique_code="category_exists") from e

        return self._row_to_category(row)

    def update(
        self, user_id: int, category_id: int, name: str, category_type: str
    ) -> Optional[Category]:
        """Update name and type of an existing category.

        Args:
            user_id: Owning user.
            category_id: The category ID to update.
            name: New category name.
            category_type: New type.

        Returns:
            The updated Category, or None if no owned category has this id.

        Raises:
            ConflictError: If the new name/type collides with another category.
        """
        try:
            with self.db_manager.transaction() as conn:
                rows = conn.execute(
                    f"""
                    UPDATE categories
                    SET name = ?, type = ?
                    WHERE user_id = ? AND id = ?
                    RETURNING {_CATEGORY_SELECT_FIELDS}
                    """,
                    (name, category_type, user_id, category_id),
                ).fetchall()
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, unique_code="category_exists") from e

        return self._row_to_category(rows[0]) if rows else None

    def delete(self, user_id: int, category_id: int) -> bool:
        """Delete a category by ID.

        Args:
            user_id: Owning user.
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            ConflictError: If budgets or transactions still reference the
                category (kind DEPENDENT_ROW).
        """
        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM categories WHERE user_id = ? AND id = ?",
                    (user_id, category_id),
                )
                return cursor.rowcount > 0
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, dependent_code="category_in_use") from e

    def _row_to_category(self, row: tuple) -> Category:
        return Category(
            id=row[0],
            user_id=row[1],
            name=row[2],
            type=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
