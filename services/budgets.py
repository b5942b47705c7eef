"""Budget service for database operations."""

import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from db.errors import translate_integrity_error
from models.budget import Budget
from services.amounts import storable_amount
from services.periods import parse_month
from services.references import check_category_owner

_BUDGET_SELECT_FIELDS = (
    "id, user_id, category_id, period_month, limit_amount, created_at"
)


class BudgetService:
    """Service for managing monthly budgets."""

    def __init__(self, db_manager):
        """Initialize the budget service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, user_id: int, month: Optional[str] = None) -> List[Budget]:
        """Get a user's budgets, optionally limited to one month.

        Args:
            user_id: Owning user.
            month: Optional "YYYY-MM" period.

        Returns:
            List of Budget objects, ordered by id.
        """
        query = f"""
            SELECT {_BUDGET_SELECT_FIELDS}
            FROM budgets
            WHERE user_id = ?
        """
        params = [user_id]

        if month is not None:
            parse_month(month)
            query += " AND period_month = ?"
            params.append(month)

        query += " ORDER BY id"

        with self.db_manager.connect() as conn:
            rows = conn.execute(query, params).fetchall()

            return [self._row_to_budget(row) for row in rows]

    def find(self, user_id: int, budget_id: int) -> Optional[Budget]:
        """Get a single budget by ID.

        Returns:
            Budget object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"""
                SELECT {_BUDGET_SELECT_FIELDS}
                FROM budgets
                WHERE user_id = ? AND id = ?
                """,
                (user_id, budget_id),
            ).fetchone()

            return self._row_to_budget(row) if row else None

    def create(
        self,
        user_id: int,
        category_id: Optional[int],
        period_month: str,
        limit_amount: Decimal,
    ) -> Budget:
        """Create a new budget.

        Args:
            user_id: Owning user.
            category_id: Category the limit applies to, or None for a global budget.
            period_month: "YYYY-MM" period.
            limit_amount: Spending cap, must be positive.

        Returns:
            The created Budget object.

        Raises:
            ValidationError: If the month or limit is malformed, or the category
                is not one of the user's categories.
            ConflictError: If a budget for this category and month already exists.
        """
        parse_month(period_month)
        stored_limit = storable_amount(limit_amount)
        try:
            with self.db_manager.transaction() as conn:
                check_category_owner(conn, user_id, category_id)
                row = conn.execute(
                    f"""
                    INSERT INTO budgets (user_id, category_id, period_month, limit_amount)
                    VALUES (?, ?, ?, ?)
                    RETURNING {_BUDGET_SELECT_FIELDS}
                    """,
                    (user_id, category_id, period_month, stored_limit),
                ).fetchall()[0]
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, unique_code="budget_exists") from e

        return self._row_to_budget(row)

    def update(
        self,
        user_id: int,
        budget_id: int,
        category_id: Optional[int],
        period_month: str,
        limit_amount: Decimal,
    ) -> Optional[Budget]:
        """Replace the fields of an existing budget.

        Returns:
            The updated Budget, or None if no owned budget has this id.

        Raises:
            ValidationError: If the month or limit is malformed, or the category
                is not one of the user's categories.
            ConflictError: If the new category/month collides with another budget.
        """
        parse_month(period_month)
        stored_limit = storable_amount(limit_amount)
        try:
            with self.db_manager.transaction() as conn:
                check_category_owner(conn, user_id, category_id)
                rows = conn.execute(
                    f"""
                    UPDATE budgets
                    SET category_id = ?, period_month = ?, limit_amount = ?
                    WHERE user_id = ? AND id = ?
                    RETURNING {_BUDGET_SELECT_FIELDS}
                    """,
                    (
                        category_id,
                        period_month,
                        stored_limit,
                        user_id,
                        budget_id,
                    ),
                ).fetchall()
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e, unique_code="budget_exists") from e

        return self._row_to_budget(rows[0]) if rows else None

    def delete(self, user_id: int, budget_id: int) -> bool:
        """Delete a budget by ID.

        Returns:
            True if budget was deleted, False if not found.
        """
        with self.db_manager.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM budgets WHERE user_id = ? AND id = ?",
                (user_id, budget_id),
            )
            return cursor.rowcount > 0

    def _row_to_budget(self, row: tuple) -> Budget:
        return Budget(
            id=row[0],
            user_id=row[1],
            category_id=row[2],
            period_month=row[3],
            limit_amount=Decimal(str(row[4])),
            created_at=datetime.fromisoformat(row[5]),
        )
