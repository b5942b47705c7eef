"""Transaction service for database operations."""

import sqlite3
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from db.errors import translate_integrity_error
from models.transaction import Transaction
from services.amounts import storable_amount
from services.references import check_category_owner

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """id, user_id, category_id, amount, type, date,
       description, created_at"""


class TransactionService:
    """Service for managing a user's transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(
        self,
        user_id: int,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        entry_type: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> List[Transaction]:
        """Get a user's transactions, optionally filtered.

        Args:
            user_id: Owning user.
            date_from: Earliest transaction date (inclusive).
            date_to: Latest transaction date (inclusive).
            entry_type: Only 'income' or only 'expense' transactions.
            category_id: Only transactions in this category.

        Returns:
            List of Transaction objects ordered by id.
        """
        query = f"""
            SELECT {_TRANSACTION_SELECT_FIELDS}
            FROM transactions
            WHERE user_id = ?
        """
        params = [user_id]

        if date_from is not None:
            query += " AND date >= ?"
            params.append(date_from.isoformat())

        if date_to is not None:
            query += " AND date <= ?"
            params.append(date_to.isoformat())

        if entry_type is not None:
            query += " AND type = ?"
            params.append(entry_type)

        if category_id is not None:
            query += " AND category_id = ?"
            params.append(category_id)

        query += " ORDER BY id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            rows = cursor.fetchall()

            return [self._row_to_transaction(row) for row in rows]

    def find(self, user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            row = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_id = ? AND id = ?
                """,
                (user_id, transaction_id),
            ).fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def create(
        self,
        user_id: int,
        *,
        amount: Decimal,
        entry_type: str,
        on_date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        """Record a new transaction.

        Args:
            user_id: Owning user.
            amount: Positive amount.
            entry_type: 'income' or 'expense'.
            on_date: Date the money moved.
            category_id: Optional category; must be the user's own and of the same type.
            description: Optional free text.

        Returns:
            The created Transaction object.

        Raises:
            ValidationError: If the amount or the category reference is not acceptable.
        """
        stored_amount = storable_amount(amount)
        try:
            with self.db_manager.transaction() as conn:
                check_category_owner(conn, user_id, category_id, entry_type)
                row = conn.execute(
                    f"""
                    INSERT INTO transactions
                        (user_id, category_id, amount, type, date, description)
                    VALUES (?, ?, ?, ?, ?, ?)
                    RETURNING {_TRANSACTION_SELECT_FIELDS}
                    """,
                    (
                        user_id,
                        category_id,
                        stored_amount,
                        entry_type,
                        on_date.isoformat(),
                        description,
                    ),
                ).fetchall()[0]
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e) from e

        return self._row_to_transaction(row)

    def update(
        self,
        user_id: int,
        transaction_id: int,
        *,
        amount: Decimal,
        entry_type: str,
        on_date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Optional[Transaction]:
        """Replace the fields of an existing transaction.

        Returns:
            The updated Transaction, or None if no owned transaction has this id.

        Raises:
            ValidationError: If the amount or the category reference is not acceptable.
        """
        stored_amount = storable_amount(amount)
        try:
            with self.db_manager.transaction() as conn:
                check_category_owner(conn, user_id, category_id, entry_type)
                rows = conn.execute(
                    f"""
                    UPDATE transactions
                    SET category_id = ?, amount = ?, type = ?, date = ?, description = ?
                    WHERE user_id = ? AND id = ?
                    RETURNING {_TRANSACTION_SELECT_FIELDS}
                    """,
                    (
                        category_id,
                        stored_amount,
                        entry_type,
                        on_date.isoformat(),
                        description,
                        user_id,
                        transaction_id,
                    ),
                ).fetchall()
        except sqlite3.IntegrityError as e:
            raise translate_integrity_error(e) from e

        return self._row_to_transaction(rows[0]) if rows else None

    def delete(self, user_id: int, transaction_id: int) -> bool:
        """Delete a transaction by ID.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        with self.db_manager.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE user_id = ? AND id = ?",
                (user_id, transaction_id),
            )
            return cursor.rowcount > 0

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            user_id=row[1],
            category_id=row[2],
            amount=Decimal(str(row[3])),
            type=row[4],
            date=date.fromisoformat(row[5]),
            description=row[6],
            created_at=datetime.fromisoformat(row[7]),
        )
