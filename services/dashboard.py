"""Dashboard aggregation queries.

Read-only. Each method runs a single statement, so concurrent writes may or
may not be reflected; there is no snapshot guarantee across calls.
"""

from decimal import Decimal
from typing import List

from models.summary import BudgetStatus, CategorySpend, MonthSummary
from services.periods import month_range


def _to_decimal(value) -> Decimal:
    # SQL sums are floats; keep cents, drop binary noise
    return Decimal(str(round(value or 0, 2)))


class DashboardService:
    """Service for monthly aggregates over a user's transactions."""

    def __init__(self, db_manager):
        """Initialize the dashboard service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def summary(self, user_id: int, month: str) -> MonthSummary:
        """Get income and expense totals for a month.

        Args:
            user_id: Owning user.
            month: "YYYY-MM" period.

        Returns:
            MonthSummary; totals are zero when the month has no transactions.

        Raises:
            ValidationError: If the month is malformed.
        """
        first_day, last_day = month_range(month)

        with self.db_manager.connect() as conn:
            row = conn.execute(
                """
                SELECT
                    COALESCE(SUM(CASE WHEN type = 'income' THEN amount END), 0),
                    COALESCE(SUM(CASE WHEN type = 'expense' THEN amount END), 0)
                FROM transactions
                WHERE user_id = ? AND date >= ? AND date <= ?
                """,
                (user_id, first_day.isoformat(), last_day.isoformat()),
            ).fetchone()

        return MonthSummary(
            month=month,
            income_total=_to_decimal(row[0]),
            expense_total=_to_decimal(row[1]),
        )

    def category_breakdown(self, user_id: int, month: str) -> List[CategorySpend]:
        """Get expense totals per category for a month.

        Uncategorized expenses are grouped under category_id None.

        Returns:
            List of CategorySpend, largest total first.
        """
        first_day, last_day = month_range(month)

        with self.db_manager.connect() as conn:
            rows = conn.execute(
                """
                SELECT t.category_id, c.name, SUM(t.amount) AS total
                FROM transactions t
                LEFT JOIN categories c
                    ON c.id = t.category_id AND c.user_id = t.user_id
                WHERE t.user_id = ? AND t.type = 'expense'
                  AND t.date >= ? AND t.date <= ?
                GROUP BY t.category_id, c.name
                ORDER BY total DESC, t.category_id
                """,
                (user_id, first_day.isoformat(), last_day.isoformat()),
            ).fetchall()

        return [
            CategorySpend(
                category_id=row[0], category_name=row[1], total=_to_decimal(row[2])
            )
            for row in rows
        ]

    def budget_status(self, user_id: int, month: str) -> List[BudgetStatus]:
        """Get every budget of a month with the amount spent against it.

        A category budget counts the month's expenses in that category; the
        global budget (no category) counts all of the month's expenses.

        Returns:
            List of BudgetStatus ordered by budget id.
        """
        first_day, last_day = month_range(month)

        with self.db_manager.connect() as conn:
            rows = conn.execute(
                """
                SELECT
                    b.id,
                    b.category_id,
                    b.period_month,
                    b.limit_amount,
                    COALESCE((
                        SELECT SUM(t.amount)
                        FROM transactions t
                        WHERE t.user_id = b.user_id
                          AND t.type = 'expense'
                          AND t.date >= ? AND t.date <= ?
                          AND (b.category_id IS NULL OR t.category_id = b.category_id)
                    ), 0)
                FROM budgets b
                WHERE b.user_id = ? AND b.period_month = ?
                ORDER BY b.id
                """,
                (first_day.isoformat(), last_day.isoformat(), user_id, month),
            ).fetchall()

        return [
            BudgetStatus(
                budget_id=row[0],
                category_id=row[1],
                period_month=row[2],
                limit_amount=_to_decimal(row[3]),
                spent=_to_decimal(row[4]),
            )
            for row in rows
        ]
