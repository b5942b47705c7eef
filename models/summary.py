"""Derived dashboard aggregates. Computed per request, never stored."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class MonthSummary:
    month: str  # YYYY-MM
    income_total: Decimal
    expense_total: Decimal

    @property
    def net(self) -> Decimal:
        return self.income_total - self.expense_total

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "income_total": float(self.income_total),
            "expense_total": float(self.expense_total),
            "net": float(self.net),
        }


@dataclass
class CategorySpend:
    category_id: Optional[int]  # None groups uncategorized expenses
    category_name: Optional[str]
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "total": float(self.total),
        }


@dataclass
class BudgetStatus:
    """A budget of the month next to what has been spent against it."""

    budget_id: int
    category_id: Optional[int]
    period_month: str
    limit_amount: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit_amount - self.spent

    def to_dict(self) -> dict:
        return {
            "budget_id": self.budget_id,
            "category_id": self.category_id,
            "period_month": self.period_month,
            "limit_amount": float(self.limit_amount),
            "spent": float(self.spent),
            "remaining": float(self.remaining),
            "over_limit": self.spent > self.limit_amount,
        }
