"""Budget model for monthly spending limits."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Budget:
    """Represents a monthly spending limit.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: Owning user.
        category_id: Category the limit applies to; None for the month's global budget.
        period_month: Period in canonical "YYYY-MM" form.
        limit_amount: Spending cap for the period.
        created_at: Creation timestamp.
    """

    id: int
    user_id: int
    category_id: Optional[int]
    period_month: str
    limit_amount: Decimal
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category_id": self.category_id,
            "period_month": self.period_month,
            "limit_amount": float(self.limit_amount),
            "created_at": self.created_at,
        }
