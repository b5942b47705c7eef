from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Transaction:
    id: int
    user_id: int
    category_id: Optional[int]  # uncategorized when None
    amount: Decimal  # always positive
    type: str  # 'income' or 'expense'
    date: date
    description: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category_id": self.category_id,
            "amount": float(self.amount),
            "type": self.type,
            "date": self.date.isoformat(),
            "description": self.description,
            "created_at": self.created_at,
        }
