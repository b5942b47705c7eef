"""Category model for transaction categorization."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: Owning user.
        name: Category name, unique per user and type.
        type: 'income' or 'expense'.
        created_at: Creation timestamp.
    """

    id: int
    user_id: int
    name: str
    type: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "type": self.type,
            "created_at": self.created_at,
        }
