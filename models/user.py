"""User model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Represents a registered account owner.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Display name.
        email: Login email, stored lowercased (unique).
        password_hash: bcrypt hash of the password. Never serialized.
        created_at: Registration timestamp.
    """

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert user to its public representation (no password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at,
        }
