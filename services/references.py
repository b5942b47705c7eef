"""Checks on weak references between a user's rows."""

import sqlite3
from typing import Optional

from errors import ValidationError


def check_category_owner(
    conn: sqlite3.Connection,
    user_id: int,
    category_id: Optional[int],
    entry_type: Optional[str] = None,
) -> None:
    """Ensure a referenced category exists and belongs to the user.

    Must run on the connection of the write it guards, inside its transaction,
    so the category cannot change hands or disappear before the write lands.

    Args:
        conn: Connection with an open write transaction.
        user_id: Owning user.
        category_id: Referenced category; None means no reference.
        entry_type: If given, the category must also have this type.

    Raises:
        ValidationError: If the reference is not acceptable.
    """
    if category_id is None:
        return

    row = conn.execute(
        "SELECT type FROM categories WHERE user_id = ? AND id = ?",
        (user_id, category_id),
    ).fetchone()

    if row is None:
        raise ValidationError(
            f"category {category_id} not found", code="invalid_category"
        )
    if entry_type is not None and row[0] != entry_type:
        raise ValidationError(
            f"category {category_id} is an {row[0]} category",
            code="category_type_mismatch",
        )
