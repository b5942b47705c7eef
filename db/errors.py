"""Translation of SQLite constraint failures into application errors.

This is the only place that looks at driver error text. Services call
``translate_integrity_error`` once and re-raise the result; nothing above the
service layer ever sees a ``sqlite3`` exception.
"""

import sqlite3

from errors import (
    ConflictError,
    ConflictKind,
    InternalError,
    PFTError,
    ValidationError,
)


def translate_integrity_error(
    error: sqlite3.IntegrityError,
    *,
    unique_code: str = "already_exists",
    dependent_code: str = "in_use",
) -> PFTError:
    """Classify an integrity error raised by a write.

    Args:
        error: The error raised by sqlite3.
        unique_code: Error code to use for a uniqueness collision.
        dependent_code: Error code to use for a blocked delete/update.

    Returns:
        ConflictError for UNIQUE and FOREIGN KEY failures, ValidationError for
        CHECK and NOT NULL failures, InternalError for anything else.
    """
    message = str(error)

    if message.startswith("UNIQUE constraint failed"):
        return ConflictError(ConflictKind.UNIQUE, message, code=unique_code)
    if message.startswith("FOREIGN KEY constraint failed"):
        return ConflictError(ConflictKind.DEPENDENT_ROW, message, code=dependent_code)
    if message.startswith(("CHECK constraint failed", "NOT NULL constraint failed")):
        return ValidationError(message)

    return InternalError(message)
