"""Error taxonomy shared by the credential module, services and API.

Each error carries a short machine-readable ``code`` that the API layer puts
in the response body. "Not found" outcomes from services are plain ``None`` /
``False`` values; ``NotFound`` exists only for the API layer to raise.
"""

from enum import Enum
from typing import Optional


class PFTError(Exception):
    """Base class for all application errors."""

    code = "error"

    def __init__(self, message: str = "", code: Optional[str] = None):
        super().__init__(message or self.code)
        if code is not None:
            self.code = code


class ValidationError(PFTError):
    """Malformed or unacceptable input."""

    code = "invalid"


class Unauthenticated(PFTError):
    """Missing or unusable credentials."""

    code = "unauthorized"


class InvalidToken(Unauthenticated):
    """Bearer token failed signature, algorithm, expiry or claim checks."""

    code = "invalid_token"


class ConflictKind(str, Enum):
    UNIQUE = "unique"
    DEPENDENT_ROW = "dependent_row"


class ConflictError(PFTError):
    """A write would violate a uniqueness or referential constraint."""

    code = "conflict"

    def __init__(
        self, kind: ConflictKind, message: str = "", code: Optional[str] = None
    ):
        super().__init__(message, code)
        self.kind = kind


class NotFound(PFTError):
    code = "not_found"


class InternalError(PFTError):
    """Server-side failure; details are logged, never sent to the client."""

    code = "server"


class HashingError(InternalError):
    """Password hashing failed."""
