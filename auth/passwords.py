"""Password hashing with bcrypt."""

import bcrypt

from errors import HashingError

DEFAULT_ROUNDS = 12


def hash_password(plaintext: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plaintext password with a fresh salt.

    Args:
        plaintext: The password to hash.
        rounds: bcrypt cost factor (log2 of the work).

    Returns:
        The self-describing bcrypt hash ("$2b$<cost>$<salt+digest>").

    Raises:
        HashingError: If bcrypt rejects the input or fails internally.
    """
    try:
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds))
    except (ValueError, TypeError) as e:
        raise HashingError(f"could not hash password: {e}") from e
    return hashed.decode("utf-8")


def verify_password(password_hash: str, candidate: str) -> bool:
    """Check a candidate password against a stored hash.

    A wrong password, a corrupted hash and a hash from another algorithm all
    give False.
    """
    try:
        return bcrypt.checkpw(candidate.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
