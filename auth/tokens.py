"""Signed bearer tokens (JWT, HMAC family).

Tokens carry the user id in a ``uid`` claim plus ``iat``/``exp``. Only HMAC
algorithms are accepted on the way in, so a token whose header names ``none``
or an asymmetric scheme is rejected before its signature is looked at.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from db.manager import MAX_ROW_ID
from errors import InvalidToken

SIGNING_ALGORITHM = "HS256"
ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]
USER_ID_CLAIM = "uid"


@dataclass(frozen=True)
class TokenClaims:
    """Validated token payload.

    Attributes:
        user_id: Subject user identifier.
        expires_at: Absolute expiry instant (UTC).
    """

    user_id: int
    expires_at: datetime


def issue_token(
    user_id: int,
    secret: str,
    ttl: timedelta,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed token for a user.

    Args:
        user_id: The authenticated user's id.
        secret: Shared HMAC secret.
        ttl: Lifetime of the token.
        now: Issue instant; defaults to the current time.

    Returns:
        The encoded token string.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        USER_ID_CLAIM: user_id,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=SIGNING_ALGORITHM)


def decode_claims(token: str, secret: str) -> TokenClaims:
    """Verify a token and return its validated claims.

    Raises:
        InvalidToken: On a bad signature, unexpected algorithm, expiry in the
            past, or a missing or mistyped claim.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=ACCEPTED_ALGORITHMS,
            options={"require": ["exp", USER_ID_CLAIM]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken(f"token rejected: {e}") from e

    user_id = payload[USER_ID_CLAIM]
    # bool is a subclass of int; JSON true must not pass as user 1
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken(f"{USER_ID_CLAIM} claim must be an integer")
    if not 0 < user_id <= MAX_ROW_ID:
        raise InvalidToken(f"{USER_ID_CLAIM} claim out of range")

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    return TokenClaims(user_id=user_id, expires_at=expires_at)


def verify_token(token: str, secret: str) -> int:
    """Verify a token and return the user id it was issued for."""
    return decode_claims(token, secret).user_id
