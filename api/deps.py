"""Request dependencies: app-scoped collaborators and the authentication gate.

The gate (``require_bearer``) is attached to every protected router. It runs
once per request before any handler code, verifies the bearer token and binds
the user id to ``request.state``. Handlers read the identity back through
``current_user_id``.
"""

from typing import Optional

from fastapi import Depends, Request

from auth.tokens import verify_token
from config import Config
from errors import InternalError, InvalidToken, Unauthenticated
from logger import get_logger
from services.base import Services

logger = get_logger()

BEARER_PREFIX = "Bearer "


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_services(request: Request) -> Services:
    return request.app.state.services


def require_bearer(request: Request, config: Config = Depends(get_config)) -> int:
    """Authenticate the request from its Authorization header.

    Returns:
        The authenticated user id, also bound to ``request.state.user_id``.

    Raises:
        Unauthenticated: If the header is missing or not a Bearer credential.
        InvalidToken: If the token does not verify.
    """
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        logger.info(f"Rejected {request.method} {request.url.path}: no bearer token")
        raise Unauthenticated("missing bearer token", code="missing_bearer_token")

    token = header[len(BEARER_PREFIX):].strip()
    try:
        user_id = verify_token(token, config.jwt_secret)
    except InvalidToken as e:
        logger.info(f"Rejected {request.method} {request.url.path}: {e}")
        raise

    request.state.user_id = user_id
    return user_id


def lookup_user_id(request: Request) -> Optional[int]:
    """Get the identity bound by the gate, or None if there is none."""
    return getattr(request.state, "user_id", None)


def current_user_id(request: Request) -> int:
    """Identity of the authenticated caller.

    Raises:
        InternalError: If the gate did not run for this route, which is a
            wiring mistake rather than a client error.
    """
    user_id = lookup_user_id(request)
    if user_id is None:
        logger.error(
            f"No authenticated identity on {request.method} {request.url.path}; "
            "is the route missing the bearer dependency?"
        )
        raise InternalError("authenticated identity missing from request context")
    return user_id
