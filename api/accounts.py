"""Health, registration, login and profile endpoints."""

from datetime import timedelta

from fastapi import APIRouter, Depends

from api.deps import current_user_id, get_config, get_services, require_bearer
from api.schemas import LoginRequest, RegisterRequest
from auth.passwords import hash_password, verify_password
from auth.tokens import issue_token
from config import Config
from errors import InvalidToken, Unauthenticated
from logger import get_logger
from services.base import Services
from services.users import normalize_email

logger = get_logger()

# Checked when the email is unknown so both login failures cost a bcrypt round
_UNKNOWN_USER_HASH = "$2b$12$NnIcYNH4aZmR/cr4TkPOSeBdC0YAw2C9lN.Wf8y5n3rvw2JTcVlxa"

public = APIRouter(prefix="/api")
protected = APIRouter(prefix="/api", dependencies=[Depends(require_bearer)])


def _token_for(user_id: int, config: Config) -> str:
    ttl = timedelta(hours=config.token_ttl_hours)
    return issue_token(user_id, config.jwt_secret, ttl)


@public.get("/healthz")
def healthz():
    return {"ok": True}


@public.post("/register", status_code=201)
def register(
    payload: RegisterRequest,
    services: Services = Depends(get_services),
    config: Config = Depends(get_config),
):
    """Create an account and return a token for it."""
    password_hash = hash_password(payload.password, rounds=config.bcrypt_rounds)
    user = services.users.create(
        payload.name, normalize_email(payload.email), password_hash
    )
    logger.info(f"Registered user {user.id}")
    return {"id": user.id, "token": _token_for(user.id, config)}


@public.post("/login")
def login(
    payload: LoginRequest,
    services: Services = Depends(get_services),
    config: Config = Depends(get_config),
):
    """Exchange email and password for a token.

    Unknown email and wrong password give the same response.
    """
    user = services.users.find_by_email(normalize_email(payload.email))
    password_hash = user.password_hash if user else _UNKNOWN_USER_HASH

    if not verify_password(password_hash, payload.password) or user is None:
        raise Unauthenticated("invalid credentials", code="invalid_credentials")

    return {"id": user.id, "token": _token_for(user.id, config)}


@protected.get("/me")
def me(
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    user = services.users.find(user_id)
    if user is None:
        # Valid signature for an account that no longer exists
        raise InvalidToken("token subject does not exist")
    return user.to_dict()
