"""Mapping of application outcomes to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from errors import (
    ConflictError,
    InternalError,
    NotFound,
    PFTError,
    Unauthenticated,
    ValidationError,
)
from logger import get_logger

logger = get_logger()

# Client-facing guidance for conflicts, keyed by error code
CONFLICT_MESSAGES = {
    "email_in_use": "An account with this email already exists.",
    "category_exists": "You already have a category with this name and type.",
    "budget_exists": "A budget for this category and month already exists.",
    "category_in_use": (
        "Delete or reassign budgets and transactions for this category "
        "before deleting it."
    ),
}


def status_for(error: PFTError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, Unauthenticated):
        return 401
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, ConflictError):
        return 409
    return 500


async def handle_app_error(request: Request, exc: PFTError) -> JSONResponse:
    status = status_for(exc)
    body = {"error": exc.code}

    if isinstance(exc, ConflictError):
        logger.info(f"Conflict on {request.method} {request.url.path}: {exc}")
        body["msg"] = CONFLICT_MESSAGES.get(exc.code, "Conflicts with existing data.")
    elif isinstance(exc, ValidationError):
        body["msg"] = str(exc)
    elif isinstance(exc, InternalError) or status == 500:
        logger.error(
            f"Internal error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        body = {"error": "server"}

    return JSONResponse(status_code=status, content=body)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "invalid", "detail": detail})


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "server"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PFTError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
