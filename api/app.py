"""FastAPI application factory.

Usage:
    python -m cli serve
    uvicorn api.app:create_app --factory
"""

import time
from typing import Optional

from fastapi import FastAPI, Request

from api import accounts, budgets, categories, dashboard, transactions
from api.errors import register_exception_handlers
from config import Config, load_config
from logger import get_logger, setup_logging
from services.base import Services

logger = get_logger()


def create_app(
    config: Optional[Config] = None, services: Optional[Services] = None
) -> FastAPI:
    """Build the API with its collaborators attached to ``app.state``.

    Args:
        config: Application configuration. Loaded from file (and logging set
            up) when omitted.
        services: Services container; built from config when omitted.

    Returns:
        The configured FastAPI application.
    """
    if config is None:
        config = load_config()
        setup_logging(config)

    app = FastAPI(title="PFT", description="Personal finance tracker API")
    app.state.config = config
    app.state.services = services or Services(config)

    register_exception_handlers(app)

    app.include_router(accounts.public)
    app.include_router(accounts.protected)
    app.include_router(categories.router)
    app.include_router(transactions.router)
    app.include_router(budgets.router)
    app.include_router(dashboard.router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms"
        )
        return response

    return app
