#!/usr/bin/env python3

import uvicorn

from api.app import create_app
from cli.migrate import apply_pending_migrations
from logger import get_logger

logger = get_logger()


def cmd_serve(args, services):
    """Apply pending migrations, then serve the API until interrupted."""
    config = services.config
    applied = apply_pending_migrations(services.db_manager)
    if applied:
        logger.info(f"Applied {len(applied)} migration(s) before startup")

    host = args.host or config.host
    port = args.port or config.port

    app = create_app(config, services)
    logger.info(f"Listening on {host}:{port}")
    # Logging is already set up; the app logs each request itself
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=None,
        log_level=config.log_level.lower(),
        access_log=False,
    )


def setup_parser(subparsers):
    """Setup serve command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Run the HTTP API server",
    )
    parser.add_argument("--host", help="Bind address (default: from config)")
    parser.add_argument("--port", type=int, help="Port (default: from config)")
    parser.set_defaults(func=cmd_serve)
