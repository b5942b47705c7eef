"""Logging configuration for PFT.

Application records go to a dated log file and to the console. The ASGI
server's logger shares those handlers, so startup and server errors land in the
same file as request logs.
"""

import logging
from datetime import date
from typing import List

from config import Config

APP_LOGGER = "pft"
SERVER_LOGGER = "uvicorn"


def _build_handlers(config: Config) -> List[logging.Handler]:
    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(
        config.log_dir / f"pft-{date.today().isoformat()}.log"
    )
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

    handlers = [file_handler, console_handler]
    for handler in handlers:
        handler.setLevel(config.log_level)
    return handlers


def setup_logging(config: Config) -> logging.Logger:
    """Set up application and server logging.

    Safe to call more than once; previously attached handlers are replaced.

    Args:
        config: Application configuration containing log settings.

    Returns:
        The configured application logger.
    """
    handlers = _build_handlers(config)

    for name in (APP_LOGGER, SERVER_LOGGER):
        target = logging.getLogger(name)
        target.setLevel(config.log_level)
        target.handlers.clear()
        for handler in handlers:
            target.addHandler(handler)

    # uvicorn.error propagates into SERVER_LOGGER; stop there
    logging.getLogger(SERVER_LOGGER).propagate = False

    return logging.getLogger(APP_LOGGER)


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(APP_LOGGER)
