import logging
from datetime import date

from logger import get_logger, setup_logging


def test_setup_logging_writes_dated_file(test_config):
    logger = setup_logging(test_config)
    try:
        logger.info("hello from the test")
        for handler in logger.handlers:
            handler.flush()

        log_file = test_config.log_dir / f"pft-{date.today().isoformat()}.log"
        assert log_file.exists()
        assert "hello from the test" in log_file.read_text()
        assert get_logger() is logger
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logging.getLogger("uvicorn").handlers.clear()


def test_server_logger_shares_handlers(test_config):
    logger = setup_logging(test_config)
    try:
        server = logging.getLogger("uvicorn")

        assert server.handlers == logger.handlers
        assert server.propagate is False
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logging.getLogger("uvicorn").handlers.clear()
