# -*- coding: utf-8 -*-
"""
Logging configuration.

One application logger ("rental_manager") writes everything to a rotating
file; the console shows CONSOLE_LOG_LEVEL and above. Modules log through
child loggers obtained with `get_logger(__name__)`.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

APP_LOGGER_NAME = "rental_manager"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Build the application logger from Config."""
    global _logger

    from app.config import Config

    Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        Config.LOG_PATH,
        maxBytes=Config.LOG_MAX_BYTES,
        backupCount=Config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, Config.CONSOLE_LOG_LEVEL, logging.INFO))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    # requests' connection pool is noisy at DEBUG; the client logs its own calls
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    if _logger is None:
        setup_logger()
    return _logger.getChild(name)
