"""Logging setup for the deposition package."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "deposition"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route ``deposition.*`` records to stdout and, optionally, a file.

    Calling it again replaces (and closes) the handlers of the previous call.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _reset_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(level), log_file)
    return logger
