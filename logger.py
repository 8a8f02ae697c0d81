"""Logging for Tally.

Everything logs through one named logger. The CLI attaches a dated log file
and the console to it; tests and library callers attach nothing and rely on
propagation to the root logger.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from config import Config

LOGGER_NAME = "tally"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_file_path(config: Config, day: Optional[date] = None) -> Path:
    """Path of the log file for one day, e.g. ``logs/tally-2024-03-15.log``."""
    day = day or date.today()
    return config.log_dir / f"{LOGGER_NAME}-{day.isoformat()}.log"


def setup_logging(config: Config, console: bool = True) -> logging.Logger:
    """Attach the dated file handler and, optionally, a console handler.

    Calling it again replaces the handlers from the previous call, closing
    the old log file.

    Args:
        config: Application configuration containing log settings.
        console: Also echo records to stderr. The CLI prints its output
            through this handler.

    Returns:
        The configured application logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = get_logger()
    logger.setLevel(config.log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [
        _formatted(logging.FileHandler(log_file_path(config)), _FILE_FORMAT)
    ]
    if console:
        handlers.append(_formatted(logging.StreamHandler(), _CONSOLE_FORMAT))

    for handler in handlers:
        handler.setLevel(config.log_level)
        logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    return handler
