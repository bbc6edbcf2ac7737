"""
Logging configuration for the service.

``setup_logging`` configures the ``user_directory_api`` package logger
rather than the root logger, so the service's level applies even when
something else (uvicorn, pytest) has already set up root handlers.
It may be called repeatedly, e.g. by every ``create_app`` call: the
level is always updated, and handlers are only added when missing.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "user_directory_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path
        for handler in logger.handlers
    )


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  A file handler for the
        path is attached once; further calls with the same path do not
        duplicate it.

    A console handler is attached only when neither the package logger
    nor the root logger has one, so records are not printed twice when
    the host process already logs to the console.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not logger.handlers and not logging.getLogger().handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        if not _has_file_handler(logger, log_path):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
