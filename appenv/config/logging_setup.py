"""Logging configuration for console and log-directory file sinks."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"
LOG_FILE_NAME: Final[str] = "app.log"
LOG_ERROR_FILE_NAME: Final[str] = "error.log"
LOG_RETENTION_DAYS: Final[int] = 30

_NOISY_LOGGERS: Final[tuple[str, ...]] = ("uvicorn.access",)
_HANDLER_MARKER: Final[str] = "_appenv_handler"


def config_configure_logging(log_dir: Path, level: str = "INFO") -> list[logging.Handler]:
    """Install console, daily rotating and error-only file handlers on the root logger.

    Handlers installed by a previous call are closed and replaced. The log
    directory must already exist.

    Args:
        log_dir: Directory receiving `app.log` and `error.log`.
        level: Console log level name.

    Returns:
        list[logging.Handler]: Handlers installed by this call.

    Raises:
        OSError: Raised when log files cannot be opened.
    """

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.getLevelName(level.upper()))

    file_handler = TimedRotatingFileHandler(
        Path(log_dir) / LOG_FILE_NAME,
        when="midnight",
        backupCount=LOG_RETENTION_DAYS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)

    error_handler = logging.FileHandler(Path(log_dir) / LOG_ERROR_FILE_NAME, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)

    handlers: list[logging.Handler] = [console_handler, file_handler, error_handler]
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(logging.DEBUG)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    return handlers
