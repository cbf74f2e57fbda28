"""Package logger for capture_page.

The ``CapturePage`` logger stays silent until :func:`configure` is called (the
CLI does this from its ``--log-level``/``--log-file`` options). Keys, secrets
and signed URLs are never passed to it.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

LOGGER_NAME: Final[str] = "CapturePage"
DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

LOG_FILE_MAX_BYTES: Final[int] = 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 2

logger: logging.Logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Send package log records to stderr and, if given, to a rotating file.

    Command output goes to stdout, so console logging uses stderr.
    """
    formatter = logging.Formatter(log_format)
    if replace_handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        rotating = RotatingFileHandler(
            Path(log_file),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        rotating.setFormatter(formatter)
        logger.addHandler(rotating)

    logger.setLevel(level)
    logger.propagate = False
    return logger


__all__ = ["logger", "configure", "LOGGER_NAME", "DEFAULT_FORMAT"]
