# === FILE: site_cache/logger.py ===
"""Logging for **SiteCache**.

One project logger, ``SiteCache``, writing to stdout and optionally to a
rotating log file::

    from site_cache.logger import logger, trace
    logger.info("request: url=%s", url)
    trace("storage: read %s len=%d", path, size)

``TRACE`` (5) sits below ``DEBUG`` and is used for storage reads and writes.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteCache"

TRACE: Final[int] = 5
logging.addLevelName(TRACE, "TRACE")

logger: logging.Logger = logging.getLogger(_LOGGER_NAME)


def trace(msg: str, *args: object) -> None:
    """Log *msg* at the ``TRACE`` level on the project logger."""
    logger.log(TRACE, msg, *args)


def configure(level: Union[int, str] = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Replace the handlers of the project logger and apply *level*.

    *log_file* adds a rotating file handler (5 MiB, 3 backups) next to stdout.
    """
    formatter = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )

    logger.setLevel(level)
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


configure()

__all__ = ["TRACE", "logger", "trace", "configure"]
