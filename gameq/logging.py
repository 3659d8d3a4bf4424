"""
Logging helpers

Every gameq module logs through ``get_logger(component)``, which names its
stdlib logger ``gameq.<component>`` (``gameq.address``, ``gameq.pool``,
``gameq.protocols``, ...). The library itself never configures logging;
applications embedding it call ``setup_logging`` once, or wire the
``gameq`` stdlib logger into their own configuration.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog
import structlog.stdlib

from gameq.config import settings

LOGGER_NAME = "gameq"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(component: Optional[str] = None):
    """structlog logger for a gameq component, backed by ``gameq.<component>``"""
    name = f"{LOGGER_NAME}.{component}" if component else LOGGER_NAME
    return structlog.get_logger(name)


def _build_file_handler(filename: str) -> RotatingFileHandler:
    log_dir: Path = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{filename}.log"
    handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    filename: str = LOGGER_NAME,
) -> logging.Logger:
    """
    Route gameq's structlog events to the ``gameq`` stdlib logger.

    Handlers previously installed by this function are replaced, so calling
    it again only changes the level and destinations.

    Args:
        level: Minimum level for gameq loggers
        log_to_file: Also write to ``settings.log_dir/<filename>.log``
        filename: Log file name without extension

    Returns:
        The configured ``gameq`` stdlib logger
    """
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.addHandler(logging.StreamHandler())
    if log_to_file:
        root.addHandler(_build_file_handler(filename))
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    get_logger("logging").info("logging_initialized", level=logging.getLevelName(level))
    return root
