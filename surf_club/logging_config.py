"""
Logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go and how they look. JSON lines are rendered by
structlog's ``ProcessorFormatter`` on top of the stdlib handler.
"""
import logging
import sys
from typing import Optional

import structlog

from surf_club.config import settings

ROOT_LOGGER = "surf_club"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Applied to every stdlib record before rendering
shared_processors = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def build_formatter(fmt: str) -> logging.Formatter:
    """JSON lines for ``fmt == "json"``, plain text otherwise."""
    if fmt != "json":
        return logging.Formatter(TEXT_FORMAT)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """Attach a single stdout handler to the application logger."""
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
