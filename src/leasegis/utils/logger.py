"""
Logging Configuration

leasegis is a library: modules only ever call ``get_logger(__name__)`` and
emit snake_case events with keyword context. Nothing here configures
logging on import. The host application opts in once at startup:

    from src.leasegis.utils.logger import setup_logging

    setup_logging()                      # level/format from settings
    setup_logging(level="DEBUG", log_format="console")

Every event then carries the engine's package name and version next to the
deployment environment, so lines from the engine can be told apart from
the host's own.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from config.settings import settings
from src import __version__

PACKAGE_NAME = "leasegis"


def add_engine_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Tag an event with the engine identity and deployment environment.

    Keys the caller already bound are left alone.
    """
    event_dict.setdefault("package", PACKAGE_NAME)
    event_dict.setdefault("version", __version__)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def build_processors(log_format: str) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_context,
    ]

    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None
) -> structlog.BoundLogger:
    """
    Route engine logs through the standard library at the given level.

    Args:
        level: Log level name (settings.log_level when None)
        log_format: "json" or "console" (settings.log_format when None)

    Returns:
        Logger bound to the engine package name
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name),
    )

    structlog.configure(
        processors=build_processors(log_format or settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(PACKAGE_NAME)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a logger for an engine module.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name or PACKAGE_NAME)
