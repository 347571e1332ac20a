"""Logging configuration for the API process.

Module loggers under ``together`` (routes, guard, client SDK) go to stdout;
services report through logfire spans instead.
"""

import logging
import sys

from together.config import Settings

# Libraries whose request-level logging duplicates the logfire spans
_QUIET_LOGGERS = ("httpx", "httpcore", "stripe", "uvicorn.access")


def resolve_level(settings: Settings) -> int:
    """Level from ``OBSERVABILITY__LOG_LEVEL``, else DEBUG or INFO."""
    override = settings.observability.log_level
    if override:
        level = logging.getLevelName(override.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = resolve_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger("together").setLevel(level)
    guard_level = logging.NOTSET
    if not settings.observability.log_guard_redirects:
        guard_level = max(level, logging.WARNING)
    logging.getLogger("together.interface.api.guard").setLevel(guard_level)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )
