#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import logging
import sys

import logfire
import uvicorn

from together.config import Settings
from together.util.logging import resolve_level, setup_logging
from together.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting ListTogether API",
            port=settings.port,
            environment=settings.environment,
            frontend_url=settings.api.frontend_url,
        )

        # Importing the app configures Logfire again (no-op)
        uvicorn.run(
            "together.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level=logging.getLevelName(resolve_level(settings)).lower(),
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
