#!/usr/bin/env python3
"""Start the DiaryFi API with Logfire tracking of startup errors."""

import sys

import logfire
import uvicorn

from diary.config import Settings
from diary.util.logging import setup_logging
from diary.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the app with uvicorn."""
    settings = Settings()

    # Configure before the app module is imported so instrumentation attaches
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting DiaryFi API",
            environment=settings.environment,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "diary.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
