"""Standard library logging setup.

Application code logs through logfire directly; this routes records from
libraries that use ``logging`` (uvicorn, sqlalchemy, alembic) to logfire
as well, and keeps a plain stdout handler for local runs.
"""

import logging
import sys

import logfire

from diary.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "multipart", "sqlalchemy.engine")


def log_level(settings: Settings) -> int:
    """Pick the root level for an environment."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger.

    Must run after ``configure_logfire`` so the logfire handler has a
    configured exporter to write to.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    handlers: list[logging.Handler] = [logfire.LogfireLoggingHandler()]
    if settings.environment in ("development", "test"):
        handlers.append(logging.StreamHandler(sys.stdout))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
