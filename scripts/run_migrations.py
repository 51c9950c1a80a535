#!/usr/bin/env python3
"""Apply Alembic migrations up to head, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from diary.config import Settings
from diary.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database schema."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")

    try:
        with logfire.span("database_migrations", environment=settings.environment):
            command.upgrade(alembic_cfg, "head")
        logfire.info("Database schema is at head")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than start on a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
