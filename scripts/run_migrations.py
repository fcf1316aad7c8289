#!/usr/bin/env python3
"""Apply identity store migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c41d2a9e7f0
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from enroll.config import Settings
from enroll.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)
    revision = argv[0] if argv else "head"

    try:
        with logfire.span("run_migrations", revision=revision):
            command.upgrade(Config("alembic.ini"), revision)
    except Exception as e:
        logfire.error(
            "Database migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Deployment must stop on a broken schema
        raise

    logfire.info("Database migrations applied", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
