#!/usr/bin/env python3
"""Validate startup configuration with Logfire error tracking.

Builds the production container and resolves the components that check
their configuration on construction (encryption key, OAuth credentials).
"""

import asyncio
import sys

import logfire

from enroll.config import Settings
from enroll.util.di.container import check_configuration, create_container
from enroll.util.error import ConfigurationError
from enroll.util.logging import setup_logging
from enroll.util.observability import configure_logfire, instrument_httpx


async def _check() -> None:
    container = create_container()
    try:
        await check_configuration(container)
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)
    instrument_httpx()

    try:
        asyncio.run(_check())
    except ConfigurationError as e:
        logfire.error(
            "Configuration invalid",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        return 1

    logfire.info("Configuration valid", environment=settings.environment)
    return 0


if __name__ == "__main__":
    sys.exit(main())
