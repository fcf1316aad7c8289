"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Identity created", user_id=str(record.user_id))

    # Manual spans for critical operations
    with logfire.span("register_with_email"):
        ...

Attribute values whose names look like credentials (password, token,
secret, verifier) are scrubbed before export.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from enroll.config import Settings

# Added to Logfire's default scrubbing patterns
SCRUB_PATTERNS = ["verifier", "token_hash", "access_token", "client_secret"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled by OBSERVABILITY__SEND_TO_LOGFIRE, or implicitly
    when OBSERVABILITY__LOGFIRE_TOKEN is set. Otherwise output is console only.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "enroll",
        "service_version": "1.0.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL queries and their duration."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound OAuth provider requests."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
