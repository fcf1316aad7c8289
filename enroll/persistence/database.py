"""Async engine and session factory for the identity store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from enroll.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    Every statement is bounded by `database.command_timeout`; a timeout
    surfaces from the repositories as StoreError.

    Args:
        settings: Application settings with database URL and pool sizes

    Returns:
        Configured async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={
            "command_timeout": database.command_timeout,
            "server_settings": {"application_name": "enroll"},
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped units of work.

    Records are mapped by hand, so nothing relies on ORM expiry or autoflush.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
