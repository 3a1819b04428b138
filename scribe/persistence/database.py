"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from scribe.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Pool sizing comes from ``settings.database``; SQL echo follows ``debug``.
    Connections are tagged with the service name so they show up in
    ``pg_stat_activity``.

    Args:
        settings: Application settings

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": "scribe"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the request session factory.

    Sessions do not autoflush; repositories flush explicitly so unique
    violations surface inside their savepoints.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
