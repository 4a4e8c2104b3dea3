"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from compliance_api.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured record store."""
    engine_kwargs: dict[str, Any] = {
        # Never echo SQL statements as they may contain personal data
        "echo": False,
    }
    if settings.is_sqlite:
        engine_kwargs["connect_args"] = {"timeout": settings.database_command_timeout_seconds}
    else:
        engine_kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            # Validate connections before checkout to detect stale connections
            pool_pre_ping=True,
            # Recycle connections after 1 hour (important for cloud proxies)
            pool_recycle=3600,
            connect_args={"command_timeout": settings.database_command_timeout_seconds},
        )
    return create_async_engine(settings.async_database_url, **engine_kwargs)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(get_settings())
async_session_maker = build_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    One session per request: acquired on entry, committed when the endpoint
    completes, rolled back on any failure and always released.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
