"""
Async database session management.
Design: the app builds one pooled engine from its settings; one session per request (no connection leaks).
"""

from collections.abc import AsyncGenerator
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from houseback.config import Settings


def _connect_args(settings: Settings) -> dict[str, Any]:
    """Driver-level timeouts and TLS. Only asyncpg understands these keys."""
    if not settings.uses_asyncpg:
        return {}
    args: dict[str, Any] = {
        "timeout": settings.db_connect_timeout,
        "command_timeout": settings.db_command_timeout,
    }
    if settings.db_ssl:
        # Encrypted, certificate not verified
        args["ssl"] = "require"
    return args


def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.sqlalchemy_database_url
    pool_args: dict[str, Any] = {}
    if settings.uses_asyncpg:
        pool_args = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_timeout": settings.db_pool_timeout,
        }
    return create_async_engine(
        url,
        echo=settings.debug,
        hide_parameters=True,  # Keep bound values (hashes, emails) out of error messages
        pool_pre_ping=True,  # Verify connections before use
        connect_args=_connect_args(settings),
        **pool_args,
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: one session per request."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the app's factory. Writers commit themselves; leftovers roll back on error."""
    async with request.app.state.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database(engine: AsyncEngine) -> None:
    """Round-trip a trivial query. Raises whatever the driver raises when the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
