"""Task store plumbing: lazy async engine, session factory and declarative Base.

Engine and session factory are created lazily on first use (get_db /
init_models) so import does not trigger Settings validation. Tables are
created at startup by init_models().
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from taskboard.core.config import get_settings
from taskboard.domain.exceptions import SqlNotConfiguredException

logger = logging.getLogger(__name__)

# Populated by _ensure_engine(); reset by dispose_engine().
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    if not settings.database_url:
        return
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.database_url.startswith("sqlite"):
        engine_kwargs.update(pool_pre_ping=True, pool_recycle=3600)
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class Base(DeclarativeBase):
    """Declarative base for taskboard ORM models."""


async def init_models() -> None:
    """Create all tables that do not exist yet. Call on app startup."""
    _ensure_engine()
    if engine is None:
        raise SqlNotConfiguredException()
    from taskboard.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def dispose_engine() -> None:
    """Dispose the engine and reset the session factory. Call on app shutdown."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    if AsyncSessionLocal is None:
        logger.error("SQL database not configured: set DATABASE_URL")
        raise SqlNotConfiguredException()
    return AsyncSessionLocal


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency (one session per request).

    Repository write methods commit their own unit of work, so cache
    invalidation that follows a write always sees committed data.
    Raises SqlNotConfiguredException when DATABASE_URL is empty.
    """
    async with _session_factory()() as session:
        yield session

