"""Pytest configuration and fixtures for taskboard.

Uses taskboard.main:app for HTTP tests and a throwaway SQLite file (aiosqlite)
per test for DB-dependent fixtures. The remote cache tier is disabled for the
app; cache unit tests drive CacheService with a mocked remote tier and a
fake clock.
"""

import os

# Environment must be in place before taskboard.main builds the app.
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./taskboard-test.db")

from collections.abc import AsyncIterator, Iterator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard.core.config import get_settings
from taskboard.infrastructure.cache import CacheService, CacheSettings
from taskboard.infrastructure.persistence import models  # noqa: F401
from taskboard.infrastructure.persistence.database import Base
from taskboard.main import app


class FakeClock:
    """Monotonic clock stand-in; advance() moves time forward."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_settings() -> CacheSettings:
    """Default cache timings (2 minute retry interval)."""
    return CacheSettings()


@pytest.fixture
def remote() -> AsyncMock:
    """Remote tier double that is always available and always misses."""
    mock = AsyncMock()
    mock.get.return_value = None
    return mock


@pytest.fixture
def cache(
    remote: AsyncMock, cache_settings: CacheSettings, clock: FakeClock
) -> CacheService:
    """CacheService over a mocked remote tier, sharing the fake clock."""
    return CacheService.create(cache_settings, remote, clock=clock)


@pytest.fixture
def local_only_cache(clock: FakeClock) -> CacheService:
    """CacheService with no remote tier configured."""
    return CacheService.create(CacheSettings(), None, clock=clock)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch) -> Iterator[None]:
    """Point DATABASE_URL at a fresh SQLite file and disable Redis."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("REDIS_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def db_session(tmp_path) -> AsyncIterator[AsyncSession]:
    """Database session on a fresh SQLite file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def client(isolated_settings) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), lifespan included.

    ASGITransport does not send lifespan events, so startup and shutdown are
    driven explicitly around the client.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
