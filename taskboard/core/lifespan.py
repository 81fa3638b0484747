"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, DB schema,
tiered cache, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskboard.core.config import get_settings
from taskboard.infrastructure.cache import CacheService, CacheSettings, RedisRemoteCache
from taskboard.infrastructure.persistence.database import dispose_engine, init_models
from taskboard.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, DB schema, cache (remote tier only if
    redis_enabled). Shutdown order: cache close, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    await init_models()

    remote = RedisRemoteCache.from_settings(settings) if settings.redis_enabled else None
    app.state.cache = CacheService.create(CacheSettings.from_settings(settings), remote)
    logger.info(
        "Cache ready (remote tier: %s)",
        f"{settings.redis_host}:{settings.redis_port}" if remote else "disabled",
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.close()
        app.state.cache = None
        logger.info("Cache closed")

    await dispose_engine()
