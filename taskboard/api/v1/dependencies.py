"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the DB session, the shared cache service,
the audit log repository and the task use cases. Routes depend only on
these dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.interfaces.repositories import (
    IAuditLogRepository,
    ITaskRepository,
)
from taskboard.application.services.task_service import TaskService
from taskboard.core.config import Settings, get_settings
from taskboard.infrastructure.cache.tiered_cache import CacheService
from taskboard.infrastructure.persistence.database import get_db
from taskboard.infrastructure.persistence.repositories import (
    AuditLogRepository,
    TaskRepository,
)


def get_cache(request: Request) -> CacheService:
    """Return the process-wide CacheService built by the lifespan."""
    return request.app.state.cache


async def get_task_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ITaskRepository:
    """Task repository bound to the request session."""
    return TaskRepository(db)


async def get_audit_log_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IAuditLogRepository:
    """Append-only audit log repository bound to the request session."""
    return AuditLogRepository(db)


async def get_task_service(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    audit_repo: Annotated[IAuditLogRepository, Depends(get_audit_log_repo)],
    cache: Annotated[CacheService, Depends(get_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TaskService:
    """TaskService with audit trail and per-key-family TTLs from settings."""
    return TaskService(
        task_repo,
        cache,
        audit_repo=audit_repo,
        task_ttl=timedelta(seconds=settings.cache_ttl_task),
        list_ttl=timedelta(seconds=settings.cache_ttl_task_list),
        categories_ttl=timedelta(seconds=settings.cache_ttl_categories),
    )
