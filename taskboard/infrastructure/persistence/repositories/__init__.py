"""Persistence repositories. Re-exports for dependency injection."""

from taskboard.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.infrastructure.persistence.repositories.task_repo import TaskRepository

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "TaskRepository",
]
