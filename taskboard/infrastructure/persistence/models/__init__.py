"""Persistence models: ORM entities and mixins."""

from taskboard.infrastructure.persistence.models.audit_log import AuditLog
from taskboard.infrastructure.persistence.models.mixins import CreatedAtMixin
from taskboard.infrastructure.persistence.models.task import Task

__all__ = [
    "AuditLog",
    "CreatedAtMixin",
    "Task",
]
