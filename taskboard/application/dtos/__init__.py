"""Application DTOs: data passed between layers (no ORM types)."""

from taskboard.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from taskboard.application.dtos.task import (
    PaginationInfo,
    TaskData,
    TaskFilter,
    TaskListResult,
    TaskResult,
)

__all__ = [
    "AuditLogEntryCreate",
    "AuditLogResult",
    "PaginationInfo",
    "TaskData",
    "TaskFilter",
    "TaskListResult",
    "TaskResult",
]
