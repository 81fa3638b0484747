"""Pydantic request/response schemas for the API."""

from taskboard.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from taskboard.schemas.health import CacheHealthResponse, HealthResponse
from taskboard.schemas.task import (
    PaginationResponse,
    TaskCreateRequest,
    TaskFilterResponse,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)

__all__ = [
    "AuditLogEntryResponse",
    "AuditLogListResponse",
    "CacheHealthResponse",
    "HealthResponse",
    "PaginationResponse",
    "TaskCreateRequest",
    "TaskFilterResponse",
    "TaskListResponse",
    "TaskResponse",
    "TaskStatusUpdateRequest",
    "TaskUpdateRequest",
]
