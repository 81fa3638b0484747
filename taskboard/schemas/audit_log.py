"""Response schemas for the audit log API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from taskboard.domain.enums import AuditAction


class AuditLogEntryResponse(BaseModel):
    """Single audit record (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    entity_name: str
    entity_id: int
    action: AuditAction
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    timestamp: datetime


class AuditLogListResponse(BaseModel):
    """Paginated list of audit records, newest first."""

    items: list[AuditLogEntryResponse]
    skip: int
    limit: int
    total: int
