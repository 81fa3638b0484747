"""DTOs for the task audit trail (append-only change log)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from taskboard.domain.enums import AuditAction


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit record.

    old_values / new_values hold only the fields that changed: a create has
    no old_values and a delete has no new_values.
    """

    entity_name: str
    entity_id: int
    action: AuditAction
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None


@dataclass(frozen=True)
class AuditLogResult:
    """Single stored audit record."""

    id: int
    entity_name: str
    entity_id: int
    action: AuditAction
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    timestamp: datetime
