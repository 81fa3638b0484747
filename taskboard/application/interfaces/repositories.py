"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from taskboard.domain.enums import AuditAction, TaskStatus

if TYPE_CHECKING:
    from taskboard.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
    from taskboard.application.dtos.task import TaskData, TaskFilter, TaskResult


class ITaskRepository(Protocol):
    """Protocol for the task backing store (DIP)."""

    async def get_all(
        self, task_filter: TaskFilter, page: int, page_size: int
    ) -> tuple[list[TaskResult], int]:
        """Return one page of filtered tasks and the total match count."""

    async def get_by_id(self, task_id: int) -> TaskResult | None:
        """Return task by ID."""

    async def add(self, data: TaskData) -> TaskResult:
        """Insert a task and return it with its generated id."""

    async def update(self, task_id: int, data: TaskData) -> TaskResult | None:
        """Overwrite all writable fields; None if the task does not exist."""

    async def update_status(
        self, task_id: int, status: TaskStatus
    ) -> TaskResult | None:
        """Change only the status; None if the task does not exist."""

    async def delete(self, task_id: int) -> bool:
        """Delete task; return False if it did not exist."""

    async def get_categories(self) -> list[str]:
        """Return distinct non-empty categories, sorted."""


class IAuditLogRepository(Protocol):
    """Protocol for the task audit log (DIP). Append-only."""

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit record; return it with id and timestamp."""

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        entity_id: int | None = None,
        action: AuditAction | None = None,
    ) -> list[AuditLogResult]:
        """Return audit records, newest first, with optional filters."""

    async def count(
        self,
        *,
        entity_id: int | None = None,
        action: AuditAction | None = None,
    ) -> int:
        """Return the number of audit records matching the filters."""
