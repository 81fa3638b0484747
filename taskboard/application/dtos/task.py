"""DTOs for tasks and task listings (no dependency on ORM).

All DTOs are plain dataclasses so they can be cached natively in the local
tier and round-trip through JSON (pydantic) in the remote tier.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from taskboard.core.constants import DEFAULT_PAGE_SIZE
from taskboard.domain.enums import Priority, TaskStatus
from taskboard.shared.utils.datetime import utc_today


@dataclass(frozen=True)
class TaskResult:
    """Task as returned by the repository and cached by TaskService."""

    id: int
    description: str
    status: TaskStatus
    priority: Priority
    category: str | None
    notes: str | None
    due_date: date | None
    created_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def is_overdue(self) -> bool:
        """Due date strictly before today (UTC)."""
        return self.due_date is not None and self.due_date < utc_today()


@dataclass(frozen=True)
class TaskData:
    """Writable task fields for create and full update."""

    description: str
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    notes: str | None = None
    due_date: date | None = None


@dataclass(frozen=True)
class TaskFilter:
    """Listing filter. Use normalized() before building cache keys."""

    search_term: str | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    category: str | None = None
    is_overdue: bool | None = None

    def normalized(self) -> TaskFilter:
        """Return a copy with blank search term / category turned into None."""
        search = self.search_term.strip() if self.search_term else None
        category = self.category.strip() if self.category else None
        return replace(self, search_term=search or None, category=category or None)


@dataclass(frozen=True)
class PaginationInfo:
    """Page position within a listing."""

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        return (self.total_items + self.page_size - 1) // self.page_size

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True)
class TaskListResult:
    """One page of tasks with the filter and pagination that produced it."""

    tasks: list[TaskResult] = field(default_factory=list)
    filter: TaskFilter = field(default_factory=TaskFilter)
    pagination: PaginationInfo = field(default_factory=PaginationInfo)
