"""Task API schemas."""

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.constants import DEFAULT_PAGE_SIZE
from taskboard.domain.enums import Priority, TaskStatus
from taskboard.shared.utils.datetime import utc_today

_PLACEHOLDER_DESCRIPTIONS = frozenset({"todo", "test", "task", "pending"})
_CATEGORY_PATTERN = re.compile(r"^[\w\s-]+$")


def _reject_markup(v: str | None, field_name: str) -> str | None:
    if v is not None and ("<" in v or ">" in v):
        raise ValueError(f"{field_name} cannot contain HTML tags")
    return v


def _check_description(v: str) -> str:
    v = v.strip()
    if len(v) < 3:
        raise ValueError("description must be at least 3 characters")
    if v.lower() in _PLACEHOLDER_DESCRIPTIONS:
        raise ValueError("description must be meaningful")
    _reject_markup(v, "description")
    return v


def _check_category(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    if not _CATEGORY_PATTERN.match(v):
        raise ValueError(
            "category can only contain letters, numbers, spaces, hyphens and underscores"
        )
    return v


class _TaskFields(BaseModel):
    """Fields shared by create and full update."""

    description: str = Field(..., min_length=3, max_length=200)
    priority: Priority = Priority.MEDIUM
    category: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=500)
    due_date: date | None = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _check_description(v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        return _check_category(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        return _reject_markup(v, "notes") or None


class TaskCreateRequest(_TaskFields):
    """Request body for creating a task. New tasks always start as pending."""

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: date | None) -> date | None:
        if v is not None and v < utc_today():
            raise ValueError("due_date cannot be in the past")
        return v


class TaskUpdateRequest(_TaskFields):
    """Request body for PUT (replaces every writable field)."""

    status: TaskStatus = TaskStatus.PENDING


class TaskStatusUpdateRequest(BaseModel):
    """Request body for PATCH /tasks/{id}/status."""

    status: TaskStatus


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    status: TaskStatus
    priority: Priority
    category: str | None
    notes: str | None
    due_date: date | None
    created_at: datetime
    is_completed: bool
    is_overdue: bool


class PaginationResponse(BaseModel):
    """Page position within a task listing."""

    model_config = ConfigDict(from_attributes=True)

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0
    has_previous_page: bool = False
    has_next_page: bool = False


class TaskFilterResponse(BaseModel):
    """Filter echoed back with a listing."""

    model_config = ConfigDict(from_attributes=True)

    search_term: str | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    category: str | None = None
    is_overdue: bool | None = None


class TaskListResponse(BaseModel):
    """One page of tasks."""

    model_config = ConfigDict(from_attributes=True)

    tasks: list[TaskResponse]
    filter: TaskFilterResponse
    pagination: PaginationResponse
