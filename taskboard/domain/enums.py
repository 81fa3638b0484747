"""Domain enumerations for the Taskboard application.

Enums represent fixed sets of domain values (task status, priority and
audited actions).
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task lifecycle status.

    Completed is terminal: a completed task cannot move back to another status.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class Priority(str, Enum):
    """Task priority, ordered from lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Position in ascending priority order (low=0, urgent=3)."""
        return list(Priority).index(self)

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid priority values as strings."""
        return [priority.value for priority in cls]


class AuditAction(str, Enum):
    """Kind of task mutation recorded in the audit log."""

    CREATE = "create"
    UPDATE = "update"
    UPDATE_STATUS = "update_status"
    DELETE = "delete"
