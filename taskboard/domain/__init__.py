"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskboard.domain.enums import AuditAction, Priority, TaskStatus
from taskboard.domain.exceptions import (
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TaskboardException,
    TaskNotFoundException,
    ValidationException,
)

__all__ = [
    # Enums
    "AuditAction",
    "Priority",
    "TaskStatus",
    # Exceptions
    "InvalidStatusTransitionException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TaskboardException",
    "TaskNotFoundException",
    "ValidationException",
]
