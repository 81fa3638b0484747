"""Domain exceptions for taskboard.

Business rule violations raised by the application layer. Each carries a
machine-readable error_code that the HTTP layer maps to a status code.
"""

from typing import Any


class TaskboardException(Exception):
    """Root of all taskboard errors.

    Attributes:
        message: Human-readable description.
        error_code: Stable code for clients; the class name when not given.
        details: Extra context such as the offending field or id.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Error body returned by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskboardException):
    """A request is well-formed but breaks a business rule."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class ResourceNotFoundException(TaskboardException):
    """No record of resource_type with resource_id exists."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TaskNotFoundException(ResourceNotFoundException):
    """Task id does not exist in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__("task", str(task_id))
        self.error_code = "TASK_NOT_FOUND"


class InvalidStatusTransitionException(TaskboardException):
    """Status change not allowed; completed tasks are final."""

    def __init__(self, task_id: int, current: str, requested: str) -> None:
        super().__init__(
            f"Task {task_id} cannot move from '{current}' to '{requested}'",
            "INVALID_STATUS_TRANSITION",
            {"task_id": task_id, "current": current, "requested": requested},
        )


class SqlNotConfiguredException(TaskboardException):
    """DATABASE_URL is empty, so the task store is unavailable."""

    def __init__(self) -> None:
        super().__init__(
            "Task store is not configured: set DATABASE_URL",
            "SERVICE_UNAVAILABLE",
        )
