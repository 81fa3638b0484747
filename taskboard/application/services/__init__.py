"""Application services: task management over the tiered cache."""

from taskboard.application.services.task_service import TaskService

__all__ = ["TaskService"]
