"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task repository, tiered cache).
"""

from taskboard.application.interfaces import ICacheService, ITaskRepository
from taskboard.application.services.task_service import TaskService

__all__ = [
    "ICacheService",
    "ITaskRepository",
    "TaskService",
]
