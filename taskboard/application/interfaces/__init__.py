"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from taskboard.infrastructure or taskboard.api.
"""

from taskboard.application.interfaces.repositories import (
    IAuditLogRepository,
    ITaskRepository,
)
from taskboard.application.interfaces.services import ICacheService

__all__ = [
    "IAuditLogRepository",
    "ICacheService",
    "ITaskRepository",
]
