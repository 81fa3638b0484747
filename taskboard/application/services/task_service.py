"""Task application service: cache-aside reads and post-write invalidation.

Reads consult the cache first and populate it after a store hit. Every
mutation, once the store write has completed, appends an audit record and
then removes the task's own key, the task listing pattern (tasklist_*), and
the category summary when the mutation can change it. Cache failures are
invisible here: they read as misses.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from taskboard.application.dtos.audit_log import AuditLogEntryCreate
from taskboard.application.dtos.task import (
    PaginationInfo,
    TaskData,
    TaskFilter,
    TaskListResult,
    TaskResult,
)
from taskboard.application.interfaces.repositories import (
    IAuditLogRepository,
    ITaskRepository,
)
from taskboard.application.interfaces.services import ICacheService
from taskboard.domain.enums import AuditAction, TaskStatus
from taskboard.domain.exceptions import (
    InvalidStatusTransitionException,
    TaskNotFoundException,
    ValidationException,
)
from taskboard.shared.cache_keys import (
    categories_key,
    task_key,
    task_list_key,
    task_list_pattern,
)

logger = logging.getLogger(__name__)

AUDIT_ENTITY_NAME = "task"
_AUDITED_FIELDS = ("description", "status", "priority", "category", "notes", "due_date")


def _audit_value(value: Any) -> Any:
    """JSON-safe form of a task field (enum value, ISO date)."""
    enum_value = getattr(value, "value", None)
    if enum_value is not None:
        return enum_value
    if isinstance(value, date):
        return value.isoformat()
    return value


def _snapshot(task: TaskResult) -> dict[str, Any]:
    return {name: _audit_value(getattr(task, name)) for name in _AUDITED_FIELDS}


def _changed_fields(
    before: TaskResult, after: TaskResult
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Old and new values of the audited fields that differ."""
    old, new = _snapshot(before), _snapshot(after)
    changed = [name for name in _AUDITED_FIELDS if old[name] != new[name]]
    return {n: old[n] for n in changed}, {n: new[n] for n in changed}


class TaskService:
    """CRUD over tasks with cache-aside reads (ICacheService + ITaskRepository).

    When an audit repository is given, every mutation appends one
    AuditLogEntryCreate with the fields it changed.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        cache: ICacheService,
        *,
        audit_repo: IAuditLogRepository | None = None,
        task_ttl: timedelta = timedelta(minutes=30),
        list_ttl: timedelta = timedelta(minutes=5),
        categories_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self._repo = task_repo
        self._cache = cache
        self._audit_repo = audit_repo
        self.task_ttl = task_ttl
        self.list_ttl = list_ttl
        self.categories_ttl = categories_ttl

    async def get_task_list(
        self, task_filter: TaskFilter | None, page: int, page_size: int
    ) -> TaskListResult:
        """Return one page of tasks matching the filter, from cache if present."""
        task_filter = (task_filter or TaskFilter()).normalized()
        key = task_list_key(task_filter, page, page_size)
        cached = await self._cache.get(key, TaskListResult)
        if cached is not None:
            return cached
        tasks, total = await self._repo.get_all(task_filter, page, page_size)
        result = TaskListResult(
            tasks=tasks,
            filter=task_filter,
            pagination=PaginationInfo(
                current_page=page, page_size=page_size, total_items=total
            ),
        )
        await self._cache.set(key, result, self.list_ttl)
        return result

    async def get_task(self, task_id: int) -> TaskResult:
        """Return task by id, from cache if present.

        Raises:
            TaskNotFoundException: If no task has this id.
        """
        key = task_key(task_id)
        cached = await self._cache.get(key, TaskResult)
        if cached is not None:
            return cached
        task = await self._repo.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundException(task_id)
        await self._cache.set(key, task, self.task_ttl)
        return task

    async def get_categories(self) -> list[str]:
        """Return distinct task categories, from cache if present."""
        key = categories_key()
        cached = await self._cache.get(key, list[str])
        if cached is not None:
            return list(cached)
        categories = await self._repo.get_categories()
        await self._cache.set(key, list(categories), self.categories_ttl)
        return categories

    async def create_task(self, data: TaskData) -> TaskResult:
        """Create a task; invalidates listings and the category summary."""
        created = await self._repo.add(data)
        logger.info("Task created: %s", created.id)
        await self._audit(AuditAction.CREATE, created.id, None, _snapshot(created))
        await self._cache.remove(categories_key())
        await self._invalidate_task_lists()
        return created

    async def update_task(self, task_id: int, data: TaskData) -> TaskResult:
        """Replace a task's writable fields.

        Completed tasks keep their status and priority.

        Raises:
            TaskNotFoundException: If no task has this id.
            InvalidStatusTransitionException: If a completed task would be reopened.
            ValidationException: If a completed task's priority would change.
        """
        existing = await self._repo.get_by_id(task_id)
        if existing is None:
            raise TaskNotFoundException(task_id)
        self._check_transition(existing, data.status)
        if existing.is_completed and data.priority != existing.priority:
            raise ValidationException(
                "Priority of a completed task cannot change", field="priority"
            )
        updated = await self._repo.update(task_id, data)
        if updated is None:
            raise TaskNotFoundException(task_id)
        await self._audit(AuditAction.UPDATE, task_id, *_changed_fields(existing, updated))
        await self._cache.remove(task_key(task_id))
        if existing.category != updated.category:
            await self._cache.remove(categories_key())
        await self._invalidate_task_lists()
        return updated

    async def update_task_status(self, task_id: int, status: TaskStatus) -> TaskResult:
        """Change only the status of a task.

        Raises:
            TaskNotFoundException: If no task has this id.
            InvalidStatusTransitionException: If a completed task would be reopened.
        """
        existing = await self._repo.get_by_id(task_id)
        if existing is None:
            raise TaskNotFoundException(task_id)
        self._check_transition(existing, status)
        updated = await self._repo.update_status(task_id, status)
        if updated is None:
            raise TaskNotFoundException(task_id)
        await self._audit(
            AuditAction.UPDATE_STATUS,
            task_id,
            {"status": existing.status.value},
            {"status": updated.status.value},
        )
        await self._cache.remove(task_key(task_id))
        await self._invalidate_task_lists()
        return updated

    async def delete_task(self, task_id: int) -> None:
        """Delete a task; invalidates its key, listings and categories.

        Raises:
            TaskNotFoundException: If no task has this id.
        """
        existing = await self._repo.get_by_id(task_id)
        if existing is None or not await self._repo.delete(task_id):
            raise TaskNotFoundException(task_id)
        logger.info("Task deleted: %s", task_id)
        await self._audit(AuditAction.DELETE, task_id, _snapshot(existing), None)
        await self._cache.remove(task_key(task_id))
        await self._cache.remove(categories_key())
        await self._invalidate_task_lists()

    @staticmethod
    def _check_transition(existing: TaskResult, requested: TaskStatus) -> None:
        if existing.is_completed and requested != TaskStatus.COMPLETED:
            raise InvalidStatusTransitionException(
                existing.id, existing.status.value, requested.value
            )

    async def _audit(
        self,
        action: AuditAction,
        task_id: int,
        old_values: dict[str, Any] | None,
        new_values: dict[str, Any] | None,
    ) -> None:
        if self._audit_repo is None:
            return
        await self._audit_repo.create(
            AuditLogEntryCreate(
                entity_name=AUDIT_ENTITY_NAME,
                entity_id=task_id,
                action=action,
                old_values=old_values,
                new_values=new_values,
            )
        )

    async def _invalidate_task_lists(self) -> None:
        await self._cache.remove(task_list_pattern())
