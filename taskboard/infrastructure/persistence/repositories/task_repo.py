"""Task repository: filtered, paginated listing plus CRUD. Implements ITaskRepository."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import and_, case, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.dtos.task import TaskData, TaskFilter, TaskResult
from taskboard.domain.enums import Priority, TaskStatus
from taskboard.infrastructure.persistence.models.task import Task
from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.shared.utils.datetime import ensure_utc, utc_today

logger = logging.getLogger(__name__)

# Higher rank sorts first.
_PRIORITY_RANK = case(
    {p.value: p.rank for p in Priority},
    value=Task.priority,
    else_=-1,
)


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        description=t.description,
        status=TaskStatus(t.status),
        priority=Priority(t.priority),
        category=t.category,
        notes=t.notes,
        due_date=t.due_date,
        created_at=ensure_utc(t.created_at),
    )


def _filter_conditions(task_filter: TaskFilter) -> list[Any]:
    conditions: list[Any] = []
    if task_filter.search_term:
        term = f"%{task_filter.search_term.lower()}%"
        conditions.append(
            or_(
                func.lower(Task.description).like(term),
                func.lower(Task.category).like(term),
                func.lower(Task.notes).like(term),
            )
        )
    if task_filter.status is not None:
        conditions.append(Task.status == task_filter.status.value)
    if task_filter.priority is not None:
        conditions.append(Task.priority == task_filter.priority.value)
    if task_filter.category:
        conditions.append(Task.category == task_filter.category)
    if task_filter.is_overdue is not None:
        today = utc_today()
        if task_filter.is_overdue:
            conditions.append(and_(Task.due_date.is_not(None), Task.due_date < today))
        else:
            conditions.append(or_(Task.due_date.is_(None), Task.due_date >= today))
    return conditions


class TaskRepository(BaseRepository[Task]):
    """Task repository. Every write commits before returning."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_all(
        self, task_filter: TaskFilter, page: int, page_size: int
    ) -> tuple[list[TaskResult], int]:
        """Return one page ordered by priority (highest first), then due date."""
        conditions = _filter_conditions(task_filter)
        total = await self.db.execute(
            select(func.count(Task.id)).where(*conditions)
        )
        total_items = total.scalar() or 0
        q = (
            select(Task)
            .where(*conditions)
            .order_by(_PRIORITY_RANK.desc(), Task.due_date.asc().nulls_last(), Task.id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.db.execute(q)
        return [_to_result(t) for t in result.scalars().all()], total_items

    async def get_by_id(self, task_id: int) -> TaskResult | None:
        task = await self.get_entity(task_id)
        return _to_result(task) if task else None

    async def add(self, data: TaskData) -> TaskResult:
        """Insert a task and return it with its generated id."""
        task = Task(
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            category=data.category,
            notes=data.notes,
            due_date=data.due_date,
        )
        created = await self.create(task)
        logger.debug("Created task %s", created.id)
        return _to_result(created)

    async def update(self, task_id: int, data: TaskData) -> TaskResult | None:
        task = await self.get_entity(task_id)
        if not task:
            return None
        task.description = data.description
        task.status = data.status.value
        task.priority = data.priority.value
        task.category = data.category
        task.notes = data.notes
        task.due_date = data.due_date
        return _to_result(await self.save(task))

    async def update_status(
        self, task_id: int, status: TaskStatus
    ) -> TaskResult | None:
        task = await self.get_entity(task_id)
        if not task:
            return None
        task.status = status.value
        return _to_result(await self.save(task))

    async def delete(self, task_id: int) -> bool:
        task = await self.get_entity(task_id)
        if not task:
            return False
        await self.delete_entity(task)
        return True

    async def get_categories(self) -> list[str]:
        """Return distinct non-empty categories, sorted."""
        result = await self.db.execute(
            select(distinct(Task.category))
            .where(Task.category.is_not(None), Task.category != "")
            .order_by(Task.category.asc())
        )
        return [c for c in result.scalars().all() if c]
