"""Task API: list, categories, get, create, update, change status, delete.

Reads go through the cache-aside TaskService; domain exceptions propagate to
the registered exception handlers (404 / 409 / 400).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from taskboard.api.v1.dependencies import get_task_service
from taskboard.application.dtos.task import TaskData, TaskFilter
from taskboard.application.services.task_service import TaskService
from taskboard.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from taskboard.domain.enums import Priority, TaskStatus
from taskboard.schemas.task import (
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
    search: Annotated[str | None, Query(max_length=200)] = None,
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    category: Annotated[str | None, Query(max_length=50)] = None,
    overdue: bool | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
):
    """List tasks (priority first, then due date) with filters and paging."""
    task_filter = TaskFilter(
        search_term=search,
        status=status,
        priority=priority,
        category=category,
        is_overdue=overdue,
    )
    result = await service.get_task_list(task_filter, page, page_size)
    return TaskListResponse.model_validate(result)


@router.get("/categories", response_model=list[str])
async def list_categories(
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Distinct task categories, sorted."""
    return await service.get_categories()


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get task by id."""
    return TaskResponse.model_validate(await service.get_task(task_id))


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task (status starts as pending)."""
    created = await service.create_task(
        TaskData(
            description=body.description,
            priority=body.priority,
            category=body.category,
            notes=body.notes,
            due_date=body.due_date,
        )
    )
    return TaskResponse.model_validate(created)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Replace a task's writable fields."""
    updated = await service.update_task(
        task_id,
        TaskData(
            description=body.description,
            status=body.status,
            priority=body.priority,
            category=body.category,
            notes=body.notes,
            due_date=body.due_date,
        ),
    )
    return TaskResponse.model_validate(updated)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: int,
    body: TaskStatusUpdateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Change only the status (completed tasks cannot be reopened)."""
    updated = await service.update_task_status(task_id, body.status)
    return TaskResponse.model_validate(updated)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    """Delete a task."""
    await service.delete_task(task_id)
    return Response(status_code=204)
