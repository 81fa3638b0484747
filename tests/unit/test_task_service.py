"""TaskService unit tests with a mocked repository.

Cache-aside flows run against a local-only CacheService; invalidation
ordering is checked against an AsyncMock cache.
"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, call

import pytest

from taskboard.application.dtos.task import TaskData, TaskFilter, TaskListResult, TaskResult
from taskboard.application.services.task_service import TaskService
from taskboard.domain.enums import AuditAction, Priority, TaskStatus
from taskboard.domain.exceptions import (
    InvalidStatusTransitionException,
    TaskNotFoundException,
    ValidationException,
)


def _task(
    task_id: int = 1,
    status: TaskStatus = TaskStatus.PENDING,
    priority: Priority = Priority.MEDIUM,
    category: str | None = "Work",
) -> TaskResult:
    return TaskResult(
        id=task_id,
        description="Prepare slides",
        status=status,
        priority=priority,
        category=category,
        notes=None,
        due_date=date(2030, 3, 1),
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


def _data(**overrides) -> TaskData:
    fields = {
        "description": "Prepare slides",
        "status": TaskStatus.PENDING,
        "priority": Priority.MEDIUM,
        "category": "Work",
    }
    fields.update(overrides)
    return TaskData(**fields)


@pytest.fixture
def task_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = _task()
    repo.get_all.return_value = ([_task()], 1)
    repo.get_categories.return_value = ["Home", "Work"]
    repo.add.return_value = _task(2)
    repo.update.return_value = _task()
    repo.update_status.return_value = _task(status=TaskStatus.COMPLETED)
    repo.delete.return_value = True
    return repo


@pytest.fixture
def service(task_repo, local_only_cache) -> TaskService:
    return TaskService(task_repo, local_only_cache)


@pytest.fixture
def mock_cache() -> AsyncMock:
    cache = AsyncMock()
    cache.get.return_value = None
    return cache


async def test_get_task_reads_store_once(service, task_repo) -> None:
    first = await service.get_task(1)
    second = await service.get_task(1)
    assert first == second == _task()
    task_repo.get_by_id.assert_awaited_once_with(1)


async def test_get_task_missing_raises_and_is_not_cached(service, task_repo) -> None:
    task_repo.get_by_id.return_value = None
    with pytest.raises(TaskNotFoundException):
        await service.get_task(99)
    with pytest.raises(TaskNotFoundException):
        await service.get_task(99)
    assert task_repo.get_by_id.await_count == 2


async def test_get_task_list_builds_pagination_and_caches(service, task_repo) -> None:
    task_repo.get_all.return_value = ([_task()], 23)

    result = await service.get_task_list(TaskFilter(search_term="  "), 2, 10)
    again = await service.get_task_list(TaskFilter(), 2, 10)

    assert isinstance(result, TaskListResult)
    assert result.pagination.total_pages == 3
    assert result.pagination.has_previous_page and result.pagination.has_next_page
    assert result.filter.search_term is None
    assert again is result
    task_repo.get_all.assert_awaited_once_with(TaskFilter(), 2, 10)


async def test_get_categories_cached(service, task_repo) -> None:
    assert await service.get_categories() == ["Home", "Work"]
    assert await service.get_categories() == ["Home", "Work"]
    task_repo.get_categories.assert_awaited_once()


async def test_get_categories_result_is_detached_from_cache(service) -> None:
    first = await service.get_categories()
    first.append("Garden")
    second = await service.get_categories()
    second.clear()
    assert await service.get_categories() == ["Home", "Work"]


async def test_create_invalidates_lists_and_categories(service, task_repo) -> None:
    await service.get_task_list(None, 1, 10)
    await service.get_categories()

    await service.create_task(_data())
    await service.get_task_list(None, 1, 10)
    await service.get_categories()

    assert task_repo.get_all.await_count == 2
    assert task_repo.get_categories.await_count == 2


async def test_create_removes_keys_after_write(task_repo, mock_cache) -> None:
    service = TaskService(task_repo, mock_cache)
    await service.create_task(_data())
    task_repo.add.assert_awaited_once()
    assert mock_cache.remove.await_args_list == [call("categories"), call("tasklist_*")]


async def test_update_same_category_keeps_categories(task_repo, mock_cache) -> None:
    service = TaskService(task_repo, mock_cache)
    await service.update_task(1, _data(description="Prepare final slides"))
    assert mock_cache.remove.await_args_list == [call("task_1"), call("tasklist_*")]


async def test_update_changed_category_removes_categories(task_repo, mock_cache) -> None:
    task_repo.update.return_value = _task(category="Home")
    service = TaskService(task_repo, mock_cache)
    await service.update_task(1, _data(category="Home"))
    assert mock_cache.remove.await_args_list == [
        call("task_1"),
        call("categories"),
        call("tasklist_*"),
    ]


async def test_update_status_invalidates_task_and_lists(task_repo, mock_cache) -> None:
    service = TaskService(task_repo, mock_cache)
    updated = await service.update_task_status(1, TaskStatus.COMPLETED)
    assert updated.status == TaskStatus.COMPLETED
    task_repo.update_status.assert_awaited_once_with(1, TaskStatus.COMPLETED)
    assert mock_cache.remove.await_args_list == [call("task_1"), call("tasklist_*")]


async def test_completed_task_cannot_be_reopened(task_repo, mock_cache) -> None:
    task_repo.get_by_id.return_value = _task(status=TaskStatus.COMPLETED)
    service = TaskService(task_repo, mock_cache)
    with pytest.raises(InvalidStatusTransitionException) as exc_info:
        await service.update_task_status(1, TaskStatus.PENDING)
    assert exc_info.value.details["current"] == "completed"
    task_repo.update_status.assert_not_awaited()
    mock_cache.remove.assert_not_awaited()


async def test_completed_task_priority_is_frozen(task_repo, mock_cache) -> None:
    task_repo.get_by_id.return_value = _task(status=TaskStatus.COMPLETED)
    service = TaskService(task_repo, mock_cache)
    with pytest.raises(ValidationException):
        await service.update_task(
            1, _data(status=TaskStatus.COMPLETED, priority=Priority.URGENT)
        )
    task_repo.update.assert_not_awaited()


async def test_update_missing_task_raises(task_repo, mock_cache) -> None:
    task_repo.get_by_id.return_value = None
    service = TaskService(task_repo, mock_cache)
    with pytest.raises(TaskNotFoundException):
        await service.update_task(5, _data())
    with pytest.raises(TaskNotFoundException):
        await service.update_task_status(5, TaskStatus.IN_PROGRESS)


async def test_delete_invalidates_everything(task_repo, mock_cache) -> None:
    service = TaskService(task_repo, mock_cache)
    await service.delete_task(1)
    assert mock_cache.remove.await_args_list == [
        call("task_1"),
        call("categories"),
        call("tasklist_*"),
    ]


async def test_delete_missing_task_raises(task_repo, mock_cache) -> None:
    task_repo.delete.return_value = False
    service = TaskService(task_repo, mock_cache)
    with pytest.raises(TaskNotFoundException):
        await service.delete_task(1)
    mock_cache.remove.assert_not_awaited()


async def test_reads_use_configured_ttls(task_repo, mock_cache) -> None:
    service = TaskService(
        task_repo,
        mock_cache,
        task_ttl=timedelta(seconds=11),
        list_ttl=timedelta(seconds=22),
        categories_ttl=timedelta(seconds=33),
    )
    await service.get_task(1)
    await service.get_task_list(None, 1, 10)
    await service.get_categories()
    ttls = [c.args[2] for c in mock_cache.set.await_args_list]
    assert ttls == [timedelta(seconds=11), timedelta(seconds=22), timedelta(seconds=33)]


@pytest.fixture
def audit_repo() -> AsyncMock:
    return AsyncMock()


def _audited(audit_repo: AsyncMock) -> list:
    return [c.args[0] for c in audit_repo.create.await_args_list]


async def test_create_records_full_snapshot(task_repo, mock_cache, audit_repo) -> None:
    service = TaskService(task_repo, mock_cache, audit_repo=audit_repo)
    await service.create_task(_data())
    [entry] = _audited(audit_repo)
    assert entry.entity_name == "task"
    assert entry.entity_id == 2
    assert entry.action == AuditAction.CREATE
    assert entry.old_values is None
    assert entry.new_values == {
        "description": "Prepare slides",
        "status": "pending",
        "priority": "medium",
        "category": "Work",
        "notes": None,
        "due_date": "2030-03-01",
    }


async def test_update_records_only_changed_fields(task_repo, mock_cache, audit_repo) -> None:
    task_repo.update.return_value = _task(category="Home", priority=Priority.HIGH)
    service = TaskService(task_repo, mock_cache, audit_repo=audit_repo)
    await service.update_task(1, _data(category="Home", priority=Priority.HIGH))
    [entry] = _audited(audit_repo)
    assert entry.action == AuditAction.UPDATE
    assert entry.old_values == {"priority": "medium", "category": "Work"}
    assert entry.new_values == {"priority": "high", "category": "Home"}


async def test_status_change_records_old_and_new_status(
    task_repo, mock_cache, audit_repo
) -> None:
    service = TaskService(task_repo, mock_cache, audit_repo=audit_repo)
    await service.update_task_status(1, TaskStatus.COMPLETED)
    [entry] = _audited(audit_repo)
    assert entry.action == AuditAction.UPDATE_STATUS
    assert entry.old_values == {"status": "pending"}
    assert entry.new_values == {"status": "completed"}


async def test_delete_records_removed_task(task_repo, mock_cache, audit_repo) -> None:
    service = TaskService(task_repo, mock_cache, audit_repo=audit_repo)
    await service.delete_task(1)
    [entry] = _audited(audit_repo)
    assert entry.action == AuditAction.DELETE
    assert entry.old_values["description"] == "Prepare slides"
    assert entry.new_values is None


async def test_rejected_mutations_are_not_audited(task_repo, mock_cache, audit_repo) -> None:
    task_repo.get_by_id.return_value = _task(status=TaskStatus.COMPLETED)
    service = TaskService(task_repo, mock_cache, audit_repo=audit_repo)
    with pytest.raises(InvalidStatusTransitionException):
        await service.update_task_status(1, TaskStatus.PENDING)
    task_repo.get_by_id.return_value = None
    with pytest.raises(TaskNotFoundException):
        await service.delete_task(1)
    audit_repo.create.assert_not_awaited()
