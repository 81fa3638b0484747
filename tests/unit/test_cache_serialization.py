"""Remote payload encoding: typed round trips and failure mapping."""

from datetime import date, datetime, timezone

import pytest

from taskboard.application.dtos.task import (
    PaginationInfo,
    TaskFilter,
    TaskListResult,
    TaskResult,
)
from taskboard.domain.enums import Priority, TaskStatus
from taskboard.infrastructure.cache.serialization import deserialize, serialize
from taskboard.infrastructure.exceptions import CacheSerializationError


def _task_list() -> TaskListResult:
    task = TaskResult(
        id=3,
        description="Renew passport",
        status=TaskStatus.PENDING,
        priority=Priority.URGENT,
        category="Personal",
        notes="Bring photos",
        due_date=date(2030, 6, 1),
        created_at=datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc),
    )
    return TaskListResult(
        tasks=[task],
        filter=TaskFilter(status=TaskStatus.PENDING, is_overdue=False),
        pagination=PaginationInfo(current_page=1, page_size=10, total_items=1),
    )


def test_task_list_restores_nested_types() -> None:
    payload = serialize("tasklist_x", _task_list())
    restored = deserialize("tasklist_x", payload, TaskListResult)
    assert restored == _task_list()
    assert isinstance(restored.tasks[0].priority, Priority)
    assert restored.pagination.total_pages == 1


def test_untyped_read_returns_json_value() -> None:
    assert deserialize("categories", serialize("categories", ["Home", "Work"])) == [
        "Home",
        "Work",
    ]


def test_unserializable_value_raises() -> None:
    with pytest.raises(CacheSerializationError) as exc_info:
        serialize("k", object())
    assert exc_info.value.details["key"] == "k"


def test_invalid_json_raises() -> None:
    with pytest.raises(CacheSerializationError):
        deserialize("k", b"\x00garbage")


def test_payload_of_wrong_shape_raises() -> None:
    with pytest.raises(CacheSerializationError):
        deserialize("task_1", b'{"id": "not-a-number"}', TaskResult)
