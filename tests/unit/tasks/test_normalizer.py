from datetime import datetime, timezone
from typing import Any

import pytest
from pydantic import ValidationError

from taskboard.tasks.normalizer import denormalize, normalize, normalize_status
from taskboard.tasks.schemas import Task, TaskPriority, TaskStatus


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("inprogress", "in-progress"),
        ("InProgress", "in-progress"),
        ("in-progress", "in-progress"),
        ("TODO", "todo"),
        ("Done", "done"),
    ],
)
def test_normalize_status(raw: str, expected: str) -> None:
    assert normalize_status(raw) == expected


def test_normalize_maps_compact_status_and_lowercases(
    raw_task_record: dict[str, Any],
) -> None:
    task = normalize(raw_task_record)

    assert isinstance(task, Task)
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.priority == TaskPriority.HIGH
    assert task.id == "1"
    assert task.user_id == "user-1"
    assert task.created_at == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_normalize_is_idempotent(raw_task_record: dict[str, Any]) -> None:
    once = normalize(raw_task_record)
    twice = normalize(once)
    assert once == twice


def test_normalize_coerces_numeric_ids_and_missing_description(
    raw_task_record: dict[str, Any],
) -> None:
    raw_task_record.update(id=42, userId=7, description=None)

    task = normalize(raw_task_record)

    assert task.id == "42"
    assert task.user_id == "7"
    assert task.description == ""


def test_normalize_ignores_unknown_fields(raw_task_record: dict[str, Any]) -> None:
    raw_task_record["etag"] = "abc"
    assert normalize(raw_task_record).id == "1"


def test_normalize_rejects_unknown_status(raw_task_record: dict[str, Any]) -> None:
    raw_task_record["status"] = "blocked"
    with pytest.raises(ValidationError):
        normalize(raw_task_record)


def test_normalize_rejects_missing_fields() -> None:
    with pytest.raises(ValidationError):
        normalize({"status": "todo", "priority": "low"})


def test_denormalize_compacts_in_progress() -> None:
    payload = denormalize({"status": TaskStatus.IN_PROGRESS, "title": "x"})
    assert payload == {"status": "inprogress", "title": "x"}


def test_denormalize_leaves_other_statuses_and_fields() -> None:
    partial = {"status": "done", "priority": "high"}
    assert denormalize(partial) == {"status": "done", "priority": "high"}
    assert denormalize({"title": "No status"}) == {"title": "No status"}


def test_denormalize_does_not_mutate_input() -> None:
    partial = {"status": "in-progress"}
    denormalize(partial)
    assert partial == {"status": "in-progress"}


@pytest.mark.parametrize("compact", ["inprogress", "INPROGRESS", "InProgress"])
def test_status_round_trip_restores_compact_spelling(
    raw_task_record: dict[str, Any], compact: str
) -> None:
    raw_task_record["status"] = compact
    task = normalize(raw_task_record)
    assert denormalize({"status": task.status}) == {"status": "inprogress"}
