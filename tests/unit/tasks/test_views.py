import pytest

from taskboard.tasks.schemas import Task, TaskPriority, TaskStatus
from taskboard.tasks.views import TaskFilter, filter_tasks, summarize_tasks


@pytest.fixture
def tasks(sample_task: Task) -> list[Task]:
    return [
        sample_task,
        sample_task.model_copy(
            update={
                "id": "2",
                "title": "Buy milk",
                "description": "",
                "status": TaskStatus.DONE,
                "priority": TaskPriority.LOW,
            }
        ),
        sample_task.model_copy(
            update={
                "id": "3",
                "title": "Plan trip",
                "description": "Book the report hotel",
                "status": TaskStatus.IN_PROGRESS,
                "priority": TaskPriority.HIGH,
            }
        ),
    ]


def test_default_filter_matches_everything(tasks: list[Task]) -> None:
    task_filter = TaskFilter()
    assert not task_filter.is_active()
    assert filter_tasks(tasks, task_filter) == tasks


def test_search_matches_title_or_description_case_insensitively(
    tasks: list[Task],
) -> None:
    result = filter_tasks(tasks, TaskFilter(search="REPORT"))
    assert [t.id for t in result] == ["1", "3"]


def test_status_and_priority_filters_combine(tasks: list[Task]) -> None:
    assert [t.id for t in filter_tasks(tasks, TaskFilter(status="done"))] == ["2"]
    assert [
        t.id
        for t in filter_tasks(
            tasks, TaskFilter(status="in-progress", priority="high", search="trip")
        )
    ] == ["3"]
    assert filter_tasks(tasks, TaskFilter(status="todo", priority="low")) == []


def test_filter_is_active_when_any_field_set() -> None:
    assert TaskFilter(search="x").is_active()
    assert TaskFilter(priority="low").is_active()


def test_summarize_tasks(tasks: list[Task]) -> None:
    stats = summarize_tasks(tasks)
    assert stats.total == 3
    assert stats.todo == 1
    assert stats.in_progress == 1
    assert stats.done == 1


def test_summarize_empty() -> None:
    assert summarize_tasks([]).total == 0
