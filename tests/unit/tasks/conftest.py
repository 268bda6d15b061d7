from datetime import datetime, timezone
from typing import Any

import pytest

from taskboard.auth.schemas import User
from taskboard.tasks.schemas import Task, TaskPriority, TaskStatus


@pytest.fixture
def sample_user() -> User:
    return User(id="user-1", email="jane@example.com", name="Jane")


@pytest.fixture
def raw_task_record() -> dict[str, Any]:
    return {
        "id": "1",
        "title": "Write report",
        "description": "Quarterly numbers",
        "status": "InProgress",
        "priority": "HIGH",
        "dueDate": "2024-02-01T00:00:00Z",
        "createdAt": "2024-01-01T12:00:00Z",
        "userId": "user-1",
    }


@pytest.fixture
def sample_task() -> Task:
    return Task(
        id="1",
        title="Write report",
        description="Quarterly numbers",
        status=TaskStatus.TODO,
        priority=TaskPriority.MEDIUM,
        due_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
        created_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        user_id="user-1",
    )
