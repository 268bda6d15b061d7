from collections.abc import Iterable
from typing import Literal
from pydantic import BaseModel

from taskboard.tasks.schemas import Task, TaskPriority, TaskStatus


class TaskFilter(BaseModel):
    search: str = ""
    status: TaskStatus | Literal["all"] = "all"
    priority: TaskPriority | Literal["all"] = "all"

    def is_active(self) -> bool:
        return bool(self.search) or self.status != "all" or self.priority != "all"

    def matches(self, task: Task) -> bool:
        query = self.search.lower()
        matches_search = (
            query in task.title.lower() or query in task.description.lower()
        )
        matches_status = self.status == "all" or task.status == self.status
        matches_priority = self.priority == "all" or task.priority == self.priority
        return matches_search and matches_status and matches_priority


class TaskStats(BaseModel):
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    return [task for task in tasks if task_filter.matches(task)]


def summarize_tasks(tasks: Iterable[Task]) -> TaskStats:
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        if task.status == TaskStatus.TODO:
            stats.todo += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            stats.in_progress += 1
        elif task.status == TaskStatus.DONE:
            stats.done += 1
    return stats
