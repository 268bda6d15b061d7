from datetime import datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.common.current_datetime import get_start_of_today
from taskboard.common.exceptions import TaskStoreErrorKind


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime = Field(default_factory=get_start_of_today, alias="dueDate")


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str = Field(min_length=1)
    description: str = ""
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime = Field(alias="dueDate")
    created_at: datetime = Field(alias="createdAt")
    user_id: str = Field(alias="userId")


class RawTaskRecord(BaseModel):
    """Task record as it arrives from a backing store, before normalization."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: str
    description: str = ""
    status: str
    priority: str
    due_date: datetime = Field(alias="dueDate")
    created_at: datetime = Field(alias="createdAt")
    user_id: str = Field(alias="userId")

    @field_validator("id", "user_id", mode="before")
    def coerce_identifier(cls, v: Any):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("description", mode="before")
    def default_description(cls, v: Any):
        return "" if v is None else v


class TaskStoreState(BaseModel):
    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = ()
    is_loading: bool = False
    error: str | None = None
    error_kind: TaskStoreErrorKind | None = None
