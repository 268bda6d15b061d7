from collections.abc import Mapping
from enum import Enum
from typing import Any

from taskboard.tasks.schemas import RawTaskRecord, Task

# The remote API spells "in-progress" without the hyphen.
STATUS_FROM_BACKEND = {"inprogress": "in-progress"}
STATUS_TO_BACKEND = {"in-progress": "inprogress"}


def normalize_status(value: str) -> str:
    status = value.lower()
    return STATUS_FROM_BACKEND.get(status, status)


def normalize(raw: Mapping[str, Any] | RawTaskRecord | Task) -> Task:
    """Map a raw backend record into a canonical Task.

    Raises:
        pydantic.ValidationError: If the record is missing fields or its
            status/priority do not map onto a canonical value.
    """
    if isinstance(raw, Task):
        raw = raw.model_dump(mode="json", by_alias=True)

    record = RawTaskRecord.model_validate(raw)

    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        status=normalize_status(record.status),
        priority=record.priority.lower(),
        due_date=record.due_date,
        created_at=record.created_at,
        user_id=record.user_id,
    )


def denormalize(partial: Mapping[str, Any]) -> dict[str, Any]:
    """Prepare an outbound payload for a backend using the compact status spelling."""
    payload = dict(partial)
    if "status" not in payload:
        return payload

    status = payload["status"]
    if isinstance(status, Enum):
        status = status.value
    if isinstance(status, str):
        status = STATUS_TO_BACKEND.get(status, status)
    payload["status"] = status
    return payload
