import asyncio
import json
import logging
from typing import Any

from taskboard.common.exceptions import (
    BackingStoreException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    ResourceType,
)
from taskboard.storage.base import KeyValueStorage
from taskboard.tasks.backends.base import TaskBackend

logger = logging.getLogger(__name__)


class LocalTaskBackend(TaskBackend):
    """Stores the whole collection as one JSON array under a single key.

    Every mutation reads the array, changes it and overwrites it wholesale.
    """

    def __init__(self, *, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key
        self.lock = asyncio.Lock()

    async def _read(self) -> list[dict[str, Any]]:
        stored = await self.storage.get_item(self.key)
        if not stored:
            return []

        try:
            records = json.loads(stored)
        except json.JSONDecodeError as e:
            raise BackingStoreException(
                f"Stored value under '{self.key}' is not valid JSON"
            ) from e

        if not isinstance(records, list):
            raise BackingStoreException(
                f"Stored value under '{self.key}' is not a JSON array"
            )
        return records

    async def _write(self, records: list[dict[str, Any]]) -> None:
        await self.storage.set_item(self.key, json.dumps(records, ensure_ascii=False))

    @staticmethod
    def _find_index(records: list[dict[str, Any]], task_id: str) -> int | None:
        for index, record in enumerate(records):
            if isinstance(record, dict) and str(record.get("id")) == task_id:
                return index
        return None

    async def list_tasks(self) -> list[dict[str, Any]]:
        return await self._read()

    async def create_task(self, payload: dict[str, Any]) -> dict[str, Any]:
        task_id = str(payload.get("id"))
        async with self.lock:
            records = await self._read()
            if self._find_index(records, task_id) is not None:
                raise ResourceAlreadyExistsException(ResourceType.TASK, task_id)
            records.append(payload)
            await self._write(records)

        logger.info(f"Stored task {task_id} ({len(records)} total)")
        return payload

    async def update_task(
        self, task_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        async with self.lock:
            records = await self._read()
            index = self._find_index(records, task_id)
            if index is None:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)
            updated = {**records[index], **payload}
            records[index] = updated
            await self._write(records)

        return updated

    async def delete_task(self, task_id: str) -> None:
        async with self.lock:
            records = await self._read()
            index = self._find_index(records, task_id)
            if index is None:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)
            del records[index]
            await self._write(records)

        logger.info(f"Removed task {task_id} ({len(records)} remaining)")
