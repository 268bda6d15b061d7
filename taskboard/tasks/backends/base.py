from abc import ABC, abstractmethod
from typing import Any


class TaskBackend(ABC):
    # Whether the backend spells "in-progress" as "inprogress".
    compact_status: bool = False

    @abstractmethod
    async def list_tasks(self) -> list[dict[str, Any]]:
        pass

    @abstractmethod
    async def create_task(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        pass

    @abstractmethod
    async def update_task(
        self, task_id: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        pass

    @abstractmethod
    async def delete_task(self, task_id: str) -> None:
        pass

    async def close(self) -> None:
        pass
