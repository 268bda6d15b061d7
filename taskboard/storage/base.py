from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """String key/value storage with the semantics of browser local storage."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        pass
