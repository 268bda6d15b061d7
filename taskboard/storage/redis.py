import asyncio

from taskboard.common.redis import RedisClient
from taskboard.storage.base import KeyValueStorage


class RedisStorage(KeyValueStorage):
    def __init__(self, *, redis_client: RedisClient, namespace: str):
        self.client = redis_client
        self.namespace = namespace

    def _get_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self.client.get, self._get_key(key))

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self.client.set, self._get_key(key), value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self.client.delete, self._get_key(key))
