import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from taskboard.common.exceptions import BackingStoreException
from taskboard.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class FileStorage(KeyValueStorage):
    """Keeps every key in a single JSON object file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise BackingStoreException(f"Failed to read storage file {self.path}") from e
        if not isinstance(data, dict):
            raise BackingStoreException(
                f"Storage file {self.path} does not contain a JSON object"
            )
        return data

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise BackingStoreException(
                f"Failed to write storage file {self.path}"
            ) from e

    def _get(self, key: str) -> str | None:
        return self._load().get(key)

    def _set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def _remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)
        logger.debug(f"Wrote key '{key}' to {self.path}")

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)
