import asyncio
import logging
from types import TracebackType
from typing import Any, Callable, Type
from aiohttp import ClientError, ClientSession, ClientTimeout

from taskboard.common.exceptions import (
    BackingStoreException,
    ResourceNotFoundException,
    ResourceType,
)
from taskboard.tasks.backends.base import TaskBackend

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


class RemoteTaskBackend(TaskBackend):
    compact_status = True

    def __init__(
        self,
        *,
        base_url: str,
        token_provider: TokenProvider,
        user_agent: str,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.user_agent = user_agent
        self.timeout = timeout
        self.session: ClientSession | None = None

    async def __aenter__(self):
        self._get_session()
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        await self.close()

    def _get_session(self) -> ClientSession:
        if self.session is None or self.session.closed:
            self.session = ClientSession(
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.user_agent,
                },
                timeout=ClientTimeout(total=self.timeout),
            )
        return self.session

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        expect_body: bool = True,
    ) -> Any | None:
        token = self.token_provider()
        if not token:
            raise BackingStoreException("A bearer token is required to reach the task API")

        url = f"{self.base_url}{path}"
        session = self._get_session()

        try:
            async with session.request(
                method,
                url,
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
            ) as response:
                if response.status == 404:
                    raise ResourceNotFoundException(
                        ResourceType.TASK,
                        path.rsplit("/", 1)[-1],
                        message=f"Resource not found at {url}",
                    )
                elif response.status == 401:
                    raise BackingStoreException(f"Not authorized to access {url}")
                elif not 200 <= response.status < 300:
                    raise BackingStoreException(
                        f"{method} {url} failed with status {response.status}"
                    )

                if not expect_body or response.status == 204:
                    return None
                return await response.json(content_type=None)
        except (BackingStoreException, ResourceNotFoundException):
            raise
        except (ClientError, asyncio.TimeoutError) as e:
            logger.exception(f"HTTP request {method} {url} failed")
            raise BackingStoreException(f"Request to {url} failed") from e
        except ValueError as e:
            raise BackingStoreException(f"Response from {url} is not valid JSON") from e

    async def list_tasks(self) -> list[dict[str, Any]]:
        data = await self.request("GET", "/api/Tasks")
        if not isinstance(data, list):
            raise BackingStoreException("Expected a JSON array from GET /api/Tasks")
        return data

    async def create_task(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        return await self.request("POST", "/api/Tasks", payload)

    async def update_task(
        self, task_id: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        return await self.request("PUT", f"/api/Tasks/{task_id}", payload)

    async def delete_task(self, task_id: str) -> None:
        await self.request("DELETE", f"/api/Tasks/{task_id}", expect_body=False)
