from taskboard.auth.session import AuthSession
from taskboard.common.redis import RedisClient, create_redis_client
from taskboard.config import Settings
from taskboard.storage.file import FileStorage
from taskboard.storage.redis import RedisStorage
from taskboard.tasks.backends.base import TaskBackend
from taskboard.tasks.backends.local import LocalTaskBackend
from taskboard.tasks.backends.remote import RemoteTaskBackend


def get_task_backend(
    settings: Settings,
    session: AuthSession,
    redis_client: RedisClient | None = None,
) -> TaskBackend:
    if settings.TASK_STORE_BACKEND == "local":
        return LocalTaskBackend(
            storage=FileStorage(settings.LOCAL_STORAGE_PATH),
            key=settings.TASK_STORAGE_KEY,
        )
    elif settings.TASK_STORE_BACKEND == "redis":
        return LocalTaskBackend(
            storage=RedisStorage(
                redis_client=redis_client or create_redis_client(settings.REDIS_URL),
                namespace=settings.TASK_STORE_NAMESPACE,
            ),
            key=settings.TASK_STORAGE_KEY,
        )
    elif settings.TASK_STORE_BACKEND == "remote":
        if not settings.API_BASE_URL:
            raise ValueError("API_BASE_URL is required for the remote backend")
        return RemoteTaskBackend(
            base_url=settings.API_BASE_URL,
            token_provider=lambda: session.token,
            user_agent=settings.USER_AGENT,
            timeout=settings.API_REQUEST_TIMEOUT,
        )
    else:
        raise ValueError(
            f"Unsupported task store backend: {settings.TASK_STORE_BACKEND}"
        )
