import logging

from taskboard.auth.session import AuthSession
from taskboard.common.redis import RedisClient
from taskboard.config import Settings, get_settings
from taskboard.tasks.backend import get_task_backend
from taskboard.tasks.store import TaskStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
    )


async def create_task_store(
    session: AuthSession,
    settings: Settings | None = None,
    redis_client: RedisClient | None = None,
) -> TaskStore:
    """Build and initialize the task store for one user session.

    The returned store is already subscribed to ``session`` and, when the
    session is signed in, holds the fetched collection.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    backend = get_task_backend(settings, session, redis_client=redis_client)
    store = TaskStore(backend=backend, session=session)
    await store.initialize()

    logger.info(
        f"{settings.APP_NAME} task store ready (backend={settings.TASK_STORE_BACKEND})"
    )
    return store
