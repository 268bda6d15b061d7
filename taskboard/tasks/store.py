import asyncio
import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import asynccontextmanager, contextmanager
from typing import Any, Callable
from uuid import uuid4
from pydantic import ValidationError

from taskboard.auth.session import AuthSession
from taskboard.common.current_datetime import get_current_datetime
from taskboard.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    ResourceType,
    StoreNotInitializedException,
    TaskStoreErrorKind,
    TaskStoreException,
)
from taskboard.tasks.backends.base import TaskBackend
from taskboard.tasks.normalizer import denormalize, normalize
from taskboard.tasks.schemas import Task, TaskInput, TaskStoreState, TaskUpdate

logger = logging.getLogger(__name__)

StoreListener = Callable[[TaskStoreState], None]


class TaskStore:
    """Owns the task collection of one user session.

    The in-memory list only changes after the backend confirms a write, so
    subscribers never see a task the backend does not know about. Updates and
    deletes on the same task id run one at a time.
    """

    def __init__(self, backend: TaskBackend, session: AuthSession):
        self.backend = backend
        self.session = session

        self._tasks: list[Task] = []
        self._pending = 0
        self._error: TaskStoreException | None = None
        self._listeners: list[StoreListener] = []
        self._task_locks: dict[str, tuple[asyncio.Lock, int]] = {}
        self._session_generation = 0
        self._unsubscribe_session: Callable[[], None] | None = None
        self._initialized = False

    async def initialize(self) -> None:
        if self._initialized:
            return

        self._unsubscribe_session = self.session.subscribe(self._on_session_change)
        self._initialized = True

        if self.session.is_authenticated:
            await self.fetch_tasks()

    async def close(self) -> None:
        if self._unsubscribe_session:
            self._unsubscribe_session()
            self._unsubscribe_session = None
        self._initialized = False
        await self.backend.close()

    # State

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @property
    def error(self) -> str | None:
        return self._error.message if self._error else None

    @property
    def error_kind(self) -> TaskStoreErrorKind | None:
        return self._error.kind if self._error else None

    @property
    def state(self) -> TaskStoreState:
        return TaskStoreState(
            tasks=self.tasks,
            is_loading=self.is_loading,
            error=self.error,
            error_kind=self.error_kind,
        )

    def get_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Task store listener failed")

    # Operation bookkeeping

    @contextmanager
    def _operation(self) -> Iterator[None]:
        if not self._initialized:
            raise StoreNotInitializedException()

        self._pending += 1
        self._error = None
        self._notify()
        try:
            yield
        finally:
            self._pending -= 1
            self._notify()

    def _fail(
        self, kind: TaskStoreErrorKind, cause: Exception, generation: int
    ) -> TaskStoreException:
        error = TaskStoreException(kind)
        logger.error(f"{error.message}: {cause}")
        if generation == self._session_generation:
            self._error = error
        return error

    @asynccontextmanager
    async def _task_lock(self, task_id: str) -> AsyncIterator[None]:
        lock, holders = self._task_locks.get(task_id, (asyncio.Lock(), 0))
        self._task_locks[task_id] = (lock, holders + 1)
        try:
            async with lock:
                yield
        finally:
            lock, holders = self._task_locks[task_id]
            if holders == 1:
                del self._task_locks[task_id]
            else:
                self._task_locks[task_id] = (lock, holders - 1)

    def _outbound(self, payload: dict[str, Any]) -> dict[str, Any]:
        return denormalize(payload) if self.backend.compact_status else payload

    def _new_task_id(self) -> str:
        task_id = str(uuid4())
        while self.get_task(task_id) is not None:
            task_id = str(uuid4())
        return task_id

    @staticmethod
    def _normalize_collection(records: list[dict[str, Any]]) -> list[Task]:
        tasks: list[Task] = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                task = normalize(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid task record at index {index}: {e}")
                continue
            if task.id in seen:
                logger.warning(f"Skipping duplicate task id '{task.id}'")
                continue
            seen.add(task.id)
            tasks.append(task)
        return tasks

    # Operations

    async def fetch_tasks(self) -> None:
        with self._operation():
            generation = self._session_generation
            try:
                records = await self.backend.list_tasks()
                tasks = self._normalize_collection(records)
            except Exception as e:
                self._fail(TaskStoreErrorKind.FETCH_FAILED, e, generation)
                return

            if generation != self._session_generation:
                logger.info("Discarding tasks fetched for a previous session")
                return

            self._tasks = tasks
            logger.info(f"Loaded {len(tasks)} tasks")

    async def add_task(self, data: TaskInput | Mapping[str, Any]) -> Task:
        with self._operation():
            generation = self._session_generation
            try:
                task_input = (
                    data
                    if isinstance(data, TaskInput)
                    else TaskInput.model_validate(data)
                )
                user = self.session.user
                if user is None:
                    raise KnownException("An active user is required to add tasks")

                task = Task(
                    id=self._new_task_id(),
                    created_at=get_current_datetime(),
                    user_id=user.id,
                    **task_input.model_dump(),
                )
                payload = self._outbound(task.model_dump(mode="json", by_alias=True))
                created = await self.backend.create_task(payload)

                record = task.model_dump(mode="json", by_alias=True)
                if isinstance(created, dict):
                    record.update(created)
                result = normalize(record)
            except Exception as e:
                error = self._fail(TaskStoreErrorKind.CREATE_FAILED, e, generation)
                raise error from e

            if generation != self._session_generation:
                logger.info(f"Task {result.id} created for a previous session")
            elif self.get_task(result.id) is not None:
                logger.warning(f"Backend returned existing task id '{result.id}'")
                self._tasks = [result if t.id == result.id else t for t in self._tasks]
            else:
                self._tasks = [*self._tasks, result]
            return result

    async def update_task(
        self, task_id: str, patch: TaskUpdate | Mapping[str, Any]
    ) -> Task:
        with self._operation():
            generation = self._session_generation
            async with self._task_lock(task_id):
                try:
                    update = (
                        patch
                        if isinstance(patch, TaskUpdate)
                        else TaskUpdate.model_validate(patch)
                    )
                    current = self.get_task(task_id)
                    if current is None:
                        raise ResourceNotFoundException(ResourceType.TASK, task_id)

                    changes = update.model_dump(
                        mode="json",
                        by_alias=True,
                        exclude_unset=True,
                        exclude_none=True,
                    )
                    response = await self.backend.update_task(
                        task_id, self._outbound(changes)
                    )

                    record = current.model_dump(mode="json", by_alias=True)
                    immutable = {k: record[k] for k in ("id", "createdAt", "userId")}
                    record.update(changes)
                    if isinstance(response, dict):
                        record.update(response)
                    record.update(immutable)
                    updated = normalize(record)
                except Exception as e:
                    error = self._fail(TaskStoreErrorKind.UPDATE_FAILED, e, generation)
                    raise error from e

                if self.get_task(task_id) is None:
                    logger.info(f"Task {task_id} left the collection during update")
                else:
                    self._tasks = [
                        updated if t.id == task_id else t for t in self._tasks
                    ]
                return updated

    async def delete_task(self, task_id: str) -> bool:
        with self._operation():
            generation = self._session_generation
            async with self._task_lock(task_id):
                try:
                    if self.get_task(task_id) is None:
                        raise ResourceNotFoundException(ResourceType.TASK, task_id)
                    await self.backend.delete_task(task_id)
                except Exception as e:
                    self._fail(TaskStoreErrorKind.DELETE_FAILED, e, generation)
                    return False

                self._tasks = [t for t in self._tasks if t.id != task_id]
                return True

    # Session

    async def _on_session_change(self, session: AuthSession) -> None:
        self._session_generation += 1
        if session.is_authenticated:
            await self.fetch_tasks()
        else:
            self._tasks = []
            self._error = None
            self._notify()
