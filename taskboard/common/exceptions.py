from enum import Enum


class ResourceType(str, Enum):
    TASK = "Task"
    SESSION = "Session"


class ResourceNotFoundException(Exception):
    def __init__(
        self, resource_type: ResourceType, identifier: str, message: str | None = None
    ):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(message or f"{self.resource_type} '{identifier}' not found")


class ResourceAlreadyExistsException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' already exists")


class KnownException(Exception):
    def __init__(self, message: str):
        super().__init__(message)


class BackingStoreException(Exception):
    pass


class StoreNotInitializedException(Exception):
    def __init__(self, message: str = "Task store used before initialize() was called"):
        super().__init__(message)


class TaskStoreErrorKind(str, Enum):
    FETCH_FAILED = "fetch-failed"
    CREATE_FAILED = "create-failed"
    UPDATE_FAILED = "update-failed"
    DELETE_FAILED = "delete-failed"


ERROR_MESSAGES: dict[TaskStoreErrorKind, str] = {
    TaskStoreErrorKind.FETCH_FAILED: "Failed to fetch tasks",
    TaskStoreErrorKind.CREATE_FAILED: "Failed to add task",
    TaskStoreErrorKind.UPDATE_FAILED: "Failed to update task",
    TaskStoreErrorKind.DELETE_FAILED: "Failed to delete task",
}


class TaskStoreException(Exception):
    def __init__(self, kind: TaskStoreErrorKind):
        self.kind = kind
        self.message = ERROR_MESSAGES[kind]
        super().__init__(self.message)
