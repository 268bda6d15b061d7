from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    APP_NAME: str = "Taskboard"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    USER_AGENT: str = "Taskboard"

    # Backing Store Configuration
    TASK_STORE_BACKEND: Literal["local", "redis", "remote"] = "local"
    TASK_STORAGE_KEY: str = "tasks"

    LOCAL_STORAGE_PATH: str = ".taskboard/storage.json"

    REDIS_URL: str = "redis://localhost:6379"
    TASK_STORE_NAMESPACE: str = "taskboard"

    # Remote API
    API_BASE_URL: str | None = None
    API_REQUEST_TIMEOUT: float = 30.0

    @model_validator(mode="after")
    def validate_backend_settings(self):
        if self.TASK_STORE_BACKEND == "remote" and not self.API_BASE_URL:
            raise ValueError(
                "API_BASE_URL must be set when TASK_STORE_BACKEND is 'remote'"
            )
        return self

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
