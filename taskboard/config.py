from functools import lru_cache
from typing import Annotated, Any, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    API_NAME: str = "Taskboard"
    API_SUMMARY: str = "CRUD API for task management"
    VERSION: str = "0.1.0"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    CORS_ENABLED: bool = False
    # NoDecode: env podaje listę po przecinkach, nie JSON
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False

    # Store Configuration
    STORE_BACKEND: Literal["sql", "memory"] = "sql"
    DATABASE_URL: str = "sqlite:///data/tasks.db"

    # Name recorded in createdBy / modifiedBy
    AUDITOR: str = "system"

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TASKBOARD_", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
