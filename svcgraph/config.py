from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Snapshot store
    STORE_BACKEND: Literal["file", "redis", "memory"] = "file"
    DATA_PATH: str = "db/data.json"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY: str = "svcgraph:document"
    REDIS_RETRY_ATTEMPTS: int = 3

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="json", description="'json' for production, 'console' for dev")


def get_settings() -> Settings:
    return Settings()
