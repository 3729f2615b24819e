from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_DELAY_MS = 2**31 - 1


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MOCK_TRANSPORT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    service_name: str = "mock-transport"
    log_level: str = "INFO"
    log_json: bool = False

    delay_ms: int = Field(default=2000, ge=0, le=MAX_DELAY_MS)
    variance_percentage: int = Field(default=40, ge=0, le=100)
    error_percentage: int = Field(default=0, ge=0, le=100)
    random_seed: int | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
