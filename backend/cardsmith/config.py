"""Card service settings, read from the environment via pydantic-settings.

Invariants:
    - DATABASE_URL is normalized to an async driver URL before use
    - require_slug picks the card variant: True means a username is needed to save
    - public_base_url prefixes every share_url handed to clients
    - Pool sizing only applies to server databases; sqlite URLs ignore it
    - get_settings() is cached, so one Settings instance serves the process
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str = "postgresql+asyncpg://cards:cards@db:5432/cards"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Card variant and sharing
    require_slug: bool = True
    public_base_url: str = "http://localhost:5173"

    # Browser editor origin
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """postgresql:// becomes postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
