"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every field can be set from an environment variable of the same name
    - get_settings() is cached (lru_cache): one Settings instance per process
    - Settings are read at the edge (main.py, api/dependencies.py) and passed
      down as plain values; nothing below the API layer calls get_settings()

Design Decisions:
    - Defaults target the docker-compose PostgreSQL so a bare checkout runs
    - postgresql:// URLs are rewritten to the asyncpg dialect on load
    - ASSEMBLY_TIMEOUT_SECONDS unset means no deadline
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from registrar.core.domain_types import MissingRelationPolicy

ASYNC_DRIVER_PREFIX = "postgresql+asyncpg://"


def to_async_url(url: str) -> str:
    """Point a plain postgresql:// URL at the asyncpg driver."""
    if url.startswith("postgresql://"):
        return ASYNC_DRIVER_PREFIX + url[len("postgresql://"):]
    return url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # ─── Database ────────────────────────────────────────────────
    database_url: str = ASYNC_DRIVER_PREFIX + "registrar:registrar@db:5432/registrar"
    database_pool_size: int = Field(default=20, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    # ─── Assembly ────────────────────────────────────────────────
    missing_relation_policy: MissingRelationPolicy = MissingRelationPolicy.DROP
    assembly_timeout_seconds: float | None = Field(default=None, gt=0)

    # ─── API ─────────────────────────────────────────────────────
    cors_origins: list[str] = ["http://localhost:5173"]

    # ─── Observability ───────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def _use_async_driver(cls, v):
        return to_async_url(v) if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()
