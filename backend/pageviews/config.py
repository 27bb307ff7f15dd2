"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden from the environment or a .env file
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults work out-of-the-box: SQLite file in the working directory
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    adapter: str = "sql"
    database_url: str = "sqlite+aiosqlite:///./pageviews.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("adapter", mode="before")
    @classmethod
    def normalize_adapter(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Realtime (only used when the adapter supports "subscribe")
    realtime_queue_size: int = 100
    realtime_history_size: int = 500
    realtime_ping_interval_seconds: float = 20.0
    realtime_retry_ms: int = 2000

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
