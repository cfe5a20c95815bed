from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Data layer settings loaded from environment variables."""

    app_title: str = "Workshop Data Layer"
    app_version: str = "0.1.0"
    app_env: str = "development"

    # Remote store selection
    remote_backend: Literal["supabase", "sqlalchemy"] = "supabase"

    # Supabase (PostgREST) configuration
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_schema: str = "public"
    request_timeout: float = 15.0

    # SQLAlchemy backend (local Postgres or SQLite)
    database_url: str = "sqlite:///./workshop.db"
    create_tables: bool = True

    # Page size used when a full collection is fetched
    default_fetch_limit: int = 1000

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_cache: str = "INFO"            # state store / facade / repositories

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
