# refreshments/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Store selection (STORE_BACKEND):
      - memory   : process-local catalog + purchases (default)
      - sql      : SQLModel tables on DATABASE_URL (SQLite or Supabase Postgres)
      - supabase : Supabase REST client (needs SUPABASE_URL + SUPABASE_KEY)
    """

    PROJECT_NAME: str = "Refreshments Counter API"
    API_V1_STR: str = "/api/v1"

    STORE_BACKEND: Literal["memory", "sql", "supabase"] = "memory"

    DATABASE_URL: str = "sqlite:///./refreshments.db"

    # Supabase REST config (only for STORE_BACKEND=supabase)
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None

    # Seed the starter menu into an empty catalog
    SEED_CATALOG: bool = True

    # Calendar day used for daily reports
    REPORT_TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
