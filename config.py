"""
Centralised settings loader.

Values come from the environment or a local `.env` file.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ────────────────────────────────────────────────
    env_name: str = Field("local", alias="ENV_NAME")
    database_url: str = Field(
        "sqlite+aiosqlite:///./fitclub.db", alias="DATABASE_URL"
    )
    sql_echo: bool = Field(False, alias="SQL_ECHO")

    # ─── console behaviour ──────────────────────────────────────────
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    date_format: str = Field("%Y-%m-%d", alias="DATE_FORMAT")
    seed_demo: bool = Field(True, alias="SEED_DEMO")

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
