"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class SeedScale(StrEnum):
    small = "small"
    medium = "medium"
    large = "large"


class SeedLocale(StrEnum):
    portuguese = "pt_BR"
    english = "en_US"


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration: all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Database ────────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///data/agro.db"
    database_echo: bool = False
    run_db_migrations: bool = True

    # ── Seeding ─────────────────────────────────────────────────────────────
    seed_database: bool = False
    seed_scale: SeedScale = SeedScale.medium
    seed_locale: SeedLocale = SeedLocale.portuguese
    seed_random_seed: int | None = None
    seed_region_delay_seconds: float = 0.1

    # ── Municipality catalog (IBGE) ─────────────────────────────────────────
    ibge_api_base_url: str = "https://servicodados.ibge.gov.br/api/v1/localidades"
    ibge_timeout_seconds: float = 15.0

    # ── HTTP ────────────────────────────────────────────────────────────────
    cors_origins: list[str] = ["*"]

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
