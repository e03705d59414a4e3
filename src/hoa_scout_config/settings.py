"""Settings for the HOA Scout API, CLI and background worker.

The `.env` file is taken from `$HOA_SCOUT_ENV_FILE` when set, otherwise
from `config/.env.dev` or `config/.env` below the project root.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "HOA_SCOUT_ENV_FILE"


def _find_project_root() -> Path:
    """Walk up from this file to the first directory that looks like the repo."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent.parent


def get_config_dir() -> Path:
    """Directory holding the ``.env`` files."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        candidate = get_config_dir() / name
        if candidate.exists():
            return candidate
    return None


class Settings(BaseSettings):
    """HOA Scout configuration.

    Environment variables override the discovered `.env` file, which
    overrides the defaults below. Field names map to upper-case variables
    (`perplexity_api_key` -> `PERPLEXITY_API_KEY`).
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "HOA Scout"

    # Datastore (POSTGRES_ prefix). DATABASE_DSN wins when set.
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "hoa_scout"
    database_dsn: str | None = None

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # Search provider (Perplexity)
    perplexity_api_key: SecretStr = SecretStr("")
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "sonar-pro"
    search_timeout_seconds: float = 45.0
    search_max_retries: int = 2
    search_retry_backoff_seconds: float = 0.5

    # Analysis (Anthropic). Empty key = rule-based scoring only.
    anthropic_api_key: SecretStr = SecretStr("")
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_model: str = "claude-3-5-sonnet-latest"
    analysis_timeout_seconds: float = 60.0
    analysis_queue_size: int = 100
    analysis_workers: int = 2
    analysis_job_history: int = 1000
    # Extra web searches (financials, rules, reviews) before scoring.
    analysis_gather_evidence: bool = True

    # Caching & freshness
    cities_cache_ttl_seconds: int = 3600
    report_cache_ttl_seconds: int = 300
    report_cache_max_entries: int = 1000
    enrichment_freshness_days: int = 30

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """`DATABASE_DSN` when set, otherwise an asyncpg URL from the parts."""
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins, split from the comma-separated setting."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
