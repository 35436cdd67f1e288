"""chainlog configuration.

Uses pydantic-settings for type-safe environment variable loading.  Every
setting can be overridden with a ``CHAINLOG_``-prefixed variable or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IDENTITY_SECRET = "dev-identity-secret-change-in-production"
LOCAL_ENVS = {"", "local", "dev", "development", "test"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHAINLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = "local"

    # Storage
    data_dir: Path = Path("data")

    # Identity proof
    identity_secret: str = DEFAULT_IDENTITY_SECRET
    identity_algorithm: str = "HS256"
    identity_token_ttl_seconds: int = 3600

    # Notifications
    outbox_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def ledger_path(self) -> Path:
        return self.data_dir / "ledger.json"

    @property
    def outbox_path(self) -> Path:
        return self.data_dir / "outbox.jsonl"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    settings = Settings()
    _enforce_guardrails(settings)
    return settings


def _enforce_guardrails(settings: Settings) -> None:
    if settings.app_env.strip().lower() in LOCAL_ENVS:
        return
    if settings.identity_secret == DEFAULT_IDENTITY_SECRET:
        raise ValueError(
            "Refusing to start with the default identity secret outside local/dev/test"
        )
