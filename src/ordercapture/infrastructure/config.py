"""Runtime configuration, loaded from ``ORDERCAPTURE_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORDERCAPTURE_",
        env_file=".env",
        extra="ignore",
    )

    DATA_DIR: Path = Field(
        default_factory=lambda: Path.cwd() / "data",
        description="Directory holding the JSON stores",
    )
    LOG_LEVEL: str = Field("WARNING", description="Root log level for the CLI")
    PUBLISH_EVENTS: bool = Field(True, description="Log domain events after each change")


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Return the cached settings, loading them on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
