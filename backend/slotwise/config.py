"""Library configuration using pydantic-settings."""

import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Slotwise settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SLOTWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Slotwise"
    environment: str = "development"
    log_level: str = "info"

    # Working hours (start inclusive, end exclusive)
    work_hours_start: int = 9
    work_hours_end: int = 17

    # Recommendations
    default_top_n: int = 5
    weights_path: Optional[Path] = None

    # Preference learning
    full_confidence_history_size: int = 20

    # Conflict resolution
    alternative_lead_days: int = 7


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings


def configure_logging(config: Settings | None = None) -> None:
    """Configure root logging from settings."""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
