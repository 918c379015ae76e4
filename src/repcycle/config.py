"""Runtime settings for repcycle."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (project root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

DB_FILENAME = "repcycle.db"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Settings loaded from REPCYCLE_* environment variables.

    REPCYCLE_DATA_DIR overrides where the SQLite database lives and
    REPCYCLE_LOG_LEVEL sets the logging threshold (e.g. DEBUG, INFO).
    """

    model_config = SettingsConfigDict(
        env_prefix="REPCYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DATA_DIR
    log_level: LogLevel = "WARNING"

    # Single-user deployments act as this user
    default_user_id: int = 1

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("data_dir")
    @classmethod
    def _expand_data_dir(cls, value: Path) -> Path:
        return value.expanduser()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging for command-line and server use."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
