"""
Centralized configuration management for cramdeck.
"""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_db_path() -> Path:
    """Returns the default path for the database file."""
    return Path.home() / ".cramdeck" / "cramdeck.db"


class Settings(BaseSettings):
    """
    Defines application settings, loaded from environment variables or .env files.
    """
    model_config = SettingsConfigDict(
        env_prefix="CRAMDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Overridden by CRAMDECK_DB_PATH.
    db_path: Path = get_default_db_path()


# Create a singleton instance of the settings
settings = Settings()
