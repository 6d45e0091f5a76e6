"""Environment-driven settings.

Values come from ``CVMAKER_*`` environment variables or a local ``.env``
file; command line flags take precedence over both.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """cvmaker configuration settings."""

    export_dir: Path = Path.home() / "Downloads"
    paper_size: str = "A4"
    font: str = "Helvetica"
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="CVMAKER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
