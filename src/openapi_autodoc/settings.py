"""Runtime settings, read from AUTODOC_* environment variables or a .env file."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVEL = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Document metadata and logging settings.

    All settings can be configured via environment variables with the prefix
    AUTODOC_. For example, AUTODOC_TITLE="Pet Store" sets the info title.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTODOC_",
        env_file=".env",
        extra="ignore",
    )

    title: str = "API Overview"
    version: str = "1.0.0"
    description: str | None = None
    log_level: LOG_LEVEL = "INFO"
