"""Configuration management for chatmachine."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import LogProfile, configure_logging


class Settings(BaseSettings):
    """Runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="CHATMACHINE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Dispatch
    max_transitions_per_turn: int = Field(default=32, ge=1, description="Chained transitions allowed in one turn")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: LogProfile = Field(default="default", description="Log output profile")


def get_settings(**overrides: object) -> Settings:
    """Get settings and configure logging from them.

    Args:
        overrides: Field values taking precedence over the environment

    Returns:
        Settings instance
    """
    settings = Settings(**overrides)
    configure_logging(profile=settings.log_profile, level=settings.log_level)
    return settings
