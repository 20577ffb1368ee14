"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ==========================================================================
    # Dice Engine
    # ==========================================================================
    # Rolls kept in the shared history before the oldest is dropped
    history_max_entries: int = Field(default=50, ge=1)

    # Seed for the shared dice generator (None = system entropy).
    # Set DICE_SEED for reproducible sessions.
    dice_seed: int | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
