"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─────────────────────────────────────────────────────────────
# MODE ENUMS
# ─────────────────────────────────────────────────────────────


class LogLevel(str, Enum):
    """Logging level names understood by the logging module."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Board configuration."""

    model_config = SettingsConfigDict(env_prefix="GAME_")

    height: int = Field(default=6, ge=4, description="Number of rows")
    width: int = Field(default=7, ge=4, description="Number of columns")


class PlayerSettings(BaseSettings):
    """Start-of-game player colors. A blank color leaves the slot out."""

    model_config = SettingsConfigDict(env_prefix="PLAYER_")

    p1_color: str = "red"
    p2_color: str = "blue"
    computer_color: str = ""


class AISettings(BaseSettings):
    """Computer player configuration."""

    model_config = SettingsConfigDict(env_prefix="AI_")

    seed: int | None = Field(default=None, description="Seed for reproducible random moves")
    move_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Pause before showing a computer move (CLI only)",
    )


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    log_level: LogLevel = LogLevel.WARNING
    game: GameSettings = Field(default_factory=GameSettings)
    players: PlayerSettings = Field(default_factory=PlayerSettings)
    ai: AISettings = Field(default_factory=AISettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
