"""
GridRush - Application Settings

Loads configuration from environment variables (prefixed ``GRIDRUSH_``) or a
``.env`` file using Pydantic Settings.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game clock
    timer_duration: int = Field(default=300, gt=0)

    # AI opponent
    ai_thinking_delay_ms: int = Field(default=600, ge=0)
    ai_player: int = Field(default=2, ge=1, le=2)

    # Hints
    hints_enabled: bool = True
    min_moves_before_hints: int = Field(default=9, ge=0)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "GRIDRUSH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging at the configured level (DEBUG when debug is on)."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
