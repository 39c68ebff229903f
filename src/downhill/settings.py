"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from downhill.core.constants import (
    ANIMATION_FRAME_SPEED_MS,
    DIAGONAL_SPEED_REDUCER,
    GAME_HEIGHT,
    GAME_WIDTH,
    OBSTACLE_FREQUENCY_INCREASE_THRESHOLD,
    SPEED_INCREASE_THRESHOLD,
    STARTING_SPEED,
)


class DisplaySettings(BaseSettings):
    """Canvas and window settings."""

    # Game canvas in world units
    width: int = Field(default=GAME_WIDTH, gt=0)
    height: int = Field(default=GAME_HEIGHT, gt=0)

    # Simulator window
    scale: int = Field(default=2, ge=1)
    fps: int = Field(default=60, gt=0)
    title: str = "DOWNHILL"


class GameplaySettings(BaseSettings):
    """Tuning numbers for the skier, obstacles and rhino."""

    starting_speed: int = Field(default=STARTING_SPEED, gt=0)
    diagonal_speed_reducer: float = Field(default=DIAGONAL_SPEED_REDUCER, gt=0.0)
    speed_increase_threshold: int = Field(default=SPEED_INCREASE_THRESHOLD, gt=0)
    obstacle_frequency_increase_threshold: int = Field(
        default=OBSTACLE_FREQUENCY_INCREASE_THRESHOLD, gt=0
    )
    animation_frame_ms: float = Field(default=ANIMATION_FRAME_SPEED_MS, gt=0.0)

    # Obstacle placement probability per frame
    obstacle_chance: float = Field(default=1 / 8, gt=0.0, le=1.0)
    obstacle_chance_step: float = Field(default=0.01, ge=0.0)
    obstacle_chance_max: float = Field(default=0.5, gt=0.0, le=1.0)

    # Rhino
    rhino_start_score: int = Field(default=300, ge=0)
    rhino_starting_speed: float = Field(default=4.0, gt=0.0)
    rhino_speed_per_score: float = Field(default=0.002, ge=0.0)
    rhino_max_speed: float = Field(default=12.0, gt=0.0)

    # Fixed seed for reproducible runs; None picks a random one
    seed: int | None = None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOWNHILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Optional directory of <image name>.png files replacing the built-in sprites
    sprites_path: Path | None = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
