"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WheelSettings(BaseSettings):
    """Spin animation settings."""

    model_config = SettingsConfigDict(env_prefix="SOLUTION_WHEEL_WHEEL_", extra="ignore")

    spin_duration_ms: float = Field(default=3000.0, gt=0)
    easing: str = "fast_out_slow_in"

    # Extra full turns per spin, drawn from [min, max)
    min_extra_rotations: int = Field(default=3, ge=1)
    max_extra_rotations: int = Field(default=6, ge=2)

    @model_validator(mode="after")
    def check_rotation_range(self) -> "WheelSettings":
        if self.max_extra_rotations <= self.min_extra_rotations:
            raise ValueError(
                f"max_extra_rotations ({self.max_extra_rotations}) must be greater than "
                f"min_extra_rotations ({self.min_extra_rotations})"
            )
        return self


class SpeechSettings(BaseSettings):
    """Speech recognition settings."""

    model_config = SettingsConfigDict(
        env_prefix="SOLUTION_WHEEL_SPEECH_",
        extra="ignore",
        protected_namespaces=("settings_",),
    )

    backend: Literal["intent", "streaming", "auto"] = "auto"
    language: str = "he-IL"

    # One-shot session heuristics
    min_speech_length_ms: int = 1000
    complete_silence_ms: int = 1000
    possibly_complete_silence_ms: int = 500
    max_results: int = 3
    listen_timeout: float = 10.0
    phrase_time_limit: float = 15.0

    # Audio capture
    sample_rate: int = 16000
    block_size: int = 1024  # frames per tap buffer

    # Streaming backend model (vosk)
    model_path: Path = Field(default_factory=lambda: Path.home() / ".cache" / "vosk" / "vosk-model-small-he")


class WindowSettings(BaseSettings):
    """pygame window settings."""

    model_config = SettingsConfigDict(env_prefix="SOLUTION_WHEEL_WINDOW_", extra="ignore")

    width: int = 480
    height: int = 800
    fps: int = 60
    title: str = "גלגל הפתרונות"
    wheel_size: int = 300
    fullscreen: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SOLUTION_WHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_file: Path = Path("solution_wheel.log")

    # Nested settings
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
