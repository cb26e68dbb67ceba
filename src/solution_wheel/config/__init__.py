"""Configuration for the solution wheel."""

from .settings import Settings, SpeechSettings, WheelSettings, WindowSettings, get_settings

__all__ = ["Settings", "SpeechSettings", "WheelSettings", "WindowSettings", "get_settings"]
