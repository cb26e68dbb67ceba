from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from solution_wheel.config.settings import Settings, SpeechSettings, WheelSettings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    settings = Settings()

    assert settings.wheel.spin_duration_ms == 3000
    assert settings.wheel.easing == "fast_out_slow_in"
    assert (settings.wheel.min_extra_rotations, settings.wheel.max_extra_rotations) == (3, 6)
    assert settings.speech.language == "he-IL"
    assert settings.speech.max_results == 3
    assert settings.speech.block_size == 1024
    assert settings.window.title == "גלגל הפתרונות"


def test_section_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SOLUTION_WHEEL_SPEECH_BACKEND", "intent")
    monkeypatch.setenv("SOLUTION_WHEEL_WHEEL_SPIN_DURATION_MS", "1500")
    monkeypatch.setenv("SOLUTION_WHEEL_DEBUG", "true")
    # Unprefixed variables must not leak into sections
    monkeypatch.setenv("LANGUAGE", "en_US:en")

    settings = Settings()

    assert settings.debug is True
    assert settings.speech.backend == "intent"
    assert settings.speech.language == "he-IL"
    assert settings.wheel.spin_duration_ms == 1500


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOLUTION_WHEEL_SPEECH_BACKEND", "cloud")
    with pytest.raises(ValidationError):
        SpeechSettings()
    with pytest.raises(ValidationError):
        WheelSettings(spin_duration_ms=0)


def test_empty_rotation_range_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValidationError, match="max_extra_rotations"):
        WheelSettings(min_extra_rotations=4, max_extra_rotations=4)

    monkeypatch.setenv("SOLUTION_WHEEL_WHEEL_MIN_EXTRA_ROTATIONS", "5")
    monkeypatch.setenv("SOLUTION_WHEEL_WHEEL_MAX_EXTRA_ROTATIONS", "4")
    with pytest.raises(ValidationError):
        WheelSettings()
