"""pygame user interface."""

from solution_wheel.ui.controller import (
    SPIN_LABEL_IDLE,
    SPIN_LABEL_SPINNING,
    TEXT_PLACEHOLDER,
    TITLE,
    ScreenController,
)

__all__ = [
    "ScreenController",
    "TITLE",
    "TEXT_PLACEHOLDER",
    "SPIN_LABEL_IDLE",
    "SPIN_LABEL_SPINNING",
]
