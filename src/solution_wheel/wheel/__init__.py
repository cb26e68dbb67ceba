"""Wheel catalog, spin math and controller."""

from solution_wheel.wheel.options import SOLUTION_OPTIONS, SolutionOption, section_angle
from solution_wheel.wheel.spin import (
    SpinController,
    SpinPlan,
    plan_spin,
    reverse_section,
    sector_under_pointer,
)

__all__ = [
    "SOLUTION_OPTIONS",
    "SolutionOption",
    "section_angle",
    "SpinController",
    "SpinPlan",
    "plan_spin",
    "reverse_section",
    "sector_under_pointer",
]
