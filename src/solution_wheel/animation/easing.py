"""Easing functions for smooth animations.

All functions take a normalized time t (0.0 to 1.0) and return a normalized value.
The wheel uses ``fast_out_slow_in``, a cubic bezier curve that accelerates
briefly and then settles slowly onto the target sector.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()

    # Quadratic
    EASE_IN_QUAD = auto()
    EASE_OUT_QUAD = auto()
    EASE_IN_OUT_QUAD = auto()

    # Cubic
    EASE_IN_CUBIC = auto()
    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()

    # Sine
    EASE_IN_OUT_SINE = auto()

    # Cubic bezier (0.4, 0.0, 0.2, 1.0)
    FAST_OUT_SLOW_IN = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


# Quadratic easing
def ease_in_quad(t: float) -> float:
    """Accelerate from zero velocity."""
    return t * t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Accelerate then decelerate."""
    if t < 0.5:
        return 2 * t * t
    return 1 - pow(-2 * t + 2, 2) / 2


# Cubic easing
def ease_in_cubic(t: float) -> float:
    """Accelerate from zero velocity (cubic)."""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic)."""
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    """Accelerate then decelerate (cubic)."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_in_out_sine(t: float) -> float:
    """Accelerate then decelerate using sine curve."""
    return -(math.cos(math.pi * t) - 1) / 2


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunc:
    """Build an easing function from CSS-style cubic bezier control points.

    The curve runs from (0, 0) to (1, 1). For a given t (the x axis) the
    bezier parameter is found with Newton iterations, falling back to
    bisection when the slope is too flat.

    Args:
        x1, y1: First control point (x1 must be within [0, 1])
        x2, y2: Second control point (x2 must be within [0, 1])

    Raises:
        ValueError: If an x control value is outside [0, 1]
    """
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("Bezier x control points must be within [0, 1]")

    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx
    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def slope_x(s: float) -> float:
        return (3.0 * ax * s + 2.0 * bx) * s + cx

    def solve(x: float) -> float:
        s = x
        for _ in range(8):
            error = sample_x(s) - x
            if abs(error) < 1e-7:
                return s
            d = slope_x(s)
            if abs(d) < 1e-6:
                break
            s -= error / d

        lo, hi = 0.0, 1.0
        s = x
        while lo < hi:
            value = sample_x(s)
            if abs(value - x) < 1e-7:
                return s
            if x > value:
                lo = s
            else:
                hi = s
            if hi - lo < 1e-9:
                break
            s = (lo + hi) / 2
        return s

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return sample_y(solve(t))

    return ease


fast_out_slow_in: EasingFunc = cubic_bezier(0.4, 0.0, 0.2, 1.0)


# Mapping from enum to function
_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,

    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_IN_OUT_QUAD: ease_in_out_quad,

    Easing.EASE_IN_CUBIC: ease_in_cubic,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,

    Easing.EASE_IN_OUT_SINE: ease_in_out_sine,

    Easing.FAST_OUT_SLOW_IN: fast_out_slow_in,
}

# String name mapping for convenience
_EASING_BY_NAME: dict[str, Easing] = {easing.name.lower(): easing for easing in Easing}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "fast_out_slow_in")

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function.

    Args:
        start: Starting value
        end: Ending value
        t: Progress (0.0 to 1.0), clamped
        easing: Easing function to use

    Returns:
        Interpolated value
    """
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t
