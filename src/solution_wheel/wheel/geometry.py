"""Drawing math for the wheel.

Screen coordinates (y grows downward). Angles are degrees measured
clockwise from 12 o'clock, which is where the pointer sits.
"""

import math

import numpy as np


def polar_point(cx: float, cy: float, radius: float, angle_deg: float) -> tuple[float, float]:
    """Point at ``radius`` from the center, ``angle_deg`` clockwise from 12 o'clock."""
    rad = math.radians(angle_deg)
    return (cx + radius * math.sin(rad), cy - radius * math.cos(rad))


def sector_polygon(
    cx: float,
    cy: float,
    radius: float,
    start_deg: float,
    sweep_deg: float,
    steps: int = 16,
) -> list[tuple[float, float]]:
    """Pie slice as a polygon: the center followed by points along the arc."""
    angles = np.radians(np.linspace(start_deg, start_deg + sweep_deg, max(1, steps) + 1))
    xs = cx + radius * np.sin(angles)
    ys = cy - radius * np.cos(angles)
    return [(cx, cy)] + [(float(x), float(y)) for x, y in zip(xs, ys)]


def label_position(
    cx: float,
    cy: float,
    radius: float,
    angle_deg: float,
    fraction: float = 2 / 3,
) -> tuple[float, float]:
    # Labels sit two thirds of the way out from the hub
    return polar_point(cx, cy, radius * fraction, angle_deg)


def pointer_triangle(cx: float, top: float, width: float, height: float) -> list[tuple[float, float]]:
    """Downward arrow head whose tip touches the wheel rim."""
    return [
        (cx - width / 2, top),
        (cx + width / 2, top),
        (cx, top + height),
    ]
