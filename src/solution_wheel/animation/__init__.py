"""Animation module for the solution wheel."""

from solution_wheel.animation.easing import Easing, cubic_bezier, fast_out_slow_in, get_easing, interpolate
from solution_wheel.animation.timeline import Timeline, Track, Keyframe, PlayState
from solution_wheel.animation.engine import AnimationEngine

__all__ = [
    # Easing
    "Easing",
    "cubic_bezier",
    "fast_out_slow_in",
    "get_easing",
    "interpolate",
    # Timeline
    "Timeline",
    "Track",
    "Keyframe",
    "PlayState",
    # Engine
    "AnimationEngine",
]
