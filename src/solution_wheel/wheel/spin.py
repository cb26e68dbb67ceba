"""Spin target selection and the rotation controller.

Sectors are laid out by catalog index, but the wheel turns clockwise under a
fixed pointer, so the sector that has to end up under the pointer is the
*reversed* index. The caption always uses the logical ``target`` index.

Angles are in degrees. The stored baseline only ever grows; it is wrapped
into [0, 360) transiently when computing the next delta so every tween runs
forward.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from solution_wheel.animation.engine import AnimationEngine
from solution_wheel.animation.timeline import Timeline
from solution_wheel.config.settings import WheelSettings
from solution_wheel.core.state import Landed, Spinning, WheelState, WheelStateMachine
from solution_wheel.wheel.options import SOLUTION_OPTIONS, SolutionOption, option_at, section_angle

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random.Random.randrange`` semantics."""

    def randrange(self, start: int, stop: int = ..., step: int = ...) -> int:
        ...


@dataclass(frozen=True)
class SpinPlan:
    """Everything decided at the moment a spin starts."""

    target: int
    reversed_section: int
    delta: float
    extra_rotations: int
    start_angle: float
    target_angle: float


def reverse_section(target: int, section_count: int) -> int:
    """Map a logical sector index onto the clockwise rotation index."""
    return (section_count - target - 1) % section_count


def plan_spin(
    current_angle: float,
    section_count: int,
    rng: RandomSource,
    min_rotations: int = 3,
    max_rotations: int = 6,
) -> SpinPlan:
    """Pick a random target sector and the angle that brings it under the pointer.

    Args:
        current_angle: Stored rotation baseline in degrees (not wrapped)
        section_count: Number of sectors on the wheel
        rng: Random source; ``randrange(n)`` picks the target, then
            ``randrange(min_rotations, max_rotations)`` the extra turns
        min_rotations: Fewest extra full turns (inclusive)
        max_rotations: Most extra full turns (exclusive)

    Raises:
        ValueError: On an empty wheel or an empty rotation range
    """
    size = section_angle(section_count)
    if max_rotations <= min_rotations:
        raise ValueError(f"Empty rotation range [{min_rotations}, {max_rotations})")

    target = rng.randrange(section_count)
    reversed_section = reverse_section(target, section_count)

    base = current_angle % 360.0
    delta = (reversed_section * size + size / 2) - base

    extra_rotations = rng.randrange(min_rotations, max_rotations)
    target_angle = current_angle + extra_rotations * 360.0 + delta

    return SpinPlan(
        target=target,
        reversed_section=reversed_section,
        delta=delta,
        extra_rotations=extra_rotations,
        start_angle=current_angle,
        target_angle=target_angle,
    )


def sector_under_pointer(angle: float, section_count: int) -> int:
    """Index of the sector centered under the 12 o'clock pointer.

    Sector ``i`` is drawn clockwise from 12 o'clock over
    ``[i * size, (i + 1) * size)`` and the whole wheel is then rotated
    clockwise by ``angle``.
    """
    size = section_angle(section_count)
    offset = (-angle) % 360.0
    return int(offset // size) % section_count


LandedListener = Callable[[SolutionOption], None]


class SpinController:
    """Drives the wheel from a spin request to the landed option.

    Only one spin can be in flight: requests while spinning are ignored and
    leave the running tween untouched.
    """

    ANIMATION_NAME = "wheel_spin"

    def __init__(
        self,
        options: Sequence[SolutionOption] = SOLUTION_OPTIONS,
        settings: Optional[WheelSettings] = None,
        rng: Optional[RandomSource] = None,
        engine: Optional[AnimationEngine] = None,
        state_machine: Optional[WheelStateMachine] = None,
    ) -> None:
        if not options:
            raise ValueError("The wheel needs at least one option")

        self._options = tuple(options)
        self._settings = settings or WheelSettings()
        self._rng = rng or random.Random()
        self._engine = engine or AnimationEngine()
        self._machine = state_machine or WheelStateMachine()

        self._baseline = 0.0
        self._angle = 0.0
        self._last_landed: Optional[Landed] = None
        self._landed_listeners: list[LandedListener] = []

    @property
    def options(self) -> tuple[SolutionOption, ...]:
        return self._options

    @property
    def state(self) -> WheelState:
        return self._machine.state

    @property
    def is_spinning(self) -> bool:
        return self._machine.is_spinning

    @property
    def angle(self) -> float:
        """Current rendered angle, animated while spinning."""
        return self._angle

    @property
    def baseline(self) -> float:
        """Rotation state the next spin starts from."""
        return self._baseline

    @property
    def selected_option(self) -> Optional[SolutionOption]:
        """Most recent landed option; kept while the next spin runs."""
        return self._last_landed.option if self._last_landed else None

    def add_landed_listener(self, callback: LandedListener) -> None:
        self._landed_listeners.append(callback)

    def request_spin(self) -> bool:
        """Start a spin unless one is already running.

        Returns:
            True if a new spin started
        """
        if self.is_spinning:
            logger.debug("Spin request ignored: wheel is already spinning")
            return False

        plan = plan_spin(
            self._baseline,
            len(self._options),
            self._rng,
            self._settings.min_extra_rotations,
            self._settings.max_extra_rotations,
        )

        spinning = Spinning(plan.target, plan.start_angle, plan.target_angle)
        if not self._machine.transition(spinning):
            return False

        timeline = Timeline.rotation(
            plan.start_angle,
            plan.target_angle,
            duration=self._settings.spin_duration_ms,
            easing=self._settings.easing,
            name=self.ANIMATION_NAME,
        )
        self._engine.play(
            timeline,
            name=self.ANIMATION_NAME,
            group="wheel",
            on_update=self._on_tween_update,
            on_complete=lambda: self._on_spin_complete(plan),
        )

        logger.info(
            f"Spin started: target={plan.target} reversed={plan.reversed_section} "
            f"turns={plan.extra_rotations} {plan.start_angle:.1f} -> {plan.target_angle:.1f}"
        )
        return True

    def update(self, delta_ms: float) -> None:
        """Advance the spin tween by one frame."""
        self._engine.update(delta_ms)

    def _on_tween_update(self, values: dict) -> None:
        angle = values.get("angle")
        if angle is not None:
            self._angle = angle

    def _on_spin_complete(self, plan: SpinPlan) -> None:
        self._baseline = plan.target_angle
        self._angle = plan.target_angle

        option = option_at(self._options, plan.target)
        landed = Landed(option, plan.target)
        self._last_landed = landed
        self._machine.transition(landed)

        logger.info(f"Wheel landed on #{plan.target}: {option.description}")

        for listener in self._landed_listeners:
            try:
                listener(option)
            except Exception as e:
                logger.error(f"Error in landed listener: {e}")
