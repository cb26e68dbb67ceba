"""
State machine for the wheel.

States:
    Idle: No spin has happened yet
    Spinning: The rotation tween is running toward a target sector
    Landed: The last spin finished on an option

Each state is a frozen dataclass carrying exactly the data that is valid in
that state, so "spinning but with a landed option" cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from solution_wheel.wheel.options import SolutionOption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """Waiting for the first spin."""


@dataclass(frozen=True)
class Spinning:
    """A spin is in flight."""
    target: int
    start_angle: float
    target_angle: float


@dataclass(frozen=True)
class Landed:
    """The wheel stopped on ``option`` (catalog index ``index``)."""
    option: SolutionOption
    index: int


WheelState = Idle | Spinning | Landed

StateListener = Callable[[WheelState, WheelState], None]


class WheelStateMachine:
    """
    Manages wheel state and transitions.

    Transitions are validated by state kind; listeners are notified with
    ``(old_state, new_state)`` after every accepted transition.
    """

    VALID_TRANSITIONS: list[tuple[type, type]] = [
        (Idle, Spinning),
        (Spinning, Landed),
        (Landed, Spinning),  # Spin again
    ]

    def __init__(self, initial_state: WheelState | None = None) -> None:
        self._state: WheelState = initial_state or Idle()
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"WheelStateMachine initialized with state: {type(self._state).__name__}")

    @property
    def state(self) -> WheelState:
        """Get current state."""
        return self._state

    @property
    def is_spinning(self) -> bool:
        return isinstance(self._state, Spinning)

    def can_transition(self, to_state: WheelState) -> bool:
        """Check if transition to given state is valid."""
        return (type(self._state), type(to_state)) in self._valid_transitions

    def transition(self, to_state: WheelState) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {type(self._state).__name__} -> {type(to_state).__name__}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {type(old_state).__name__} -> {type(to_state).__name__}")

        # Notify listeners
        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
