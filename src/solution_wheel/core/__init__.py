"""Core framework components for the solution wheel."""

from .state import Idle, Landed, Spinning, WheelState, WheelStateMachine
from .events import EventBus, Event, EventType

__all__ = [
    "Idle",
    "Landed",
    "Spinning",
    "WheelState",
    "WheelStateMachine",
    "EventBus",
    "Event",
    "EventType",
]
