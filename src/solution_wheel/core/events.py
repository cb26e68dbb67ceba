"""
Event bus system for the solution wheel.

Provides pub/sub messaging between the window, the spin controller and the
speech facade. Speech callbacks run on worker threads, so they post events
through ``post_threadsafe`` and the frame loop drains the queue.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import asyncio
import logging
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    SPIN_REQUESTED = auto()
    MIC_TOGGLED = auto()
    TEXT_INPUT = auto()
    TEXT_BACKSPACE = auto()

    # Wheel events
    SPIN_STARTED = auto()
    SPIN_LANDED = auto()

    # Speech events
    SPEECH_RESULT = auto()
    SPEECH_ERROR = auto()

    TICK = auto()  # Frame tick


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Events are either dispatched immediately with ``emit`` or queued and
    dispatched when the frame loop calls ``process_queue``.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch an event to its handlers immediately."""
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for later processing (loop thread only)."""
        self._queue.put_nowait(event)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remember the loop that drains the queue."""
        self._loop = loop

    def post_threadsafe(self, event: Event) -> None:
        """Queue an event from any thread.

        Without a bound loop the event is queued directly, which is only
        safe when called from the thread that owns the bus.
        """
        if self._loop is None or self._loop.is_closed():
            self.queue_event(event)
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def process_queue(self) -> None:
        """Process all queued events."""
        while not self._queue.empty():
            event = await self._queue.get()
            self._dispatch(event)
            self._queue.task_done()

    @property
    def pending(self) -> int:
        """Number of queued events."""
        return self._queue.qsize()

    def _dispatch(self, event: Event) -> None:
        # copy, handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")


# Convenience functions for creating common events
def spin_requested_event(source: str = "button") -> Event:
    """Create a spin request event."""
    return Event(EventType.SPIN_REQUESTED, source=source)


def speech_result_event(text: str) -> Event:
    """Create a speech transcript event."""
    return Event(EventType.SPEECH_RESULT, data={"text": text}, source="speech")


def speech_error_event(message: str) -> Event:
    """Create a speech error event."""
    return Event(EventType.SPEECH_ERROR, data={"message": message}, source="speech")


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
