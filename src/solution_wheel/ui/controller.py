"""
Screen state for the solution wheel.

Holds everything the window shows apart from pixels: the text field, the
microphone state, the spin button and the landed caption. It reacts to bus
events only, so it runs without a display.
"""

import logging
from typing import Callable, Optional

from solution_wheel.core.events import (
    Event,
    EventBus,
    EventType,
    speech_error_event,
    speech_result_event,
)
from solution_wheel.speech.base import SpeechRecognizer
from solution_wheel.wheel.options import SolutionOption
from solution_wheel.wheel.spin import SpinController

logger = logging.getLogger(__name__)


TITLE = "גלגל הפתרונות"
TEXT_PLACEHOLDER = "תוכל לספר מה קרה? למה אתה מרגיש צורך בפתרון?"
SPIN_LABEL_IDLE = "סובב את הגלגל!"
SPIN_LABEL_SPINNING = "מסתובב..."
MIC_DESCRIPTION = "הקלטה"


class ScreenController:
    """
    UI state driven by the event bus.

    Speech callbacks arrive on worker threads; they are posted back onto the
    bus with ``post_threadsafe`` and applied when the frame loop drains the
    queue.
    """

    def __init__(
        self,
        event_bus: EventBus,
        spin: SpinController,
        recognizer: Optional[SpeechRecognizer] = None,
    ) -> None:
        self._bus = event_bus
        self._spin = spin
        self._recognizer = recognizer

        self._text = ""
        self._is_listening = False
        self._last_error: Optional[str] = None
        self._speech_available = self._check_speech()

        self._unsubscribers: list[Callable[[], None]] = [
            event_bus.subscribe(EventType.SPIN_REQUESTED, self._on_spin_requested),
            event_bus.subscribe(EventType.MIC_TOGGLED, self._on_mic_toggled),
            event_bus.subscribe(EventType.SPEECH_RESULT, self._on_speech_result),
            event_bus.subscribe(EventType.SPEECH_ERROR, self._on_speech_error),
            event_bus.subscribe(EventType.TEXT_INPUT, self._on_text_input),
            event_bus.subscribe(EventType.TEXT_BACKSPACE, self._on_text_backspace),
            event_bus.subscribe(EventType.TICK, self._on_tick),
        ]
        spin.add_landed_listener(self._on_landed)

    def _check_speech(self) -> bool:
        if self._recognizer is None:
            return False
        try:
            return self._recognizer.is_available()
        except Exception as e:
            logger.warning(f"Speech availability check failed: {e}")
            return False

    # --- State -----------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_listening(self) -> bool:
        return self._is_listening

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def speech_available(self) -> bool:
        """Whether the microphone button is shown."""
        return self._speech_available

    @property
    def spin_enabled(self) -> bool:
        return not self._spin.is_spinning

    @property
    def spin_label(self) -> str:
        return SPIN_LABEL_SPINNING if self._spin.is_spinning else SPIN_LABEL_IDLE

    @property
    def wheel_angle(self) -> float:
        return self._spin.angle

    @property
    def selected_option(self) -> Optional[SolutionOption]:
        return self._spin.selected_option

    @property
    def caption(self) -> Optional[str]:
        option = self._spin.selected_option
        return option.caption if option else None

    # --- Event handlers --------------------------------------------------

    def _on_spin_requested(self, event: Event) -> None:
        if self._spin.request_spin():
            self._bus.emit(Event(EventType.SPIN_STARTED, source="wheel"))

    def _on_landed(self, option: SolutionOption) -> None:
        self._bus.emit(Event(
            EventType.SPIN_LANDED,
            data={"caption": option.caption, "description": option.description},
            source="wheel",
        ))

    def _on_mic_toggled(self, event: Event) -> None:
        if not self._speech_available or self._recognizer is None:
            logger.debug("Mic toggle ignored: speech recognition unavailable")
            return

        if self._is_listening:
            self._is_listening = False
            self._recognizer.stop_listening()
            logger.info("Listening stopped")
            return

        self._is_listening = True
        self._last_error = None
        logger.info("Listening started")
        self._recognizer.start_listening(
            on_result=self._post_result,
            on_error=self._post_error,
        )

    def _post_result(self, text: str) -> None:
        self._bus.post_threadsafe(speech_result_event(text))

    def _post_error(self, message: str) -> None:
        self._bus.post_threadsafe(speech_error_event(message))

    def _on_speech_result(self, event: Event) -> None:
        self._text = event.data.get("text", "")

    def _on_speech_error(self, event: Event) -> None:
        message = event.data.get("message", "")
        logger.warning(f"Speech error: {message}")
        self._is_listening = False
        self._last_error = message

    def _on_text_input(self, event: Event) -> None:
        self._text += event.data.get("text", "")

    def _on_text_backspace(self, event: Event) -> None:
        self._text = self._text[:-1]

    def _on_tick(self, event: Event) -> None:
        delta = event.data.get("delta", 0.016)
        self._spin.update(delta * 1000)

    # --- Lifecycle -------------------------------------------------------

    def close(self) -> None:
        """Stop listening and detach from the bus."""
        if self._is_listening and self._recognizer is not None:
            self._recognizer.stop_listening()
        self._is_listening = False
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
