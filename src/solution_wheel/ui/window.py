"""
Main application window using pygame.

Runs the frame loop: pygame input becomes bus events, the bus queue is
drained once per frame and the renderer draws the screen.
"""

import asyncio
import logging
from typing import Optional

import pygame

from solution_wheel.config.settings import WindowSettings
from solution_wheel.core.events import Event, EventBus, EventType, spin_requested_event, tick_event
from solution_wheel.ui.controller import ScreenController
from solution_wheel.ui.renderer import WheelRenderer

logger = logging.getLogger(__name__)


class WheelWindow:
    """
    Desktop window for the solution wheel.

    Keyboard Mapping:
        SPACE: Spin (when the text field is not focused)
        ENTER: Spin
        F2: Toggle listening
        BACKSPACE: Delete the last character of the text field
        ESC: Exit

    Mouse:
        Text field: focus for typing
        Microphone button: toggle listening
        Spin button: spin
    """

    def __init__(
        self,
        settings: WindowSettings,
        event_bus: EventBus,
        screen: ScreenController,
        renderer: Optional[WheelRenderer] = None,
    ) -> None:
        self.settings = settings
        self.event_bus = event_bus
        self.screen = screen
        self.renderer = renderer or WheelRenderer(settings)

        self._surface: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._frame_count = 0
        self._text_focused = False

        logger.info("WheelWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.settings.title)

        flags = pygame.DOUBLEBUF
        if self.settings.fullscreen:
            flags |= pygame.FULLSCREEN

        self._surface = pygame.display.set_mode((self.settings.width, self.settings.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self.renderer.init_fonts()
        pygame.key.start_text_input()

        logger.info(f"Pygame initialized: {self.settings.width}x{self.settings.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.TEXTINPUT:
                if self._text_focused:
                    self.event_bus.emit(Event(EventType.TEXT_INPUT, data={"text": event.text}, source="keyboard"))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE:
            self._running = False

        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.event_bus.emit(spin_requested_event(source="keyboard"))

        elif key == pygame.K_SPACE and not self._text_focused:
            self.event_bus.emit(spin_requested_event(source="keyboard"))

        elif key == pygame.K_F2:
            self.event_bus.emit(Event(EventType.MIC_TOGGLED, source="keyboard"))

        elif key == pygame.K_BACKSPACE and self._text_focused:
            self.event_bus.emit(Event(EventType.TEXT_BACKSPACE, source="keyboard"))

    def _handle_click(self, pos: tuple[int, int]) -> None:
        layout = self.renderer.layout

        self._text_focused = layout["field"].collidepoint(pos)

        if self.screen.speech_available and layout["mic"].collidepoint(pos):
            self.event_bus.emit(Event(EventType.MIC_TOGGLED, source="mouse"))
        elif layout["spin"].collidepoint(pos) and self.screen.spin_enabled:
            self.event_bus.emit(spin_requested_event(source="mouse"))

    def _render(self) -> None:
        if not self._surface:
            return
        self.renderer.draw(self._surface, self.screen, self._text_focused)
        pygame.display.flip()

    async def run(self) -> None:
        """Main frame loop."""
        self._init_pygame()
        self.event_bus.bind_loop(asyncio.get_running_loop())
        self._running = True

        logger.info("Window started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            # Speech results posted from worker threads
            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.settings.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Request loop exit."""
        self._running = False
