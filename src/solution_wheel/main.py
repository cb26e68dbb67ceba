"""
Main entry point for the solution wheel.

Runs the wheel in a desktop pygame window.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from solution_wheel.config.settings import Settings, get_settings
from solution_wheel.core.events import EventBus
from solution_wheel.core.state import WheelStateMachine
from solution_wheel.speech import SpeechRecognizer, create_speech_recognizer
from solution_wheel.wheel.spin import SpinController

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console and file logging."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # File handler - truncate on each run for fresh logs
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Reduce noise from some modules
    logging.getLogger("solution_wheel.animation").setLevel(logging.INFO)
    logging.getLogger("solution_wheel.core.events").setLevel(logging.INFO)


class SolutionWheelApp:
    """Wires the wheel, the speech facade and the window together."""

    def __init__(self, settings: Settings, recognizer: Optional[SpeechRecognizer] = None) -> None:
        # pygame is only needed once a window is created
        from solution_wheel.ui.controller import ScreenController
        from solution_wheel.ui.window import WheelWindow

        self.settings = settings
        self.event_bus = EventBus()
        self.state_machine = WheelStateMachine()
        self.spin = SpinController(settings=settings.wheel, state_machine=self.state_machine)
        self.recognizer = recognizer or create_speech_recognizer(settings.speech)

        self.screen = ScreenController(self.event_bus, self.spin, self.recognizer)
        self.window = WheelWindow(settings.window, self.event_bus, self.screen)

        logger.info(f"Speech recognition available: {self.screen.speech_available}")

    async def run(self) -> None:
        logger.info("Starting solution wheel...")
        try:
            await self.window.run()
        finally:
            self.screen.close()


async def run(settings: Settings) -> None:
    app = SolutionWheelApp(settings)
    await app.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger.info("=" * 50)
    logger.info("Solution Wheel Starting")
    logger.info("=" * 50)
    logger.info("Controls:")
    logger.info("  SPACE/ENTER  - Spin the wheel")
    logger.info("  F2           - Start/stop listening")
    logger.info("  ESC          - Quit")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
