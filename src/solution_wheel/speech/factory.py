"""Backend selection for the speech recognizer facade."""

import logging
from typing import Optional

from solution_wheel.config.settings import SpeechSettings
from solution_wheel.speech.base import SpeechRecognizer
from solution_wheel.speech.permissions import MicrophonePermission

logger = logging.getLogger(__name__)


def create_speech_recognizer(
    settings: Optional[SpeechSettings] = None,
    permission: Optional[MicrophonePermission] = None,
) -> SpeechRecognizer:
    """Create the configured recognizer.

    ``auto`` prefers the streaming backend when its model is installed and
    falls back to the one-shot backend otherwise.
    """
    settings = settings or SpeechSettings()
    permission = permission or MicrophonePermission()

    backend = settings.backend
    if backend == "auto":
        backend = "streaming" if settings.model_path.is_dir() else "intent"
        logger.debug(f"Auto-selected speech backend: {backend}")

    if backend == "streaming":
        from solution_wheel.speech.streaming import StreamingSpeechRecognizer

        logger.info(f"Using streaming speech recognition (model: {settings.model_path})")
        return StreamingSpeechRecognizer(settings, permission)

    from solution_wheel.speech.intent import IntentSpeechRecognizer

    logger.info(f"Using one-shot speech recognition ({settings.language})")
    return IntentSpeechRecognizer(settings, permission)
