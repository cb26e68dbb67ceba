"""Recognition failure codes and the text shown for them.

Codes never cross the facade: backends turn them into messages before
calling ``on_error``.
"""

from enum import IntEnum


class RecognitionError(IntEnum):
    """Failure codes a recognition session can end with."""

    NETWORK_TIMEOUT = 1
    NETWORK = 2
    AUDIO = 3
    SERVER = 4
    CLIENT = 5
    SPEECH_TIMEOUT = 6
    NO_MATCH = 7
    RECOGNIZER_BUSY = 8
    INSUFFICIENT_PERMISSIONS = 9


ERROR_MESSAGES: dict[int, str] = {
    RecognitionError.AUDIO: "Audio recording error",
    RecognitionError.CLIENT: "Client side error",
    RecognitionError.INSUFFICIENT_PERMISSIONS: "Insufficient permissions",
    RecognitionError.NETWORK: "Network error",
    RecognitionError.NETWORK_TIMEOUT: "Network timeout",
    RecognitionError.NO_MATCH: "No recognition match",
    RecognitionError.RECOGNIZER_BUSY: "Recognition service busy",
    RecognitionError.SERVER: "Server error",
    RecognitionError.SPEECH_TIMEOUT: "No speech input",
}

PERMISSION_REQUIRED_MESSAGE = "Please grant microphone permission and try again"
NOT_AUTHORIZED_MESSAGE = "Speech recognition not authorized"
NOT_AVAILABLE_MESSAGE = "Speech recognition not available"


def error_message(code: int) -> str:
    """Human-readable text for a failure code."""
    return ERROR_MESSAGES.get(code, f"Unknown error: {int(code)}")


class RecognitionFailure(Exception):
    """Raised by recognition engines; carries a ``RecognitionError`` code."""

    def __init__(self, code: int, detail: str = "") -> None:
        self.code = code
        self.detail = detail
        super().__init__(detail or error_message(code))

    @property
    def message(self) -> str:
        return error_message(self.code)
