"""Speech-to-text facade with one-shot and streaming backends."""

from solution_wheel.speech.base import ErrorCallback, ResultCallback, SpeechRecognizer
from solution_wheel.speech.errors import (
    NOT_AUTHORIZED_MESSAGE,
    NOT_AVAILABLE_MESSAGE,
    PERMISSION_REQUIRED_MESSAGE,
    RecognitionError,
    RecognitionFailure,
    error_message,
)
from solution_wheel.speech.factory import create_speech_recognizer
from solution_wheel.speech.permissions import AuthorizationStatus, MicrophonePermission

__all__ = [
    "SpeechRecognizer",
    "ResultCallback",
    "ErrorCallback",
    "RecognitionError",
    "RecognitionFailure",
    "error_message",
    "PERMISSION_REQUIRED_MESSAGE",
    "NOT_AUTHORIZED_MESSAGE",
    "NOT_AVAILABLE_MESSAGE",
    "AuthorizationStatus",
    "MicrophonePermission",
    "create_speech_recognizer",
]
