"""
One-shot speech recognizer.

Each ``start_listening`` opens a single recognition session: capture one
utterance, send it to the recognition service and deliver the best
alternative. Sessions run on a daemon thread; ``stop_listening`` destroys the
session, which ends its capture and drops anything it produces afterwards.
Only one session captures at a time.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol

import speech_recognition as sr

from solution_wheel.config.settings import SpeechSettings
from solution_wheel.speech.audio import SoundDeviceSource
from solution_wheel.speech.base import ErrorCallback, ResultCallback, SpeechRecognizer
from solution_wheel.speech.errors import (
    NOT_AVAILABLE_MESSAGE,
    PERMISSION_REQUIRED_MESSAGE,
    RecognitionError,
    RecognitionFailure,
    error_message,
)
from solution_wheel.speech.permissions import MicrophonePermission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultBatch:
    """Alternatives for one partial or final recognition update, best first."""

    alternatives: list[str] = field(default_factory=list)
    final: bool = True


class RecognitionEngine(Protocol):
    """What a one-shot session needs from a recognition service."""

    def is_available(self) -> bool:
        ...

    def recognize(self, stop_event: threading.Event) -> Iterator[ResultBatch]:
        """Capture one utterance and yield result batches.

        Capture must end promptly once ``stop_event`` is set.

        Raises:
            RecognitionFailure: When the attempt fails
        """
        ...


class WebSpeechEngine:
    """Google Web Speech recognition through SpeechRecognition.

    Capture heuristics come from ``SpeechSettings``: the phrase must contain
    at least ``min_speech_length_ms`` of speech, ends after
    ``complete_silence_ms`` of silence, and ``possibly_complete_silence_ms``
    of silence is kept around it.
    """

    def __init__(self, settings: SpeechSettings, permission: Optional[MicrophonePermission] = None) -> None:
        self._settings = settings
        self._permission = permission or MicrophonePermission()

        self._recognizer = sr.Recognizer()
        self._recognizer.dynamic_energy_threshold = True
        self._recognizer.pause_threshold = settings.complete_silence_ms / 1000
        self._recognizer.phrase_threshold = settings.min_speech_length_ms / 1000
        self._recognizer.non_speaking_duration = min(
            settings.possibly_complete_silence_ms / 1000,
            self._recognizer.pause_threshold,
        )

    def is_available(self) -> bool:
        return self._permission.has_input_device()

    def recognize(self, stop_event: threading.Event) -> Iterator[ResultBatch]:
        try:
            source = SoundDeviceSource(
                self._settings.sample_rate,
                self._settings.block_size,
                stop_event=stop_event,
            )
            with source:
                audio = self._recognizer.listen(
                    source,
                    timeout=self._settings.listen_timeout,
                    phrase_time_limit=self._settings.phrase_time_limit,
                )
            if stop_event.is_set():
                logger.debug("Capture stopped before recognition")
                return
            response = self._recognizer.recognize_google(
                audio,
                language=self._settings.language,
                show_all=True,
            )
        except sr.WaitTimeoutError as e:
            raise RecognitionFailure(RecognitionError.SPEECH_TIMEOUT, str(e)) from e
        except sr.UnknownValueError as e:
            raise RecognitionFailure(RecognitionError.NO_MATCH, str(e)) from e
        except sr.RequestError as e:
            raise RecognitionFailure(classify_request_error(e), str(e)) from e
        except TimeoutError as e:
            raise RecognitionFailure(RecognitionError.NETWORK_TIMEOUT, str(e)) from e
        except OSError as e:
            raise RecognitionFailure(RecognitionError.AUDIO, str(e)) from e

        alternatives = parse_alternatives(response)[: self._settings.max_results]
        if not alternatives:
            raise RecognitionFailure(RecognitionError.NO_MATCH)
        yield ResultBatch(alternatives, final=True)


def classify_request_error(error: Exception) -> RecognitionError:
    """Map a SpeechRecognition ``RequestError`` onto a failure code."""
    text = str(error).lower()
    if "timed out" in text or "timeout" in text:
        return RecognitionError.NETWORK_TIMEOUT
    if text.startswith("recognition request failed"):
        return RecognitionError.SERVER
    return RecognitionError.NETWORK


def parse_alternatives(response) -> list[str]:
    """Transcripts from a ``recognize_google(show_all=True)`` response.

    The service answers ``[]`` when nothing was recognized and a dict with an
    ``alternative`` list otherwise.
    """
    if not isinstance(response, dict):
        return []
    return [
        alt["transcript"]
        for alt in response.get("alternative", [])
        if alt.get("transcript")
    ]


class _RecognitionSession:
    """One listening attempt; dropped callbacks once destroyed."""

    def __init__(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        self._on_result = on_result
        self._on_error = on_error
        self._destroyed = threading.Event()

    @property
    def destroyed(self) -> bool:
        return self._destroyed.is_set()

    def destroy(self) -> None:
        self._destroyed.set()

    @property
    def stop_event(self) -> threading.Event:
        return self._destroyed

    def on_batch(self, batch: ResultBatch) -> None:
        kind = "final" if batch.final else "partial"
        logger.debug(f"Got {kind} results: {batch.alternatives}")
        if self.destroyed:
            return
        if batch.alternatives:
            self._on_result(batch.alternatives[0])
        elif batch.final:
            logger.warning("Received empty results")

    def on_error(self, code: int) -> None:
        message = error_message(code)
        logger.error(f"Speech recognition error: {message}")
        if not self.destroyed:
            self._on_error(message)


class IntentSpeechRecognizer(SpeechRecognizer):
    """Permission-gated, one-utterance-per-start recognizer."""

    def __init__(
        self,
        settings: Optional[SpeechSettings] = None,
        permission: Optional[MicrophonePermission] = None,
        engine: Optional[RecognitionEngine] = None,
    ) -> None:
        self._settings = settings or SpeechSettings()
        self._permission = permission or MicrophonePermission()
        self._engine = engine or WebSpeechEngine(self._settings, self._permission)
        self._session: Optional[_RecognitionSession] = None
        self._lock = threading.Lock()
        # held by the worker that owns the microphone
        self._capture_lock = threading.Lock()

    def is_available(self) -> bool:
        available = self._engine.is_available()
        logger.debug(f"Speech recognition available: {available}")
        return available

    @property
    def is_listening(self) -> bool:
        with self._lock:
            return self._session is not None

    def start_listening(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        if not self._engine.is_available():
            logger.error(NOT_AVAILABLE_MESSAGE)
            on_error(NOT_AVAILABLE_MESSAGE)
            return

        if not self._permission.is_granted():
            logger.debug("No microphone permission, requesting...")
            self._permission.request()
            on_error(PERMISSION_REQUIRED_MESSAGE)
            return

        with self._lock:
            if self._session is not None:
                busy = True
            else:
                busy = False
                session = _RecognitionSession(on_result, on_error)
                self._session = session

        if busy:
            on_error(error_message(RecognitionError.RECOGNIZER_BUSY))
            return

        logger.debug(f"Starting speech recognition ({self._settings.language})...")
        try:
            threading.Thread(
                target=self._run_session,
                args=(session,),
                name="speech-session",
                daemon=True,
            ).start()
        except RuntimeError as e:
            self._finish(session)
            message = f"Failed to start speech recognition: {e}"
            logger.error(message)
            on_error(message)

    def stop_listening(self) -> None:
        with self._lock:
            session, self._session = self._session, None
        if session is None:
            return
        logger.debug("Stopping speech recognition")
        session.destroy()

    def _run_session(self, session: _RecognitionSession) -> None:
        try:
            with self._capture_lock:
                if session.destroyed:
                    return
                for batch in self._engine.recognize(session.stop_event):
                    if session.destroyed:
                        break
                    session.on_batch(batch)
        except RecognitionFailure as failure:
            session.on_error(failure.code)
        except Exception as e:
            logger.exception(f"Unexpected recognition failure: {e}")
            session.on_error(RecognitionError.CLIENT)
        finally:
            self._finish(session)

    def _finish(self, session: _RecognitionSession) -> None:
        with self._lock:
            if self._session is session:
                self._session = None
