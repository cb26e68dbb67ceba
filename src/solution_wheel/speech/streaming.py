"""
Continuous speech recognizer.

After a one-time authorization, an input stream (the audio tap) pushes every
captured buffer into a streaming recognition task running offline on a Vosk
model. Every change of the best transcript so far is forwarded, partials
included.
"""

import json
import logging
import queue
import threading
from typing import Any, Callable, Optional

from solution_wheel.config.settings import SpeechSettings
from solution_wheel.speech.base import ErrorCallback, ResultCallback, SpeechRecognizer
from solution_wheel.speech.errors import NOT_AUTHORIZED_MESSAGE
from solution_wheel.speech.permissions import AuthorizationStatus, MicrophonePermission

logger = logging.getLogger(__name__)

# (model_path, sample_rate) -> object with the KaldiRecognizer API
RecognizerFactory = Callable[[str, int], Any]
# (sample_rate, block_size, tap_callback) -> object with start/stop/close
StreamFactory = Callable[[int, int, Callable], Any]


def vosk_recognizer_factory() -> RecognizerFactory:
    """Build KaldiRecognizers, loading each Vosk model once."""
    models: dict[str, Any] = {}

    def create(model_path: str, sample_rate: int):
        import vosk

        if model_path not in models:
            vosk.SetLogLevel(-1)
            logger.info(f"Loading Vosk model from {model_path}")
            models[model_path] = vosk.Model(model_path)
        return vosk.KaldiRecognizer(models[model_path], sample_rate)

    return create


def sounddevice_stream_factory(sample_rate: int, block_size: int, callback: Callable):
    """Mono 16-bit input stream delivering raw buffers to ``callback``."""
    import sounddevice as sd

    return sd.RawInputStream(
        samplerate=sample_rate,
        blocksize=block_size,
        channels=1,
        dtype="int16",
        callback=callback,
    )


class _RecognitionTask:
    """Feeds queued audio buffers to the recognizer on a worker thread."""

    _FINISH = None

    def __init__(self, recognizer, on_result: ResultCallback, on_error: Callable[[str], None]) -> None:
        self._recognizer = recognizer
        self._on_result = on_result
        self._on_error = on_error
        self._buffers: queue.Queue = queue.Queue()
        self._segments: list[str] = []
        self._last_transcript = ""
        self._thread = threading.Thread(target=self._run, name="speech-stream", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def append(self, data: bytes) -> None:
        self._buffers.put(data)

    def finish(self) -> None:
        """Mark the end of audio; the final transcript is still delivered."""
        self._buffers.put(self._FINISH)

    def _run(self) -> None:
        try:
            while True:
                data = self._buffers.get()
                if data is self._FINISH:
                    final = json.loads(self._recognizer.FinalResult()).get("text", "")
                    self._publish(self._commit(final))
                    break

                if self._recognizer.AcceptWaveform(data):
                    text = json.loads(self._recognizer.Result()).get("text", "")
                    self._publish(self._commit(text))
                else:
                    partial = json.loads(self._recognizer.PartialResult()).get("partial", "")
                    self._publish(self._compose(partial))
        except Exception as e:
            logger.error(f"Recognition task failed: {e}")
            self._on_error(str(e) or type(e).__name__)

    def _commit(self, text: str) -> str:
        text = text.strip()
        if text:
            self._segments.append(text)
        return self._compose("")

    def _compose(self, partial: str) -> str:
        parts = self._segments + ([partial.strip()] if partial.strip() else [])
        return " ".join(parts)

    def _publish(self, transcript: str) -> None:
        if transcript and transcript != self._last_transcript:
            self._last_transcript = transcript
            self._on_result(transcript)


class StreamingSpeechRecognizer(SpeechRecognizer):
    """Authorization-gated continuous recognizer."""

    def __init__(
        self,
        settings: Optional[SpeechSettings] = None,
        permission: Optional[MicrophonePermission] = None,
        recognizer_factory: Optional[RecognizerFactory] = None,
        stream_factory: Optional[StreamFactory] = None,
    ) -> None:
        self._settings = settings or SpeechSettings()
        self._permission = permission or MicrophonePermission()
        self._recognizer_factory = recognizer_factory or vosk_recognizer_factory()
        self._stream_factory = stream_factory or sounddevice_stream_factory

        self._lock = threading.Lock()
        self._attempt = 0  # bumped by every start/stop; stale authorizations are ignored
        self._task: Optional[_RecognitionTask] = None
        self._stream = None
        self._on_result: Optional[ResultCallback] = None
        self._on_error: Optional[ErrorCallback] = None

    def is_available(self) -> bool:
        return self._settings.model_path.is_dir() and self._permission.has_input_device()

    @property
    def is_listening(self) -> bool:
        with self._lock:
            return self._task is not None

    def start_listening(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        # a live stream is finished before the new attempt replaces it
        self.stop_listening()

        with self._lock:
            self._attempt += 1
            attempt = self._attempt
            self._on_result = on_result
            self._on_error = on_error

        def on_authorization(status: AuthorizationStatus) -> None:
            with self._lock:
                if attempt != self._attempt:
                    logger.debug("Authorization answered for a stopped attempt")
                    return
            if status == AuthorizationStatus.AUTHORIZED:
                self._start_recognition(attempt)
            else:
                logger.warning(f"Speech recognition authorization: {status.name}")
                on_error(NOT_AUTHORIZED_MESSAGE)

        self._permission.request(on_authorization)

    def stop_listening(self) -> None:
        with self._lock:
            self._attempt += 1
            task, self._task = self._task, None
            stream, self._stream = self._stream, None

        if stream is not None:
            try:
                stream.stop()
                stream.close()
            except Exception as e:
                logger.error(f"Error stopping audio capture: {e}")
        if task is not None:
            logger.debug("Stopping speech recognition")
            task.finish()

    def _start_recognition(self, attempt: int) -> None:
        on_result, on_error = self._on_result, self._on_error

        try:
            recognizer = self._recognizer_factory(str(self._settings.model_path), self._settings.sample_rate)
        except Exception as e:
            message = f"Failed to load speech model: {e}"
            logger.error(message)
            on_error(message)
            return

        task = _RecognitionTask(recognizer, on_result, lambda message: self._on_task_error(task, message))

        def tap(indata, frames, time_info, status) -> None:
            if status:
                logger.debug(f"Audio tap status: {status}")
            task.append(bytes(indata))

        try:
            stream = self._stream_factory(self._settings.sample_rate, self._settings.block_size, tap)
        except Exception as e:
            message = f"Could not open microphone: {e}"
            logger.error(message)
            on_error(message)
            return

        with self._lock:
            if attempt != self._attempt:
                stream.close()
                return
            self._task = task
            self._stream = stream

        task.start()
        try:
            stream.start()
        except Exception as e:
            message = f"Audio engine failed to start: {e}"
            logger.error(message)
            self.stop_listening()
            on_error(message)
            return

        logger.info("Streaming speech recognition started")

    def _on_task_error(self, task: _RecognitionTask, message: str) -> None:
        with self._lock:
            current = self._task is task
            on_error = self._on_error
        if not current:
            return
        self.stop_listening()
        if on_error:
            on_error(message)
