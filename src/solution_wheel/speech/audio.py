"""Microphone capture for SpeechRecognition backed by sounddevice.

``speech_recognition.Recognizer.listen`` only needs an ``AudioSource`` whose
``stream`` has ``read(frames)``; this one reads 16-bit mono PCM from a
PortAudio input stream.
"""

import logging
import threading
from typing import Optional

import speech_recognition as sr

logger = logging.getLogger(__name__)


class _RawStreamReader:
    """Adapts ``sounddevice.RawInputStream.read`` to the bytes-only API.

    Once ``stop_event`` is set every read returns ``b""``, which ``listen``
    treats as the end of the stream.
    """

    def __init__(self, raw_stream, stop_event: Optional[threading.Event] = None) -> None:
        self._raw = raw_stream
        self._stop_event = stop_event

    def read(self, frames: int) -> bytes:
        if self._stop_event is not None and self._stop_event.is_set():
            return b""
        data, overflowed = self._raw.read(frames)
        if overflowed:
            logger.debug("Input overflow while reading microphone")
        return bytes(data)


class SoundDeviceSource(sr.AudioSource):
    """Mono 16-bit microphone source.

    Args:
        sample_rate: Capture rate in Hz
        chunk_size: Frames per read
        device: PortAudio device index or name, None for the default input
        stop_event: Ends the capture early once set
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        chunk_size: int = 1024,
        device: Optional[int | str] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.SAMPLE_RATE = sample_rate
        self.SAMPLE_WIDTH = 2
        self.CHUNK = chunk_size
        self.device = device
        self.stop_event = stop_event
        self.stream: Optional[_RawStreamReader] = None
        self._raw = None

    def __enter__(self) -> "SoundDeviceSource":
        import sounddevice as sd

        try:
            self._raw = sd.RawInputStream(
                samplerate=self.SAMPLE_RATE,
                blocksize=self.CHUNK,
                channels=1,
                dtype="int16",
                device=self.device,
            )
            self._raw.start()
        except sd.PortAudioError as e:
            self._raw = None
            raise OSError(f"Could not open microphone: {e}") from e

        self.stream = _RawStreamReader(self._raw, self.stop_event)
        logger.debug(f"Microphone opened at {self.SAMPLE_RATE} Hz")
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            if self._raw is not None:
                self._raw.stop()
                self._raw.close()
        finally:
            self._raw = None
            self.stream = None
