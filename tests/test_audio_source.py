from __future__ import annotations

import sys
import threading
import types

import pytest

from helpers import FakePermission
from solution_wheel.config.settings import SpeechSettings
from solution_wheel.speech.audio import SoundDeviceSource
from solution_wheel.speech.intent import WebSpeechEngine


class FakeRawInputStream:
    instances: list["FakeRawInputStream"] = []

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.started = False
        self.closed = False
        FakeRawInputStream.instances.append(self)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False

    def close(self) -> None:
        self.closed = True

    def read(self, frames: int):
        return bytearray(frames * 2), False


class FakePortAudioError(Exception):
    pass


@pytest.fixture
def fake_sounddevice(monkeypatch: pytest.MonkeyPatch):
    module = types.ModuleType("sounddevice")
    module.RawInputStream = FakeRawInputStream
    module.PortAudioError = FakePortAudioError
    FakeRawInputStream.instances = []
    monkeypatch.setitem(sys.modules, "sounddevice", module)
    return module


def test_source_reads_pcm_bytes(fake_sounddevice) -> None:
    with SoundDeviceSource(sample_rate=16000, chunk_size=512) as source:
        raw = FakeRawInputStream.instances[0]
        assert raw.started
        assert raw.kwargs["dtype"] == "int16"
        assert raw.kwargs["channels"] == 1
        assert source.SAMPLE_WIDTH == 2
        assert source.stream.read(source.CHUNK) == bytes(1024)

    assert raw.closed
    assert source.stream is None


def test_open_failure_becomes_oserror(fake_sounddevice) -> None:
    def broken(**kwargs):
        raise FakePortAudioError("Error querying device -1")

    fake_sounddevice.RawInputStream = broken

    with pytest.raises(OSError, match="Could not open microphone"):
        with SoundDeviceSource():
            pass


def test_reads_end_once_stop_event_is_set(fake_sounddevice) -> None:
    stop = threading.Event()

    with SoundDeviceSource(chunk_size=256, stop_event=stop) as source:
        assert source.stream.read(source.CHUNK) == bytes(512)
        stop.set()
        assert source.stream.read(source.CHUNK) == b""

    assert FakeRawInputStream.instances[0].closed


def test_stopped_capture_skips_recognition(fake_sounddevice) -> None:
    engine = WebSpeechEngine(SpeechSettings(), FakePermission())

    def recognize_google(*args, **kwargs):
        raise AssertionError("audio sent for recognition after stop")

    engine._recognizer.recognize_google = recognize_google
    stop = threading.Event()
    stop.set()

    assert list(engine.recognize(stop)) == []
    assert FakeRawInputStream.instances[0].closed
