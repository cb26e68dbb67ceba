from __future__ import annotations

import threading
import time

from solution_wheel.speech.permissions import AuthorizationStatus


class ScriptedRandom:
    """``randrange`` stand-in returning queued values and recording calls."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.calls: list[tuple[int, ...]] = []

    def randrange(self, *args: int) -> int:
        self.calls.append(args)
        return self._values.pop(0)


class FakePermission:
    """Microphone permission with a fixed answer."""

    def __init__(
        self,
        granted: bool = True,
        has_device: bool = True,
        answer_immediately: bool = True,
    ) -> None:
        self.granted = granted
        self.has_device = has_device
        self.answer_immediately = answer_immediately
        self.requests = 0
        self.pending_handler = None

    def has_input_device(self) -> bool:
        return self.has_device

    def status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED if self.granted else AuthorizationStatus.DENIED

    def is_granted(self) -> bool:
        return self.granted

    def request(self, handler=None) -> None:
        self.requests += 1
        if handler is None:
            return
        if self.answer_immediately:
            handler(self.status())
        else:
            self.pending_handler = handler


class Collector:
    """Thread-safe sink for recognizer callbacks."""

    def __init__(self) -> None:
        self.results: list[str] = []
        self.errors: list[str] = []
        self._changed = threading.Condition()

    def on_result(self, text: str) -> None:
        with self._changed:
            self.results.append(text)
            self._changed.notify_all()

    def on_error(self, message: str) -> None:
        with self._changed:
            self.errors.append(message)
            self._changed.notify_all()

    def wait_for(self, results: int = 0, errors: int = 0, timeout: float = 2.0) -> bool:
        with self._changed:
            return self._changed.wait_for(
                lambda: len(self.results) >= results and len(self.errors) >= errors,
                timeout,
            )


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
