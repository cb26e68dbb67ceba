"""
Speech recognizer interface.

Both backends implement the same narrow capability surface so the UI never
knows which one it talks to.
"""

from abc import ABC, abstractmethod
from typing import Callable

ResultCallback = Callable[[str], None]
ErrorCallback = Callable[[str], None]


class SpeechRecognizer(ABC):
    """Capability interface for speech-to-text.

    Contract:
        - ``on_result`` may be called zero or more times per session with the
          latest best-guess transcript.
        - ``on_error`` is called at most once per failed attempt, with a
          human-readable message.
        - ``stop_listening`` is idempotent and safe when not listening.
        - Callbacks may arrive on a worker thread.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether recognition can be attempted on this machine."""
        ...

    @abstractmethod
    def start_listening(self, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        """Begin a recognition attempt."""
        ...

    @abstractmethod
    def stop_listening(self) -> None:
        """End the current attempt, if any."""
        ...

    @property
    @abstractmethod
    def is_listening(self) -> bool:
        ...
