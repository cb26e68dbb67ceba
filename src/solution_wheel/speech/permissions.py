"""
Microphone permission checks.

On macOS the system keeps a per-app microphone authorization that is read
and requested through AVFoundation (PyObjC). Elsewhere there is no runtime
prompt: an accessible input device counts as granted.
"""

import logging
import sys
import threading
from enum import Enum, auto
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class AuthorizationStatus(Enum):
    """Microphone authorization states."""

    NOT_DETERMINED = auto()
    RESTRICTED = auto()
    DENIED = auto()
    AUTHORIZED = auto()


# AVAuthorizationStatus raw values
_AV_STATUS = {
    0: AuthorizationStatus.NOT_DETERMINED,
    1: AuthorizationStatus.RESTRICTED,
    2: AuthorizationStatus.DENIED,
    3: AuthorizationStatus.AUTHORIZED,
}

AuthorizationHandler = Callable[[AuthorizationStatus], None]


def query_input_devices() -> list[dict[str, Any]]:
    """Input-capable audio devices reported by PortAudio."""
    import sounddevice as sd

    return [d for d in sd.query_devices() if d["max_input_channels"] > 0]


class MicrophonePermission:
    """Reads and requests microphone access.

    Args:
        query_devices: Callable listing input devices
        platform: ``sys.platform`` value deciding the authorization source
    """

    def __init__(
        self,
        query_devices: Optional[Callable[[], list]] = None,
        platform: str = sys.platform,
    ) -> None:
        self._query_devices = query_devices or query_input_devices
        self._platform = platform

    def has_input_device(self) -> bool:
        """Check that at least one input device can be enumerated."""
        try:
            return bool(self._query_devices())
        except Exception as e:
            logger.debug(f"Input device query failed: {e}")
            return False

    def status(self) -> AuthorizationStatus:
        """Current authorization without prompting the user."""
        if self._platform == "darwin":
            return self._darwin_status()
        if self.has_input_device():
            return AuthorizationStatus.AUTHORIZED
        return AuthorizationStatus.DENIED

    def is_granted(self) -> bool:
        return self.status() == AuthorizationStatus.AUTHORIZED

    def request(self, handler: Optional[AuthorizationHandler] = None) -> None:
        """Ask for access; ``handler`` receives the outcome on a worker thread.

        Fire-and-forget: nothing is retried after the user answers.
        """
        if self._platform == "darwin" and self._darwin_status() == AuthorizationStatus.NOT_DETERMINED:
            self._darwin_request(handler)
            return

        def resolve() -> None:
            status = self.status()
            logger.debug(f"Microphone authorization: {status.name}")
            if handler:
                handler(status)

        threading.Thread(target=resolve, name="mic-permission", daemon=True).start()

    def _darwin_status(self) -> AuthorizationStatus:
        import AVFoundation

        raw = AVFoundation.AVCaptureDevice.authorizationStatusForMediaType_(
            AVFoundation.AVMediaTypeAudio
        )
        return _AV_STATUS.get(raw, AuthorizationStatus.RESTRICTED)

    def _darwin_request(self, handler: Optional[AuthorizationHandler]) -> None:
        import AVFoundation

        logger.info("Requesting microphone permission (system dialog)")

        def completion(granted: bool) -> None:
            status = AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
            logger.info(f"Microphone permission answered: {status.name}")
            if handler:
                handler(status)

        AVFoundation.AVCaptureDevice.requestAccessForMediaType_completionHandler_(
            AVFoundation.AVMediaTypeAudio,
            completion,
        )
