"""Timeline-based animation system with keyframe interpolation."""

from typing import Callable, Optional, Dict, List
from dataclasses import dataclass, field
from enum import Enum, auto

from solution_wheel.animation.easing import Easing, get_easing


class PlayState(Enum):
    """Timeline playback state."""

    STOPPED = auto()
    PLAYING = auto()
    FINISHED = auto()


@dataclass
class Keyframe:
    """A single keyframe in an animation track.

    Attributes:
        time: Normalized time (0.0 to 1.0) when this keyframe occurs
        value: The value at this keyframe
        easing: Easing function for interpolation to next keyframe
    """

    time: float
    value: float
    easing: Easing | str = Easing.LINEAR

    def __post_init__(self):
        # Clamp time to valid range
        self.time = max(0.0, min(1.0, self.time))


@dataclass
class Track:
    """An animation track containing keyframes for a single numeric property."""

    name: str
    keyframes: List[Keyframe] = field(default_factory=list)
    _sorted: bool = field(default=False, repr=False)

    def add_keyframe(
        self,
        time: float,
        value: float,
        easing: Easing | str = Easing.LINEAR
    ) -> "Track":
        """Add a keyframe to this track.

        Args:
            time: Normalized time (0.0 to 1.0)
            value: Value at this keyframe
            easing: Easing function to next keyframe

        Returns:
            Self for method chaining
        """
        self.keyframes.append(Keyframe(time, value, easing))
        self._sorted = False
        return self

    def get_value_at(self, t: float) -> Optional[float]:
        """Get the interpolated value at a specific normalized time.

        Returns None if the track has no keyframes.
        """
        if not self.keyframes:
            return None

        if not self._sorted:
            self.keyframes.sort(key=lambda k: k.time)
            self._sorted = True

        t = max(0.0, min(1.0, t))

        if t <= self.keyframes[0].time:
            return self.keyframes[0].value
        if t >= self.keyframes[-1].time:
            return self.keyframes[-1].value

        # Find surrounding keyframes
        prev_kf = self.keyframes[0]
        next_kf = self.keyframes[-1]

        for i, kf in enumerate(self.keyframes):
            if kf.time > t:
                next_kf = kf
                prev_kf = self.keyframes[i - 1] if i > 0 else kf
                break

        segment_duration = next_kf.time - prev_kf.time
        if segment_duration <= 0:
            return prev_kf.value

        local_t = (t - prev_kf.time) / segment_duration
        eased_t = get_easing(prev_kf.easing)(local_t)
        return prev_kf.value + (next_kf.value - prev_kf.value) * eased_t


@dataclass
class Timeline:
    """A complete animation timeline with multiple tracks.

    Attributes:
        name: Timeline identifier
        duration: Total duration in milliseconds
        tracks: Dictionary of tracks by name
        on_complete: Callback when animation finishes
    """

    name: str
    duration: float = 1000.0  # milliseconds
    tracks: Dict[str, Track] = field(default_factory=dict)
    on_complete: Optional[Callable[["Timeline"], None]] = None

    # Playback state
    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _current_time: float = field(default=0.0, repr=False)

    def add_track(self, name: str) -> Track:
        """Create and add a new track to this timeline."""
        track = Track(name=name)
        self.tracks[name] = track
        return track

    def get_track(self, name: str) -> Optional[Track]:
        """Get a track by name."""
        return self.tracks.get(name)

    # Playback control
    def play(self, from_start: bool = False) -> "Timeline":
        """Start or resume playback."""
        if from_start:
            self._current_time = 0.0
        self._state = PlayState.PLAYING
        return self

    def stop(self) -> "Timeline":
        """Stop playback and reset to beginning."""
        self._state = PlayState.STOPPED
        self._current_time = 0.0
        return self

    @property
    def state(self) -> PlayState:
        """Get current playback state."""
        return self._state

    @property
    def progress(self) -> float:
        """Get normalized progress (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0 if self._state == PlayState.FINISHED else 0.0
        return self._current_time / self.duration

    @property
    def current_time(self) -> float:
        """Get current time in milliseconds."""
        return self._current_time

    @property
    def is_playing(self) -> bool:
        return self._state == PlayState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state == PlayState.FINISHED

    def update(self, delta_ms: float) -> Dict[str, Optional[float]]:
        """Advance the timeline and get current track values.

        Args:
            delta_ms: Time elapsed since last update in milliseconds

        Returns:
            Dictionary mapping track names to their current values
        """
        if self._state != PlayState.PLAYING:
            return self._get_current_values()

        self._current_time += max(0.0, delta_ms)

        if self._current_time >= self.duration:
            self._current_time = self.duration
            self._state = PlayState.FINISHED
            if self.on_complete:
                self.on_complete(self)

        return self._get_current_values()

    def _get_current_values(self) -> Dict[str, Optional[float]]:
        t = self.progress
        return {
            name: track.get_value_at(t)
            for name, track in self.tracks.items()
        }

    def get_value(self, track_name: str) -> Optional[float]:
        """Get the current value of a specific track."""
        track = self.tracks.get(track_name)
        if track:
            return track.get_value_at(self.progress)
        return None

    # Factory methods
    @classmethod
    def rotation(
        cls,
        start: float,
        end: float,
        duration: float = 3000,
        easing: Easing | str = Easing.FAST_OUT_SLOW_IN,
        name: str = "rotation"
    ) -> "Timeline":
        """Create a single-track rotation tween from ``start`` to ``end`` degrees."""
        timeline = cls(name=name, duration=duration)
        track = timeline.add_track("angle")
        track.add_keyframe(0.0, start, easing)
        track.add_keyframe(1.0, end)
        return timeline
