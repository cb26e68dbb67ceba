"""Animation engine for managing and orchestrating animations."""

from typing import Optional, Callable, Dict, List
from dataclasses import dataclass
import logging

from solution_wheel.animation.timeline import Timeline

logger = logging.getLogger(__name__)


@dataclass
class ActiveAnimation:
    """Wrapper for an active animation with metadata."""

    timeline: Timeline
    group: str = "default"
    on_update: Optional[Callable[[Dict[str, Optional[float]]], None]] = None
    on_complete: Optional[Callable[[], None]] = None


class AnimationEngine:
    """Central animation management system.

    Advances every active timeline once per frame, forwards the current
    values to ``on_update`` and calls ``on_complete`` exactly once when a
    timeline finishes.
    """

    def __init__(self):
        self._animations: Dict[str, ActiveAnimation] = {}
        self._groups: Dict[str, List[str]] = {"default": []}
        logger.debug("AnimationEngine initialized")

    def play(
        self,
        timeline: Timeline,
        name: Optional[str] = None,
        group: str = "default",
        on_update: Optional[Callable[[Dict[str, Optional[float]]], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> str:
        """Start playing an animation.

        An animation already running under the same name is stopped first.

        Args:
            timeline: The Timeline to play
            name: Unique name for this animation instance
            group: Animation group for batch operations
            on_update: Callback with current values each frame
            on_complete: Callback when animation finishes

        Returns:
            The animation name
        """
        anim_name = name or timeline.name or f"anim_{len(self._animations)}"

        if anim_name in self._animations:
            self.stop(anim_name)

        self._animations[anim_name] = ActiveAnimation(
            timeline=timeline,
            group=group,
            on_update=on_update,
            on_complete=on_complete,
        )
        self._groups.setdefault(group, []).append(anim_name)

        timeline.play(from_start=True)

        logger.debug(f"Animation started: {anim_name} (group={group}, duration={timeline.duration}ms)")
        return anim_name

    def stop(self, name: str) -> bool:
        """Stop and remove an animation without calling its completion callback.

        Returns:
            True if animation was found and stopped
        """
        active = self._animations.pop(name, None)
        if active is None:
            return False

        active.timeline.stop()
        self._remove_from_group(name, active.group)
        logger.debug(f"Animation stopped: {name}")
        return True

    def stop_group(self, group: str) -> int:
        """Stop all animations in a group. Returns the number stopped."""
        names = list(self._groups.get(group, []))
        return sum(1 for name in names if self.stop(name))

    def stop_all(self) -> int:
        """Stop all animations. Returns the number stopped."""
        names = list(self._animations.keys())
        for name in names:
            self.stop(name)
        return len(names)

    def update(self, delta_ms: float) -> Dict[str, Dict[str, Optional[float]]]:
        """Update all active animations.

        Args:
            delta_ms: Time elapsed since last update in milliseconds

        Returns:
            Dictionary mapping animation names to their current values
        """
        results: Dict[str, Dict[str, Optional[float]]] = {}
        completed: List[str] = []

        # Completion callbacks may start new animations, so iterate a snapshot
        for name, active in list(self._animations.items()):
            values = active.timeline.update(delta_ms)
            results[name] = values

            if active.on_update:
                active.on_update(values)

            if active.timeline.is_finished:
                completed.append(name)

        for name in completed:
            active = self._animations.get(name)
            if active is None or not active.timeline.is_finished:
                continue
            del self._animations[name]
            self._remove_from_group(name, active.group)
            logger.debug(f"Animation completed: {name}")
            if active.on_complete:
                active.on_complete()

        return results

    def get_value(self, animation_name: str, track_name: str) -> Optional[float]:
        """Get the current value of a track in an animation."""
        if animation_name in self._animations:
            return self._animations[animation_name].timeline.get_value(track_name)
        return None

    def is_playing(self, name: str) -> bool:
        """Check if an animation is currently playing."""
        if name in self._animations:
            return self._animations[name].timeline.is_playing
        return False

    def has_animation(self, name: str) -> bool:
        return name in self._animations

    @property
    def animation_count(self) -> int:
        return len(self._animations)

    def _remove_from_group(self, name: str, group: str) -> None:
        if name in self._groups.get(group, []):
            self._groups[group].remove(name)
