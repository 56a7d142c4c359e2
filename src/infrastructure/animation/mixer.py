"""
In-process animation mixer.

Reference implementation of the AnimationEngine protocol: holds one action
per clip for a single subject and advances the running ones each frame. It
computes no poses; hosts with a real engine pass their own factory to the
playback controller instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

logger = logging.getLogger(__name__)


class LoopMode(Enum):
    """What an action does when it reaches the end of its clip."""

    REPEAT = auto()  # Wrap around to the start
    ONCE = auto()  # Clamp at the end and stop running


@dataclass
class AnimationClip:
    """Named, fixed-duration clip.

    ``tracks`` holds the clip's keyframe track names; only its length is
    used for display.
    """

    name: str = ""
    duration: float = 0.0
    tracks: list[Any] = field(default_factory=list)
    uuid: str = ""


@dataclass
class AnimatedSubject:
    """Entity carrying animation clips (a skinned mesh, say)."""

    name: str = "subject"
    animations: list[AnimationClip] = field(default_factory=list)


class ClipAction:
    """Playback state of one clip on one subject."""

    def __init__(self, clip: AnimationClip, loop: LoopMode = LoopMode.REPEAT):
        self.clip = clip
        self.loop = loop
        self.time: float = 0.0
        self.paused: bool = False
        self.time_scale: float = 1.0
        self._running: bool = False

    def play(self) -> ClipAction:
        self._running = True
        return self

    def stop(self) -> ClipAction:
        """Stop and rewind to the start."""
        self._running = False
        self.time = 0.0
        return self

    def is_running(self) -> bool:
        return self._running and not self.paused

    def get_clip(self) -> AnimationClip:
        return self.clip

    def _advance(self, delta_seconds: float) -> None:
        if not self._running or self.paused:
            return

        self.time += delta_seconds * self.time_scale
        duration = self.clip.duration

        if duration <= 0.0:
            self.time = 0.0
            return

        # Loop logic
        if self.time >= duration:
            if self.loop is LoopMode.REPEAT:
                self.time = self.time % duration
                logger.debug(f"Action '{self.clip.name}' looped to start")
            else:
                self.time = duration
                self._running = False
        elif self.time < 0.0:
            self.time = 0.0

    def __repr__(self):
        return (
            f"ClipAction(clip='{self.clip.name}', time={self.time:.2f}s, "
            f"running={self._running}, paused={self.paused})"
        )


class AnimationMixer:
    """
    Animation engine for a single subject.

    Manages:
    - One cached action per clip
    - Advancing running, unpaused actions on update
    """

    def __init__(self, subject: Any, loop: LoopMode = LoopMode.REPEAT):
        """
        Initialize mixer.

        Parameters
        ----------
        subject : Any
            Subject whose clips this mixer animates
        loop : LoopMode
            Loop mode given to newly created actions
        """
        self.subject = subject
        self.loop = loop
        self.time: float = 0.0
        self._actions: dict[int, ClipAction] = {}

    def clip_action(self, clip: AnimationClip) -> ClipAction:
        """Return the cached action for ``clip``, creating it on first use."""
        key = id(clip)
        action = self._actions.get(key)
        if action is None:
            action = ClipAction(clip, loop=self.loop)
            self._actions[key] = action
            logger.debug(f"Created action for clip '{getattr(clip, 'name', '')}'")
        return action

    @property
    def actions(self) -> list[ClipAction]:
        return list(self._actions.values())

    def update(self, delta_seconds: float) -> AnimationMixer:
        """Advance every running action by ``delta_seconds``."""
        self.time += delta_seconds
        for action in self._actions.values():
            action._advance(delta_seconds)
        return self

    def stop_all_actions(self) -> None:
        for action in self._actions.values():
            action.stop()
