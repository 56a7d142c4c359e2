"""Domain interfaces (protocols) for dependency inversion.

This module defines the collaborator contracts the playback controller is
written against:
- AnimationClip: opaque clip handle with display metadata
- AnimationAction: engine-side binding of one clip to one subject
- AnimationEngine: per-subject engine creating actions and advancing time
- Animatable: subject carrying a list of clips
- Clock: source of elapsed real time between frames
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AnimationClip(Protocol):
    """Clip handle as seen by the track registry.

    Every attribute is optional at runtime; the registry fills in defaults.
    """

    name: str
    duration: float
    tracks: Sequence[Any]
    uuid: str


@runtime_checkable
class AnimationAction(Protocol):
    """Binding of one clip to one subject.

    The controller reads and writes ``time`` and ``paused`` directly and
    starts/stops the action; advancing ``time`` is the engine's job.
    """

    time: float
    paused: bool

    def play(self) -> Any:
        """Start the action (idempotent on the engine side)."""
        ...

    def stop(self) -> Any:
        """Stop the action and rewind it."""
        ...

    def is_running(self) -> bool:
        """Whether the action is currently active in its engine."""
        ...


@runtime_checkable
class AnimationEngine(Protocol):
    """Per-subject animation engine (e.g. a mixer)."""

    def clip_action(self, clip: Any) -> AnimationAction:
        """Return the action bound to ``clip`` for this engine's subject."""
        ...

    def update(self, delta_seconds: float) -> Any:
        """Advance every bound action by ``delta_seconds``."""
        ...


@runtime_checkable
class Animatable(Protocol):
    """Subject that can be attached to a playback controller."""

    animations: Sequence[Any]


@runtime_checkable
class Clock(Protocol):
    """Frame clock supplying the input of ``advance()``."""

    def get_delta(self) -> float:
        """Seconds elapsed since the previous call."""
        ...


EngineFactory = Callable[[Any], AnimationEngine]
"""Creates the engine for a newly attached subject."""
