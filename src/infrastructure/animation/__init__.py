"""Reference animation engine and frame clock."""

from src.infrastructure.animation.clock import Clock
from src.infrastructure.animation.mixer import (
    AnimatedSubject,
    AnimationClip,
    AnimationMixer,
    ClipAction,
    LoopMode,
)


__all__ = [
    "AnimatedSubject",
    "AnimationClip",
    "AnimationMixer",
    "ClipAction",
    "Clock",
    "LoopMode",
]
