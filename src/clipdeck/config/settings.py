"""
Configuration dataclasses for ClipDeck playback controls.

Per-controller settings: output time format, which optional controls to
build, the icon table, and the options accepted when attaching a subject.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import asdict, dataclass, field

from src.domain.time import TimeFormat


logger = logging.getLogger(__name__)


__all__ = ["AttachOptions", "ControlsConfig", "PlaybackIcons"]


@dataclass
class PlaybackIcons:
    """Glyphs shown on the playback controls."""

    PLAY: str = "▶️"
    PAUSE: str = "⏸"
    STOP: str = "⏹"
    REPEAT: str = "🔁"
    REPEAT_ONCE: str = "🔂"
    SHUFFLE: str = "🔀"
    REWIND: str = "⏪"
    FORWARD: str = "⏩"
    PREVIOUS: str = "⏮"
    NEXT: str = "⏭"

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return asdict(self)


def _coerce_time_format(value: TimeFormat | str) -> TimeFormat:
    if isinstance(value, TimeFormat):
        return value
    if isinstance(value, str):
        # Accept both the enum value ("MM_SS_MS") and member name ("MM_SS_CC")
        if value in TimeFormat.__members__:
            return TimeFormat[value]
        try:
            return TimeFormat(value)
        except ValueError:
            pass
    valid = ", ".join(f.value for f in TimeFormat)
    raise ValueError(f"output_format must be one of {valid}, got {value!r}")


@dataclass
class ControlsConfig:
    """Playback control surface configuration.

    Attributes
    ----------
    output_format : TimeFormat
        Time display format, fixed for the controller's lifetime
    init_ui_controls : bool
        Build the headless view model the UI layer binds to
    enable_track_selector : bool
        Include the track dropdown and info readout in the view model
    auto_select_first_track : bool
        Select track 0 on attach when no explicit index is given
    icons : PlaybackIcons
        Glyph table for the play/pause/stop controls
    """

    output_format: TimeFormat = TimeFormat.MM_SS_CC
    init_ui_controls: bool = True
    enable_track_selector: bool = True
    auto_select_first_track: bool = True
    icons: PlaybackIcons = field(default_factory=PlaybackIcons)

    def __post_init__(self):
        """Validate settings after initialization."""
        self.output_format = _coerce_time_format(self.output_format)
        if isinstance(self.icons, dict):
            self.icons = PlaybackIcons(**self.icons)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary (enum stored by value)."""
        data = asdict(self)
        data["output_format"] = self.output_format.value
        return data


@dataclass
class AttachOptions:
    """Options applied when attaching a subject.

    Attributes
    ----------
    play : bool
        Start playing after attaching
    at_time : float | None
        Initial cursor position in seconds
    track_index : int | None
        Track to select instead of the first one
    """

    play: bool = False
    at_time: float | None = None
    track_index: int | None = None

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.track_index is not None and (
            isinstance(self.track_index, bool)
            or not isinstance(self.track_index, numbers.Integral)
            or self.track_index < 0
        ):
            raise ValueError(
                f"track_index must be a non-negative int, got {self.track_index!r}"
            )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return asdict(self)
