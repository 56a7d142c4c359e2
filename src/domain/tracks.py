"""Animation track metadata and the selection registry.

The registry catalogs the clips of an attached subject as immutable
:class:`TrackInfo` records and tracks which one is selected. It is rebuilt
wholesale on every attach and cleared on detach, so a single-clip subject is
simply the one-element case.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from src.shared.exceptions import IndexOutOfRangeError, MissingClipError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackInfo:
    """Display metadata for one animation clip.

    Attributes
    ----------
    index : int
        Position in the registry
    name : str
        Clip name, or ``"Animation {index+1}"`` when the clip has none
    duration : float
        Clip duration in seconds, never negative
    sub_track_count : int
        Number of keyframe tracks in the clip
    uuid : str
        Clip identifier, or ``"animation-{index}"`` when the clip has none
    """

    index: int
    name: str
    duration: float
    sub_track_count: int
    uuid: str

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return asdict(self)


def _clip_duration(clip: Any, index: int) -> float:
    raw = getattr(clip, "duration", 0.0)
    if isinstance(raw, numbers.Real) and not isinstance(raw, bool):
        duration = float(raw)
        if math.isfinite(duration) and duration >= 0.0:
            return duration
    logger.warning(f"Clip {index} has unusable duration {raw!r}, using 0.0")
    return 0.0


def _clip_sub_track_count(clip: Any) -> int:
    tracks = getattr(clip, "tracks", None)
    if tracks is None:
        return 0
    try:
        return len(tracks)
    except TypeError:
        return 0


def track_info_from_clip(clip: Any, index: int) -> TrackInfo:
    """Extract :class:`TrackInfo` from an opaque clip handle.

    Parameters
    ----------
    clip : Any
        Clip exposing any of ``name``, ``duration``, ``tracks``, ``uuid``
    index : int
        Position of the clip in its subject

    Returns
    -------
    TrackInfo
        Metadata with defaults filled in for missing fields

    Raises
    ------
    MissingClipError
        If ``clip`` is None
    """
    if clip is None:
        raise MissingClipError(index)

    name = getattr(clip, "name", None) or f"Animation {index + 1}"
    uuid = getattr(clip, "uuid", None) or f"animation-{index}"

    return TrackInfo(
        index=index,
        name=str(name),
        duration=_clip_duration(clip, index),
        sub_track_count=_clip_sub_track_count(clip),
        uuid=str(uuid),
    )


class TrackRegistry:
    """Ordered track catalog plus the current selection.

    ``current_index`` is -1 when nothing is selected, otherwise a valid
    index into the catalog.
    """

    def __init__(self) -> None:
        self._tracks: list[TrackInfo] = []
        self._clips: list[Any] = []
        self._current_index: int = -1

    def __len__(self) -> int:
        return len(self._tracks)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current(self) -> TrackInfo | None:
        """Currently selected track, or None."""
        if self._current_index < 0:
            return None
        return self._tracks[self._current_index]

    @property
    def tracks(self) -> list[TrackInfo]:
        """Copy of the catalog; mutating it does not affect the registry."""
        return list(self._tracks)

    def rebuild(self, clips: Sequence[Any]) -> None:
        """Replace the catalog with metadata for ``clips`` and clear the selection.

        Raises
        ------
        MissingClipError
            If any clip is None. The registry is left unchanged.
        """
        clips = list(clips)
        tracks = [track_info_from_clip(clip, i) for i, clip in enumerate(clips)]

        self._tracks = tracks
        self._clips = clips
        self._current_index = -1
        logger.debug(f"Track registry rebuilt with {len(tracks)} track(s)")

    def validate_index(self, index: object) -> int:
        """Return ``index`` if it addresses a track, else raise.

        Raises
        ------
        IndexOutOfRangeError
            If ``index`` is not an int in ``[0, len)``
        """
        if (
            isinstance(index, bool)
            or not isinstance(index, numbers.Integral)
            or not 0 <= index < len(self._tracks)
        ):
            raise IndexOutOfRangeError(index, len(self._tracks))
        return int(index)

    def select(self, index: int) -> TrackInfo:
        """Select a track by index and return its metadata.

        Pure bookkeeping: playback state is the controller's concern.
        """
        index = self.validate_index(index)
        self._current_index = index
        return self._tracks[index]

    def get(self, index: int) -> TrackInfo | None:
        """Track at ``index``, or None when out of range."""
        try:
            return self._tracks[self.validate_index(index)]
        except IndexOutOfRangeError:
            return None

    def clip_at(self, index: int) -> Any:
        """Clip handle backing the track at ``index``."""
        return self._clips[self.validate_index(index)]

    def find_by_name(self, name: str) -> TrackInfo | None:
        """First track named ``name`` in catalog order, or None."""
        for track in self._tracks:
            if track.name == name:
                return track
        return None

    def clear(self) -> None:
        self._tracks = []
        self._clips = []
        self._current_index = -1
