"""Time display and time/percentage conversion for clip playback.

This module turns a floating-point cursor (seconds) into the fixed-width
strings shown next to a scrubber, and converts between cursor time and the
0-100 slider percentage.

Example
-------
>>> format_time_display(65.5)
'01:05:50'
>>> format_time_display(125.75, TimeFormat.SS_CC)
'05:75'
>>> format_time_display(ClipTimeline(10.0).from_percentage(10.0))
'00:01:00'
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from src.shared.exceptions import InvalidTimeError


if TYPE_CHECKING:
    from src.domain.tracks import TrackInfo


class TimeFormat(Enum):
    """Supported output formats for the time display."""

    MM_SS_CC = "MM_SS_MS"  # minutes:seconds:centiseconds
    SS_CC = "SS_MS"  # seconds:centiseconds


# Largest value the two-digit groups can show: 99:59:99
MAX_DISPLAY_MILLISECONDS = 99 * 60_000 + 59 * 1_000 + 990

_PLACEHOLDERS = {
    TimeFormat.MM_SS_CC: "--:--:--",
    TimeFormat.SS_CC: "--:--",
}


def _to_seconds(time: object) -> float:
    """Validate a formatter input and return it as a float."""
    if time is None or isinstance(time, bool) or not isinstance(time, numbers.Real):
        raise InvalidTimeError("time", time)
    value = float(time)
    if math.isnan(value):
        raise InvalidTimeError("time", time)
    return value


def _total_milliseconds(seconds: float) -> int:
    """Round seconds to whole milliseconds, clamped to the displayable range.

    Rounds to nearest (half up) instead of truncating so float noise such as
    ``1.0000000000000002`` or ``0.9999999999999999`` lands on the same
    millisecond from either side of a boundary.
    """
    if seconds <= 0.0:
        return 0
    scaled = seconds * 1000.0
    if not math.isfinite(scaled) or scaled >= MAX_DISPLAY_MILLISECONDS:
        return MAX_DISPLAY_MILLISECONDS
    return max(0, int(math.floor(scaled + 0.5)))


def format_time_display(
    time: float, output_format: TimeFormat = TimeFormat.MM_SS_CC
) -> str:
    """Format a cursor position for display.

    Parameters
    ----------
    time : float
        Time in seconds. Negative values display as zero; infinities and
        huge magnitudes clamp to the display range.
    output_format : TimeFormat
        ``MM_SS_CC`` gives ``"MM:SS:CC"``, ``SS_CC`` gives ``"SS:CC"``

    Returns
    -------
    str
        Zero-padded, colon-separated display string

    Raises
    ------
    InvalidTimeError
        If ``time`` is None, NaN, or not a real number
    """
    total_ms = _total_milliseconds(_to_seconds(time))

    minutes = max(0, total_ms // 60_000)
    seconds = max(0, (total_ms % 60_000) // 1_000)
    centiseconds = max(0, (total_ms % 1_000) // 10)

    if TimeFormat(output_format) is TimeFormat.SS_CC:
        return f"{seconds:02d}:{centiseconds:02d}"
    return f"{minutes:02d}:{seconds:02d}:{centiseconds:02d}"


def time_placeholder(output_format: TimeFormat = TimeFormat.MM_SS_CC) -> str:
    """Placeholder shown while no clip is bound."""
    return _PLACEHOLDERS[TimeFormat(output_format)]


def format_track_summary(
    track_info: TrackInfo | None, output_format: TimeFormat = TimeFormat.MM_SS_CC
) -> str:
    """One-line description of a track, e.g. ``"2 tracks, 00:10:00"``."""
    if track_info is None:
        return "No animations"
    count = track_info.sub_track_count
    noun = "track" if count == 1 else "tracks"
    return f"{count} {noun}, {format_time_display(track_info.duration, output_format)}"


def parse_time_value(value: object, parameter: str = "time") -> float:
    """Parse a numeric or textual time/percentage input.

    Accepts real numbers and numeric strings (``"3.7"``). Infinite values
    pass through; None, NaN, and unparseable text raise.

    Raises
    ------
    InvalidTimeError
        If the value is missing, NaN, or not a number
    """
    if value is None or isinstance(value, bool):
        raise InvalidTimeError(parameter, value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            raise InvalidTimeError(parameter, value) from None
    elif isinstance(value, numbers.Real):
        parsed = float(value)
    else:
        raise InvalidTimeError(parameter, value)
    if math.isnan(parsed):
        raise InvalidTimeError(parameter, value)
    return parsed


@dataclass(frozen=True)
class ClipTimeline:
    """Maps between cursor time and slider percentage for one clip.

    Attributes
    ----------
    duration : float
        Clip duration in seconds (0 for empty clips)

    Examples
    --------
    >>> tl = ClipTimeline(10.0)
    >>> tl.to_percentage(2.5)
    25.0
    >>> tl.from_percentage(-1)
    0.0
    """

    duration: float = 0.0

    def from_percentage(self, percentage: float) -> float:
        """Convert a 0-100 percentage to seconds.

        The ``max(0, ...)`` absorbs float drift that would otherwise give a
        negligibly negative cursor. Values above 100 are not clamped.
        """
        return max(0.0, (percentage / 100.0) * self.duration)

    def to_percentage(self, time: float) -> float:
        """Convert seconds to a 0-100 slider percentage."""
        if self.duration <= 0 or not math.isfinite(self.duration):
            return 0.0
        if not math.isfinite(time):
            return 100.0 if time > 0 else 0.0
        return (time / self.duration) * 100.0
