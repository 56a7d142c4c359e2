"""
Input handling for the playback controls.

Translates raw control intents (slider press/drag/release, play button
clicks, dropdown changes) into PlaybackController operations, so any UI
toolkit only has to forward its widget callbacks here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.shared.exceptions import IndexOutOfRangeError, NotAttachedError


if TYPE_CHECKING:
    from src.clipdeck.interaction.playback import PlaybackController

logger = logging.getLogger(__name__)


class ScrubberInput:
    """
    Scrubber and button input for one controller.

    Pressing the slider pauses playback; releasing it resumes playback if
    it was running when the press began.
    """

    def __init__(self, controller: PlaybackController):
        """
        Initialize scrubber input.

        Parameters
        ----------
        controller : PlaybackController
            Controller receiving the translated operations
        """
        self.controller = controller
        self._was_playing = False
        self._dragging = False
        logger.debug("ScrubberInput initialized")

    @property
    def dragging(self) -> bool:
        return self._dragging

    def press_slider(self) -> None:
        """Begin a drag: remember the play state and pause."""
        if self._dragging:
            return
        self._dragging = True
        self._was_playing = self.controller.is_playing
        self.controller.pause()

    def drag_slider(self, value: float | str) -> None:
        """Seek to ``value`` percent while dragging."""
        self.controller.set_percentage(value)

    def release_slider(self) -> None:
        """End a drag, resuming playback if it was running."""
        if not self._dragging:
            return
        self._dragging = False
        if self._was_playing:
            self.controller.play()
        self._was_playing = False

    def scrub_to(self, value: float | str) -> None:
        """Press, drag to ``value`` and release in one step."""
        self.press_slider()
        try:
            self.drag_slider(value)
        finally:
            self.release_slider()

    def click_play_button(self) -> None:
        self.controller.toggle_play()

    def click_stop_button(self) -> None:
        self.controller.stop()

    def change_selection(self, raw: object) -> bool:
        """
        Select the track chosen in a dropdown.

        Parameters
        ----------
        raw : object
            Index as delivered by the widget (often a string)

        Returns
        -------
        bool
            True if a track was selected; invalid input is ignored
        """
        try:
            index = int(str(raw).strip())
        except ValueError:
            logger.debug(f"Ignoring non-integer track selection: {raw!r}")
            return False
        if index < 0:
            return False

        try:
            self.controller.select_track(index)
        except (IndexOutOfRangeError, NotAttachedError) as e:
            logger.warning(f"Track selection ignored: {e}")
            return False
        return True
