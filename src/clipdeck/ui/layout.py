"""
Viser GUI layout for the playback controls.

Builds a scrubber slider, play/pause and stop buttons, a time readout, a
track dropdown and an info line, wires widget callbacks to a
``ScrubberInput`` and mirrors ``ControlsView`` changes back onto the
widgets.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import viser

from src.clipdeck.interaction.handlers import ScrubberInput


if TYPE_CHECKING:
    from src.clipdeck.interaction.playback import PlaybackController

logger = logging.getLogger(__name__)

NO_TRACKS_OPTION = "(no animations)"


def _track_option(index: int, name: str) -> str:
    return f"{index}: {name}"


def _option_index(option: str) -> str:
    return option.split(":", 1)[0]


class ViserPlaybackPanel:
    """
    Playback panel bound to one controller.

    Viser runs widget callbacks on its own threads, so every controller
    call made by the panel (including ``advance``) holds ``self.lock``.

    Viser reports slider drags as a stream of value updates with no release
    event. The first update presses the scrubber and later ones only seek;
    the drag is released by ``advance`` once no update has arrived for
    ``release_after`` seconds.
    """

    def __init__(
        self,
        server: viser.ViserServer,
        controller: PlaybackController,
        folder_label: str = "Playback",
        release_after: float = 0.25,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Create the widgets and bind them to ``controller``.

        Parameters
        ----------
        server : viser.ViserServer
            Viser server instance
        controller : PlaybackController
            Controller with UI controls enabled
        folder_label : str
            Label of the GUI folder holding the controls
        release_after : float
            Seconds without slider updates after which a drag is released
        timer : Callable[[], float]
            Monotonic time source for drag release

        Raises
        ------
        ValueError
            If the controller was created with ``init_ui_controls=False``
        """
        if controller.view is None:
            raise ValueError("Controller has no view; enable init_ui_controls")

        self.server = server
        self.controller = controller
        self.view = controller.view
        self.input = ScrubberInput(controller)
        self.release_after = release_after
        self._timer = timer
        self._last_scrub = 0.0
        # Reentrant: programmatic widget updates fire callbacks on the same thread
        self.lock = threading.RLock()
        self._updating_from_view = False  # Guard against recursion, read under lock

        snapshot = self.view.snapshot()
        with server.gui.add_folder(folder_label):
            self.time_text = server.gui.add_text(
                "Time",
                initial_value=snapshot["time_text"],
                disabled=True,
            )
            self.slider = server.gui.add_slider(
                "Progress",
                min=0.0,
                max=100.0,
                step=0.1,
                initial_value=0.0,
                hint="Scrub through the current animation (percent)",
            )
            self.play_button = server.gui.add_button(
                "Play",
                icon=viser.Icon.PLAYER_PLAY,
                hint="Toggle animation playback",
            )
            self.stop_button = server.gui.add_button(
                "Stop",
                icon=viser.Icon.PLAYER_STOP,
                hint="Stop and rewind",
            )

            self.track_dropdown = None
            self.info = None
            if self.view.track_selector:
                self.track_dropdown = server.gui.add_dropdown(
                    "Animation",
                    options=(NO_TRACKS_OPTION,),
                    initial_value=NO_TRACKS_OPTION,
                    disabled=True,
                )
                self.info = server.gui.add_markdown(snapshot["info_text"])

        self._register_callbacks()
        self.view.add_observer(self._on_view_changed)
        self._on_view_changed(snapshot)
        logger.debug("ViserPlaybackPanel created")

    def _register_callbacks(self) -> None:
        @self.slider.on_update
        def _(_event) -> None:
            with self.lock:
                if self._updating_from_view:
                    return
                if not self.input.dragging:
                    self.input.press_slider()
                self._last_scrub = self._timer()
                self.input.drag_slider(self.slider.value)

        @self.play_button.on_click
        def _(_event) -> None:
            with self.lock:
                self.input.click_play_button()

        @self.stop_button.on_click
        def _(_event) -> None:
            with self.lock:
                self.input.click_stop_button()

        if self.track_dropdown is not None:

            @self.track_dropdown.on_update
            def _(_event) -> None:
                with self.lock:
                    if self._updating_from_view:
                        return
                    value = self.track_dropdown.value
                    if value == NO_TRACKS_OPTION:
                        return
                    self.input.change_selection(_option_index(value))

    def advance(self, elapsed: float | None = None) -> None:
        """Advance the controller one frame under the panel lock.

        Releases a slider drag that has been idle for ``release_after``
        seconds first, so playback resumes once per drag.
        """
        with self.lock:
            if (
                self.input.dragging
                and self._timer() - self._last_scrub >= self.release_after
            ):
                self.input.release_slider()
            self.controller.advance(elapsed)

    def _on_view_changed(self, changes: dict[str, Any]) -> None:
        """Mirror changed view fields onto the widgets."""
        with self.lock:
            self._updating_from_view = True
            try:
                if "time_text" in changes:
                    self._set(self.time_text, value=changes["time_text"])
                if "slider_value" in changes:
                    value = min(100.0, max(0.0, float(changes["slider_value"])))
                    self._set(self.slider, value=value)
                if "play_icon" in changes:
                    self._sync_play_button(changes["play_icon"])
                if self.track_dropdown is not None and (
                    "selector_options" in changes or "selector_index" in changes
                ):
                    self._sync_dropdown()
                if self.track_dropdown is not None and "selector_disabled" in changes:
                    self._set(self.track_dropdown, disabled=changes["selector_disabled"])
                if self.info is not None and "info_text" in changes:
                    self.info.content = changes["info_text"]
            finally:
                self._updating_from_view = False

    def _sync_play_button(self, glyph: str) -> None:
        if glyph == self.controller.config.icons.PAUSE:
            self._set(self.play_button, label="Pause", icon=viser.Icon.PLAYER_PAUSE)
        else:
            self._set(self.play_button, label="Play", icon=viser.Icon.PLAYER_PLAY)

    def _sync_dropdown(self) -> None:
        names = self.view.selector_options
        if not names:
            self._set(self.track_dropdown, options=(NO_TRACKS_OPTION,))
            self._set(self.track_dropdown, value=NO_TRACKS_OPTION)
            return

        options = tuple(_track_option(i, name) for i, name in enumerate(names))
        self._set(self.track_dropdown, options=options)
        index = self.view.selector_index
        if 0 <= index < len(options):
            self._set(self.track_dropdown, value=options[index])

    @staticmethod
    def _set(control: Any, **kwargs: Any) -> None:
        """Set widget attributes, skipping values that are already current."""
        for attr, value in kwargs.items():
            if getattr(control, attr, None) != value:
                setattr(control, attr, value)
