"""
Headless view model for the playback controls.

Holds what a scrubber UI shows (slider position, time readout, play button
glyph, track selector) and notifies observers with the fields that changed.
Concrete toolkits (see ``src.clipdeck.ui.layout``) mirror it onto widgets.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from typing import Any

logger = logging.getLogger(__name__)

ViewObserver = Callable[[dict[str, Any]], None]


@dataclass
class ControlsView:
    """Current state of every playback control.

    Attributes
    ----------
    slider_value : float
        Scrubber position as a 0-100 percentage
    time_text : str
        ``"current / duration"`` readout
    play_icon : str
        Glyph on the play/pause button
    track_selector : bool
        Whether the selector fields below are part of the view
    selector_options : list[str]
        Track names offered in the dropdown
    selector_index : int
        Selected dropdown entry, -1 when none
    selector_disabled : bool
        True when there is nothing to choose between
    info_text : str
        Summary of the selected track
    """

    slider_value: float = 0.0
    time_text: str = ""
    play_icon: str = ""
    track_selector: bool = True
    selector_options: list[str] = field(default_factory=list)
    selector_index: int = -1
    selector_disabled: bool = True
    info_text: str = "No animations"
    _observers: list[ViewObserver] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    _SELECTOR_FIELDS = frozenset(
        {"selector_options", "selector_index", "selector_disabled", "info_text"}
    )

    def add_observer(self, observer: ViewObserver) -> None:
        if not callable(observer):
            raise TypeError(f"View observer must be callable, got {observer!r}")
        self._observers.append(observer)

    def remove_observer(self, observer: ViewObserver) -> bool:
        try:
            self._observers.remove(observer)
        except ValueError:
            return False
        return True

    def update(self, **changes: Any) -> dict[str, Any]:
        """
        Apply field changes and notify observers.

        Selector fields are ignored when the track selector is disabled.
        Observers are only called when at least one value actually changed.

        Returns
        -------
        dict[str, Any]
            The fields whose value changed
        """
        known = {f.name for f in fields(self) if not f.name.startswith("_")}
        changed: dict[str, Any] = {}
        for name, value in changes.items():
            if name not in known:
                raise AttributeError(f"ControlsView has no field '{name}'")
            if name in self._SELECTOR_FIELDS and not self.track_selector:
                continue
            if getattr(self, name) != value:
                setattr(self, name, list(value) if isinstance(value, list) else value)
                changed[name] = value

        if changed:
            for observer in list(self._observers):
                try:
                    observer(dict(changed))
                except Exception as e:
                    logger.error(f"Error in view observer: {e}", exc_info=True)
        return changed

    def snapshot(self) -> dict[str, Any]:
        """Current field values, without the observer list."""
        data = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if not f.name.startswith("_")
        }
        data["selector_options"] = list(self.selector_options)
        if not self.track_selector:
            for name in self._SELECTOR_FIELDS:
                data.pop(name, None)
        return data
