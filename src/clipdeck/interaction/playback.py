"""
Playback controller for skeletal animation clips.

This module owns the play/pause/stop state machine, time and percentage
seeking, and multi-track selection for one attached subject at a time. It
drives an external animation engine through the protocols in
``src.domain.interfaces`` and reports every change on an event bus and,
optionally, a headless ``ControlsView``.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import TYPE_CHECKING, Any

from src.clipdeck.config.settings import AttachOptions, ControlsConfig
from src.clipdeck.interaction.events import Event, EventBus, EventType, TrackSelection
from src.clipdeck.ui.view import ControlsView
from src.domain.time import (
    ClipTimeline,
    format_time_display,
    format_track_summary,
    parse_time_value,
    time_placeholder,
)
from src.domain.tracks import TrackInfo, TrackRegistry
from src.infrastructure.animation.clock import Clock
from src.infrastructure.animation.mixer import AnimationMixer
from src.shared.exceptions import (
    AlreadyAttachedError,
    NotAttachedError,
    TrackNotFoundError,
)


if TYPE_CHECKING:
    from collections.abc import Callable

    from src.domain.interfaces import AnimationAction, AnimationEngine, EngineFactory
    from src.domain.interfaces import Clock as ClockProtocol

logger = logging.getLogger(__name__)

_SOURCE = "PlaybackController"


class PlaybackState(Enum):
    """Transport state of the controller."""

    STOPPED = "stopped"
    PAUSED = "paused"
    PLAYING = "playing"


class PlaybackController:
    """
    Controller for animation clip playback.

    Handles:
    - Attach/detach of one subject at a time
    - Play/Pause/Stop state
    - Time and percentage seeking
    - Track selection by index or name
    - Frame advancement from a clock
    """

    def __init__(
        self,
        config: ControlsConfig | None = None,
        event_bus: EventBus | None = None,
        engine_factory: EngineFactory | None = None,
        clock: ClockProtocol | None = None,
    ):
        """
        Initialize playback controller.

        Parameters
        ----------
        config : ControlsConfig | None
            Control surface configuration (defaults apply when None)
        event_bus : EventBus | None
            Event bus for playback events; a private one is created if None
        engine_factory : EngineFactory | None
            Creates the animation engine for an attached subject.
            Defaults to ``AnimationMixer``.
        clock : Clock | None
            Supplies elapsed time to ``advance()``. Defaults to a
            ``perf_counter`` based ``Clock``.
        """
        self.config = config if config is not None else ControlsConfig()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self._engine_factory: EngineFactory = engine_factory or AnimationMixer
        self._clock: ClockProtocol = clock if clock is not None else Clock()

        self._state = PlaybackState.STOPPED
        self._subject: Any = None
        self._engine: AnimationEngine | None = None
        self._action: AnimationAction | None = None
        self._registry = TrackRegistry()
        self._duration_display = self._placeholder

        self.view: ControlsView | None = None
        if self.config.init_ui_controls:
            self.view = ControlsView(
                time_text=self._placeholder_pair,
                play_icon=self.config.icons.PLAY,
                track_selector=self.config.enable_track_selector,
            )

        logger.debug("PlaybackController initialized")

    # --- Read-only state ---

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self._state is PlaybackState.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self._state is PlaybackState.STOPPED

    @property
    def attached_subject(self) -> Any:
        return self._subject

    @property
    def bound_action(self) -> AnimationAction | None:
        return self._action

    @property
    def engine(self) -> AnimationEngine | None:
        return self._engine

    @property
    def available_tracks(self) -> list[TrackInfo]:
        """Copy of the track catalog."""
        return self._registry.tracks

    @property
    def current_track_index(self) -> int:
        return self._registry.current_index

    @property
    def current_track(self) -> TrackInfo | None:
        return self._registry.current

    @property
    def has_multiple_tracks(self) -> bool:
        return len(self._registry) > 1

    @property
    def is_track_selector_enabled(self) -> bool:
        return self.config.enable_track_selector

    @property
    def is_ui_controls_available(self) -> bool:
        return self.view is not None

    @property
    def duration_display(self) -> str:
        """Formatted duration of the current track, or the placeholder."""
        return self._duration_display

    @property
    def current_time(self) -> float:
        """Cursor position in seconds (0.0 when no track is bound)."""
        if self._action is None:
            return 0.0
        return float(self._action.time)

    @property
    def current_percentage(self) -> float:
        """Cursor position as a 0-100 slider percentage."""
        if self._action is None:
            return 0.0
        return self._timeline().to_percentage(self._action.time)

    @property
    def _placeholder(self) -> str:
        return time_placeholder(self.config.output_format)

    @property
    def _placeholder_pair(self) -> str:
        return f"{self._placeholder} / {self._placeholder}"

    def _timeline(self) -> ClipTimeline:
        track = self._registry.current
        return ClipTimeline(track.duration if track is not None else 0.0)

    # --- Events ---

    def on(self, event_type: EventType | str, callback: Callable[[Event], Any]) -> None:
        """Register ``callback`` for ``event_type``."""
        self.event_bus.subscribe(event_type, callback)

    def off(self, event_type: EventType | str, callback: Callable[[Event], Any]) -> bool:
        """Remove ``callback``; returns False if it was not registered."""
        return self.event_bus.unsubscribe(event_type, callback)

    def dispatch(self, event_type: EventType | str, payload: Any = None) -> Event:
        """Emit an event to every listener of ``event_type``."""
        return self.event_bus.emit(event_type, payload=payload, source=_SOURCE)

    # --- Attach / detach ---

    def attach(self, subject: Any, options: AttachOptions | None = None) -> None:
        """
        Attach a subject and bind its initial track.

        Parameters
        ----------
        subject : Animatable
            Entity exposing ``animations`` (a sequence of clips)
        options : AttachOptions | None
            Initial track, cursor time and autoplay

        Raises
        ------
        AlreadyAttachedError
            If any subject is already attached
        MissingClipError
            If one of the subject's clips is None
        IndexOutOfRangeError
            If ``options.track_index`` does not address a track
        InvalidTimeError
            If ``options.at_time`` is NaN or not a number
        """
        if self._subject is not None:
            if subject is self._subject:
                raise AlreadyAttachedError("Subject is already attached")
            raise AlreadyAttachedError(
                "Another subject is attached; detach it before attaching a new one"
            )
        if subject is None:
            raise ValueError("Cannot attach None")

        options = options if options is not None else AttachOptions()

        # Validate everything before mutating controller state
        registry = TrackRegistry()
        registry.rebuild(getattr(subject, "animations", None) or [])
        initial_index = -1
        if options.track_index is not None:
            initial_index = registry.validate_index(options.track_index)
        elif self.config.auto_select_first_track and len(registry) > 0:
            initial_index = 0
        at_time = None
        if options.at_time is not None:
            at_time = parse_time_value(options.at_time, "time")
        engine = self._engine_factory(subject)

        self._subject = subject
        self._registry = registry
        self._engine = engine
        self._state = PlaybackState.STOPPED
        self._refresh_selector()

        logger.info(f"Attached subject with {len(registry)} track(s)")
        self.dispatch(EventType.MESH_ATTACHED)

        if initial_index >= 0:
            self._bind_track(initial_index, previous_index=-1, emit_changed=False)
            if at_time is not None:
                self.set_time(at_time)
            if options.play:
                self.play()

    def detach(self) -> None:
        """Release the subject, its engine and bound action. Idempotent."""
        was_attached = self._subject is not None

        self._release_action()
        self._engine = None
        self._subject = None
        self._registry.clear()
        self._state = PlaybackState.STOPPED
        self._duration_display = self._placeholder
        self._update_view(
            time_text=self._placeholder_pair,
            slider_value=0.0,
            play_icon=self.config.icons.PLAY,
            selector_options=[],
            selector_index=-1,
            selector_disabled=True,
            info_text=format_track_summary(None),
        )

        if was_attached:
            logger.info("Detached subject")
            self.dispatch(EventType.MESH_DETACHED)
            self.dispatch(EventType.STOP)

    # --- Transport ---

    def play(self) -> None:
        """Start or resume playback of the bound track."""
        if self._action is None:
            return

        state_changed = self._state is not PlaybackState.PLAYING
        self._state = PlaybackState.PLAYING
        self._action.paused = False

        started = False
        if not self._action.is_running():
            self._action.play()
            started = True

        self._update_view(play_icon=self.config.icons.PAUSE)
        self._refresh_time()

        if state_changed or started:
            logger.debug(f"Playback started (track {self.current_track_index})")
            self.dispatch(EventType.PLAY)

    def pause(self) -> None:
        """Pause playback, keeping the cursor where it is."""
        if self._action is None or self._state is not PlaybackState.PLAYING:
            return

        self._action.paused = True
        self._state = PlaybackState.PAUSED
        self._update_view(play_icon=self.config.icons.PLAY)
        logger.debug("Playback paused")
        self.dispatch(EventType.PAUSE)

    def toggle_play(self) -> None:
        """Pause when playing, otherwise play."""
        if self._state is PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()

    def stop(self) -> None:
        """Stop playback and rewind to the start."""
        if self._action is None or self._state is not PlaybackState.PLAYING:
            return

        self._action.stop()
        self._state = PlaybackState.STOPPED
        self.set_percentage(0)
        self._update_view(play_icon=self.config.icons.PLAY)
        logger.debug("Playback stopped")
        self.dispatch(EventType.STOP)

    # --- Seeking ---

    def set_time(self, value: float | str) -> None:
        """
        Move the cursor to ``value`` seconds.

        Negative times clamp to 0 and an infinite time lands on the clip
        end. Does nothing when no track is bound.

        Raises
        ------
        InvalidTimeError
            If ``value`` is None, NaN or not numeric
        """
        if self._action is None:
            return

        time = parse_time_value(value, "time")
        if not math.isfinite(time):
            time = self._timeline().duration if time > 0 else 0.0
        time = max(0.0, time)

        self._action.time = time
        self._refresh_time()
        self.dispatch(EventType.CHANGE_TIME, time)

    def set_percentage(self, value: float | str) -> None:
        """
        Move the cursor to ``value`` percent of the clip duration.

        Does nothing when no track is bound.

        Raises
        ------
        InvalidTimeError
            If ``value`` is None, NaN or not numeric
        """
        if self._action is None:
            return

        percentage = parse_time_value(value, "percentage")
        time = self._timeline().from_percentage(percentage)
        if not math.isfinite(time):
            time = self._timeline().duration

        self._action.time = time
        self._refresh_time()
        self.dispatch(EventType.CHANGE_PERCENTAGE, percentage)
        self.dispatch(EventType.CHANGE_TIME, time)

    # --- Track selection ---

    def select_track(self, index: int) -> TrackInfo:
        """
        Switch to the track at ``index``.

        The cursor resets to 0; playback resumes on the new track if it was
        playing before the switch.

        Returns
        -------
        TrackInfo
            Metadata of the newly selected track

        Raises
        ------
        NotAttachedError
            If no subject is attached
        IndexOutOfRangeError
            If ``index`` does not address a track (state is unchanged)
        """
        if self._subject is None:
            raise NotAttachedError()

        index = self._registry.validate_index(index)
        previous_index = self._registry.current_index
        was_playing = self._state is PlaybackState.PLAYING

        info = self._bind_track(index, previous_index, emit_changed=True)
        if was_playing:
            self.play()
        return info

    def select_track_by_name(self, name: str) -> TrackInfo:
        """
        Switch to the first track named ``name``.

        Raises
        ------
        NotAttachedError
            If no subject is attached
        TrackNotFoundError
            If no track has that name
        """
        if self._subject is None:
            raise NotAttachedError()

        track = self._registry.find_by_name(name)
        if track is None:
            raise TrackNotFoundError(name)
        return self.select_track(track.index)

    def _bind_track(
        self, index: int, previous_index: int, emit_changed: bool
    ) -> TrackInfo:
        self._release_action()

        info = self._registry.select(index)
        action = self._engine.clip_action(self._registry.clip_at(index))
        action.time = 0.0
        self._action = action
        self._state = PlaybackState.STOPPED
        self._duration_display = format_time_display(
            info.duration, self.config.output_format
        )

        self._update_view(
            play_icon=self.config.icons.PLAY,
            selector_index=index,
            info_text=format_track_summary(info, self.config.output_format),
        )
        self._refresh_time()

        logger.info(f"Selected track {index}: '{info.name}'")
        selection = TrackSelection(
            animation_info=info, previous_index=previous_index, current_index=index
        )
        self.dispatch(EventType.ANIMATION_SELECTED, selection)
        if emit_changed and index != previous_index:
            self.dispatch(EventType.ANIMATION_TRACK_CHANGED, selection)
        return info

    def _release_action(self) -> None:
        if self._action is not None:
            self._action.stop()
            self._action = None
            self._state = PlaybackState.STOPPED

    # --- Frame loop ---

    def advance(self, elapsed: float | None = None) -> None:
        """
        Advance the engine by one frame.

        Parameters
        ----------
        elapsed : float | None
            Seconds since the previous frame; read from the clock when None
        """
        delta = self._clock.get_delta() if elapsed is None else float(elapsed)
        if self._engine is not None:
            self._engine.update(delta)
        if self._action is not None and self._state is PlaybackState.PLAYING:
            self._refresh_time()

    # --- Queries ---

    def get_current_time_display(self) -> str:
        """``"current / duration"``, e.g. ``"00:02:50 / 00:10:00"``."""
        if self._action is None:
            return self._placeholder_pair
        current = format_time_display(self._action.time, self.config.output_format)
        return f"{current} / {self._duration_display}"

    def get_track_list(self) -> list[TrackInfo]:
        return self._registry.tracks

    def get_track_by_index(self, index: int) -> TrackInfo | None:
        return self._registry.get(index)

    def get_track_by_name(self, name: str) -> TrackInfo | None:
        return self._registry.find_by_name(name)

    # --- View sync ---

    def _update_view(self, **changes: Any) -> None:
        if self.view is not None:
            self.view.update(**changes)

    def _refresh_time(self) -> None:
        self._update_view(
            time_text=self.get_current_time_display(),
            slider_value=self.current_percentage,
        )

    def _refresh_selector(self) -> None:
        tracks = self._registry.tracks
        self._update_view(
            selector_options=[t.name for t in tracks],
            selector_index=self._registry.current_index,
            selector_disabled=len(tracks) <= 1,
            info_text=format_track_summary(
                self._registry.current, self.config.output_format
            ),
        )
