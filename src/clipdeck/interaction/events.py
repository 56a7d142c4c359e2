"""
Event bus for playback notifications.

The playback controller emits events here; UI layers, hosts and tests
subscribe without coupling to the controller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Standard playback event types.

    Members compare equal to their string values, so ``"PLAY"`` and
    ``EventType.PLAY`` address the same subscribers.
    """

    # Transport events
    PLAY = "PLAY"
    PAUSE = "PAUSE"
    STOP = "STOP"

    # Subject events
    MESH_ATTACHED = "MESH_ATTACHED"
    MESH_DETACHED = "MESH_DETACHED"

    # Seek events
    CHANGE_PERCENTAGE = "CHANGE_PERCENTAGE"
    CHANGE_TIME = "CHANGE_TIME"

    # Track events
    ANIMATION_SELECTED = "ANIMATION_SELECTED"
    ANIMATION_TRACK_CHANGED = "ANIMATION_TRACK_CHANGED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrackSelection:
    """Payload of ANIMATION_SELECTED and ANIMATION_TRACK_CHANGED."""

    animation_info: Any
    previous_index: int
    current_index: int


@dataclass
class Event:
    """Event data container."""

    type: EventType | str
    payload: Any = None
    source: str | None = None


def _event_key(event_type: EventType | str) -> str:
    if isinstance(event_type, EventType):
        return event_type.value
    if isinstance(event_type, str):
        return event_type
    raise TypeError(f"Event type must be a string, got {type(event_type).__name__}")


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__name__", repr(callback))


class EventBus:
    """
    Simple event bus for pub/sub pattern.

    Callbacks run synchronously in registration order. A callback that
    raises is logged and does not prevent the remaining callbacks from
    running.
    """

    def __init__(self, name: str = "playback", max_history: int = 100):
        """
        Initialize event bus.

        Parameters
        ----------
        name : str
            Name of this event bus instance
        max_history : int
            Number of recent events kept for ``get_history``
        """
        self.name = name
        self._subscribers: dict[str, list[Callable[[Event], Any]]] = {}
        self._event_history: list[Event] = []
        self._max_history = max_history
        logger.debug(f"Created EventBus: {name}")

    def subscribe(
        self,
        event_type: EventType | str,
        callback: Callable[[Event], Any],
    ) -> None:
        """
        Subscribe to an event type.

        Parameters
        ----------
        event_type : EventType | str
            Event type to subscribe to
        callback : Callable[[Event], Any]
            Function to call when event is emitted

        Raises
        ------
        TypeError
            If ``callback`` is not callable
        """
        if not callable(callback):
            raise TypeError(f"Event callback must be callable, got {callback!r}")

        key = _event_key(event_type)
        self._subscribers.setdefault(key, []).append(callback)
        logger.debug(f"[{self.name}] Subscribed to {key}: {_callback_name(callback)}")

    def unsubscribe(
        self,
        event_type: EventType | str,
        callback: Callable[[Event], Any],
    ) -> bool:
        """
        Unsubscribe from an event type.

        Returns
        -------
        bool
            True if callback was found and removed
        """
        key = _event_key(event_type)
        callbacks = self._subscribers.get(key)
        if not callbacks:
            return False

        for i, cb in enumerate(callbacks):
            if cb == callback:
                del callbacks[i]
                logger.debug(
                    f"[{self.name}] Unsubscribed from {key}: {_callback_name(callback)}"
                )
                return True

        return False

    def emit(
        self,
        event_type: EventType | str,
        payload: Any = None,
        source: str | None = None,
    ) -> Event:
        """
        Emit an event.

        Parameters
        ----------
        event_type : EventType | str
            Type of event to emit
        payload : Any
            Event data (a number, a ``TrackSelection``, or None)
        source : str | None
            Component emitting the event

        Returns
        -------
        Event
            The delivered event
        """
        key = _event_key(event_type)
        if key in EventType.__members__:
            event_type = EventType[key]
        event = Event(type=event_type, payload=payload, source=source)

        # Add to history
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history.pop(0)

        # Snapshot so callbacks may (un)subscribe while being called
        subscribers = list(self._subscribers.get(key, ()))
        if not subscribers:
            logger.debug(
                f"[{self.name}] Emitted {key} from {source or 'unknown'} (no subscribers)"
            )
            return event

        logger.debug(
            f"[{self.name}] Emitting {key} from {source or 'unknown'} "
            f"to {len(subscribers)} subscribers"
        )
        for callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.error(
                    f"[{self.name}] Error in event handler {_callback_name(callback)} "
                    f"for {key}: {e}",
                    exc_info=True,
                )
        return event

    def clear_subscribers(self, event_type: (EventType | str) | None = None) -> None:
        """
        Clear subscribers.

        Parameters
        ----------
        event_type : (EventType | str) | None
            If provided, clear only for this event type.
            If None, clear all subscribers.
        """
        if event_type is None:
            self._subscribers.clear()
            logger.debug(f"[{self.name}] Cleared all subscribers")
            return
        key = _event_key(event_type)
        if key in self._subscribers:
            del self._subscribers[key]
            logger.debug(f"[{self.name}] Cleared subscribers for {key}")

    def get_history(
        self,
        event_type: (EventType | str) | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """
        Get event history.

        Parameters
        ----------
        event_type : (EventType | str) | None
            If provided, filter by event type
        limit : int | None
            Maximum number of events to return

        Returns
        -------
        list[Event]
            Event history (most recent last)
        """
        history = list(self._event_history)

        if event_type is not None:
            key = _event_key(event_type)
            history = [e for e in history if _event_key(e.type) == key]

        if limit is not None:
            history = history[-limit:]

        return history

    def has_subscribers(self, event_type: EventType | str) -> bool:
        """Check if an event type has any subscribers."""
        return bool(self._subscribers.get(_event_key(event_type)))


__all__ = [
    "Event",
    "EventBus",
    "EventType",
    "TrackSelection",
]
