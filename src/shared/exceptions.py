"""
Custom exceptions for ClipDeck.

This module provides domain-specific exceptions for better error handling
and clearer error messages throughout the application.

Clean Architecture Note:
- This file belongs to the Shared layer (cross-cutting concerns)
- Can be imported by any layer (domain, infrastructure, clipdeck)
"""


class ClipDeckError(Exception):
    """Base exception for all playback-control errors."""

    pass


class InvalidTimeError(ClipDeckError, ValueError):
    """A time value was missing, NaN, or could not be parsed as a number."""

    def __init__(self, parameter: str = "time", value: object = None):
        self.parameter = parameter
        self.value = value
        super().__init__(f"property '{parameter}' can't be undefined or NaN")


class IndexOutOfRangeError(ClipDeckError, IndexError):
    """A track index was outside the registry bounds."""

    def __init__(self, index: object, length: int):
        self.index = index
        self.length = length
        if length > 0:
            message = f"Invalid animation index. Must be between 0 and {length - 1}"
        else:
            message = "Invalid animation index. no animations available"
        super().__init__(message)


class TrackNotFoundError(ClipDeckError, LookupError):
    """No track with the requested name exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Animation "{name}" not found')


class AlreadyAttachedError(ClipDeckError):
    """A subject is already attached to the controller."""

    pass


class NotAttachedError(ClipDeckError):
    """The operation needs an attached subject."""

    def __init__(self, message: str = "No mesh attached"):
        super().__init__(message)


class MissingClipError(ClipDeckError):
    """A clip handle was absent while building track metadata."""

    def __init__(self, index: int | None = None):
        self.index = index
        super().__init__("Animation clip is required")
