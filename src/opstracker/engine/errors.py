"""
Tracker error hierarchy.

InvalidPathError and TypeMismatchError are raised to the caller before any
state change is applied. CorruptPersistedStateError never leaves the
persistence layer; it is recovered by re-initializing state.
"""

from typing import Sequence


class TrackerError(Exception):
    """Base class for all tracker errors."""


class InvalidPathError(TrackerError):
    """A mutation path does not resolve to a leaf of the Month Record."""

    def __init__(self, message: str, path: Sequence[str] = ()):
        super().__init__(message)
        self.path = tuple(path)


class TypeMismatchError(TrackerError):
    """The leaf at a path holds a different kind of value than the operation needs."""

    def __init__(self, message: str, path: Sequence[str] = ()):
        super().__init__(message)
        self.path = tuple(path)


class CorruptPersistedStateError(TrackerError):
    """A stored blob could not be decoded into a Tracker State."""


class PersistenceWriteError(TrackerError):
    """A blob store failed to write."""
