"""Custom exceptions for the polling watcher package."""

from pathlib import Path
from typing import Optional


class WatcherError(Exception):
    """Base exception for all watcher errors."""
    pass


class RootError(WatcherError):
    """Error related to root folder registration."""
    pass


class EmptyPathError(RootError):
    """An empty path was passed where a root path is required."""
    pass


class RootAlreadyExistsError(RootError):
    """Root folder is already being watched."""
    pass


class SnapshotError(WatcherError):
    """
    A snapshot of a root could not be taken.

    Attributes:
        path: The root that failed
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class RootNotFoundError(SnapshotError):
    """Specified root folder does not exist."""
    pass


class WatcherNotRunningError(WatcherError):
    """Watcher has been closed."""
    pass


class ChannelClosedError(WatcherError):
    """Channel was closed while sending or receiving."""
    pass
