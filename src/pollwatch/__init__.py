"""
Polling File Watcher Package

Detects changes to files and directories by periodically re-scanning them
and comparing snapshots, for environments without (or avoiding) native
change-notification APIs.

Features:
- Recursive snapshots of registered roots
- Change events: CREATE, WRITE, REMOVE, CHMOD
- Fixed-interval polling on a background thread
- Blocking event and error channels with natural backpressure
- Thread-safe add/remove of roots while polling
"""

from .models import (
    Op,
    Event,
    EntryInfo,
    Snapshot,
    WatchTarget,
)

from .config import WatcherConfig

from .exceptions import (
    WatcherError,
    RootError,
    EmptyPathError,
    RootAlreadyExistsError,
    SnapshotError,
    RootNotFoundError,
    WatcherNotRunningError,
    ChannelClosedError,
)

from .channel import Channel
from .snapshot import take_snapshot
from .diff import diff_snapshots, iter_changes
from .root_manager import RootManager
from .watcher import PollingWatcher


__all__ = [
    # Models
    "Op",
    "Event",
    "EntryInfo",
    "Snapshot",
    "WatchTarget",
    # Config
    "WatcherConfig",
    # Exceptions
    "WatcherError",
    "RootError",
    "EmptyPathError",
    "RootAlreadyExistsError",
    "SnapshotError",
    "RootNotFoundError",
    "WatcherNotRunningError",
    "ChannelClosedError",
    # Components
    "Channel",
    "take_snapshot",
    "diff_snapshots",
    "iter_changes",
    "RootManager",
    # Main watcher
    "PollingWatcher",
]

__version__ = "0.1.0"
