"""Configuration for the polling watcher package."""

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class WatcherConfig:
    """
    Configuration options for the polling watcher.
    
    Attributes:
        poll_interval_ms: Milliseconds between two polling ticks
        event_buffer: Number of events the event channel holds before
            blocking the poller (0 means every send waits for a receiver)
        error_buffer: Same as event_buffer, for the error channel
        follow_symlinks: Whether to stat symlink targets instead of the links
        ignore_patterns: Glob patterns for entries left out of snapshots
    """
    poll_interval_ms: int = 250
    event_buffer: int = 0
    error_buffer: int = 0
    follow_symlinks: bool = False
    ignore_patterns: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be positive: {self.poll_interval_ms}")
        if self.event_buffer < 0 or self.error_buffer < 0:
            raise ValueError("channel buffers cannot be negative")

    @property
    def poll_interval(self) -> float:
        """Polling interval in seconds."""
        return self.poll_interval_ms / 1000.0

    def should_ignore(self, path: Path) -> bool:
        """
        Check whether a snapshot leaves path out.

        A pattern matches the base name, the full path, or any trailing part
        of the path (so ".git/*" matches "/repo/.git/config"). An ignored
        directory is not walked, so its contents are left out as well.

        Args:
            path: Entry path

        Returns:
            True if some ignore pattern matches
        """
        path_str = str(path)
        return any(
            fnmatch.fnmatch(path.name, pattern)
            or fnmatch.fnmatch(path_str, pattern)
            or fnmatch.fnmatch(path_str, f"*/{pattern}")
            for pattern in self.ignore_patterns
        )
