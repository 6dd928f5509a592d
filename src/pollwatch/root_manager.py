"""Thread-safe management of watched roots and their snapshots."""

import threading
from pathlib import Path
from typing import Dict, FrozenSet, List

from .exceptions import RootAlreadyExistsError
from .models import WatchTarget


class RootManager:
    """
    Thread-safe registry of watch targets keyed by root path.

    The lock is held only for the map operation itself, never while a
    snapshot is being taken or an event is being delivered.
    """

    def __init__(self):
        """Initialize the root manager."""
        self._targets: Dict[Path, WatchTarget] = {}
        self._lock = threading.Lock()

    def add(self, target: WatchTarget) -> None:
        """
        Register a target.

        Args:
            target: Target holding its baseline snapshot

        Raises:
            RootAlreadyExistsError: If the root is already being watched
        """
        with self._lock:
            if target.root in self._targets:
                raise RootAlreadyExistsError(f"Root already being watched: {target.root}")
            self._targets[target.root] = target

    def remove(self, root: Path) -> bool:
        """
        Remove a target.

        Args:
            root: Root path of the target

        Returns:
            True if the target was removed, False if not found
        """
        with self._lock:
            return self._targets.pop(root, None) is not None

    def replace(self, previous: WatchTarget, updated: WatchTarget) -> bool:
        """
        Swap in a target with a newer snapshot.

        The swap only happens if previous is still the registered target for
        its root, so a root removed (or removed and re-added) while it was
        being polled keeps its current registration.

        Args:
            previous: Target the poll started from
            updated: Same root with the new snapshot

        Returns:
            True if the target was replaced
        """
        with self._lock:
            if self._targets.get(previous.root) is not previous:
                return False
            self._targets[previous.root] = updated
            return True

    def targets(self) -> List[WatchTarget]:
        """Return a copy of the registered targets."""
        with self._lock:
            return list(self._targets.values())

    def roots(self) -> FrozenSet[Path]:
        """Return the registered root paths."""
        with self._lock:
            return frozenset(self._targets)

    def clear(self) -> int:
        """
        Remove all targets.

        Returns:
            Number of targets removed
        """
        with self._lock:
            count = len(self._targets)
            self._targets.clear()
            return count

    def __len__(self) -> int:
        """Return the number of watched roots."""
        with self._lock:
            return len(self._targets)

    def __contains__(self, root: Path) -> bool:
        """Check if a path is a watched root."""
        with self._lock:
            return root in self._targets
