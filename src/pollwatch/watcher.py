"""Polling watcher: snapshots registered roots on a timer and reports changes."""

import logging
import os
import threading
import time
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Union

from .channel import Channel
from .config import WatcherConfig
from .diff import iter_changes
from .exceptions import (
    ChannelClosedError,
    EmptyPathError,
    RootAlreadyExistsError,
    SnapshotError,
    WatcherNotRunningError,
)
from .models import Event, WatchTarget
from .root_manager import RootManager
from .snapshot import take_snapshot

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PollingWatcher:
    """
    Watches roots by re-snapshotting them at a fixed interval.

    The watcher starts polling as soon as it is created. Each tick walks
    every registered root in turn on a single background thread, sends the
    derived events on ``events`` and snapshot failures on ``errors``.
    Both channels are unbuffered by default: the poller blocks until the
    consumer takes each item, so a consumer must keep draining both.

    Usage:
        watcher = PollingWatcher()
        watcher.add("/tmp/w")
        for event in watcher.events:
            print(event)
    """

    def __init__(
        self,
        config: Optional[WatcherConfig] = None,
        initial_roots: Optional[List[PathLike]] = None,
    ):
        """
        Initialize and start the watcher.

        Args:
            config: Watcher configuration
            initial_roots: Roots to register before polling starts

        Raises:
            SnapshotError: If an initial root cannot be snapshotted
        """
        self.config = config or WatcherConfig()
        self.events: Channel[Event] = Channel(self.config.event_buffer)
        self.errors: Channel[SnapshotError] = Channel(self.config.error_buffer)

        self._poll_interval = self.config.poll_interval
        self._root_manager = RootManager()
        self._running = True
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        # Held for a whole tick; ticks never overlap.
        self._tick_lock = threading.Lock()

        if initial_roots:
            for root in initial_roots:
                self.add(root)

        self._start()

    @property
    def is_running(self) -> bool:
        """Whether the watcher is polling."""
        with self._lock:
            return self._running

    @property
    def poll_interval(self) -> float:
        """Interval in seconds the timer uses the next time it starts."""
        return self._poll_interval

    def poll_frequency(self, interval: Union[float, timedelta]) -> None:
        """
        Set the polling interval.

        Only a timer started afterwards picks this up; the running timer
        keeps the interval it was started with.

        Args:
            interval: Seconds, or a timedelta

        Raises:
            ValueError: If the interval is not positive
        """
        if isinstance(interval, timedelta):
            interval = interval.total_seconds()
        if interval <= 0:
            raise ValueError(f"poll interval must be positive: {interval}")
        self._poll_interval = float(interval)

    def add(self, path: PathLike) -> None:
        """
        Start watching a file or directory.

        The root is snapshotted immediately; changes are reported relative
        to that baseline.

        Args:
            path: Root to watch

        Raises:
            EmptyPathError: If path is empty
            WatcherNotRunningError: If the watcher has been closed
            RootAlreadyExistsError: If path is already watched
            SnapshotError: If path cannot be snapshotted
        """
        root = self._to_root(path, "path cannot be empty")

        if root in self._root_manager:
            raise RootAlreadyExistsError(f"Root already being watched: {root}")

        snapshot = take_snapshot(root, self.config)
        self._root_manager.add(WatchTarget(root=root, snapshot=snapshot))
        logger.info(f"Watching {root} ({len(snapshot)} entries)")

    def remove(self, path: PathLike) -> None:
        """
        Stop watching a root. Removing a root that is not watched is a no-op.

        Args:
            path: Root to stop watching

        Raises:
            EmptyPathError: If path is empty
            WatcherNotRunningError: If the watcher has been closed
        """
        root = self._to_root(path, "can't remove an empty path")

        if self._root_manager.remove(root):
            logger.info(f"Stopped watching {root}")

    def get_roots(self) -> List[Path]:
        """
        Get the current list of watched roots.

        Returns:
            List of root paths
        """
        return list(self._root_manager.roots())

    def tick(self) -> int:
        """
        Run one polling cycle now, on the calling thread.

        Returns:
            Number of events delivered

        Raises:
            WatcherNotRunningError: If the watcher has been closed
        """
        self._ensure_running()
        return self._poll_once()

    def close(self) -> None:
        """Stop polling and close both channels. Further calls do nothing."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stop_event.set()
            self.events.close()
            self.errors.close()
            thread = self._thread
            self._thread = None

        self._root_manager.clear()

        if thread and thread is not threading.current_thread():
            thread.join(timeout=5.0)
        logger.info("Polling watcher closed")

    def __enter__(self) -> "PollingWatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _to_root(self, path: PathLike, empty_message: str) -> Path:
        if path is None or os.fspath(path) == "":
            raise EmptyPathError(empty_message)
        self._ensure_running()
        return Path(path)

    def _ensure_running(self) -> None:
        if not self.is_running:
            raise WatcherNotRunningError("Watcher is closed")

    def _start(self) -> None:
        interval = self._poll_interval
        self._thread = threading.Thread(
            target=self._poll_loop,
            args=(interval,),
            name="PollingWatcher",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Polling watcher started, interval={interval}s")

    def _poll_loop(self, interval: float) -> None:
        """Worker loop that runs a tick every interval until stopped."""
        next_tick = time.monotonic() + interval

        while not self._stop_event.wait(timeout=max(0.0, next_tick - time.monotonic())):
            try:
                self._poll_once()
            except Exception:
                logger.exception("Polling tick failed")

            # Ticks that fell due while this one was running are dropped.
            now = time.monotonic()
            while next_tick <= now:
                next_tick += interval

        logger.debug("Poll loop stopped")

    def _poll_once(self) -> int:
        delivered = 0
        with self._tick_lock:
            for target in self._root_manager.targets():
                if self._stop_event.is_set():
                    break
                try:
                    delivered += self._poll_target(target)
                except ChannelClosedError:
                    logger.debug("Channel closed during tick, abandoning it")
                    break
                except Exception:
                    logger.exception(f"Polling {target.root} failed")
        return delivered

    def _poll_target(self, target: WatchTarget) -> int:
        try:
            snapshot = take_snapshot(target.root, self.config)
        except SnapshotError as e:
            logger.warning(f"Snapshot failed for {target.root}: {e}")
            self.errors.send(e)
            return 0

        delivered = 0
        for event in iter_changes(target.snapshot, snapshot):
            logger.debug(f"Event: {event}")
            self.events.send(event)
            delivered += 1

        self._root_manager.replace(target, target.with_snapshot(snapshot))
        return delivered
