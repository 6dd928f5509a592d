"""Point-in-time snapshots of a watched root, built on watchdog's DirectorySnapshot."""

import logging
import os
import stat
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Union

from watchdog.utils.dirsnapshot import DirectorySnapshot

from .config import WatcherConfig
from .exceptions import RootNotFoundError, SnapshotError
from .models import EntryInfo, Snapshot

logger = logging.getLogger(__name__)


def _scandir_quietly(path) -> List[os.DirEntry]:
    """List a directory, treating any error as an empty directory."""
    try:
        with os.scandir(path) as entries:
            return list(entries)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {path}: {e}")
        return []


def _make_listdir(config: WatcherConfig) -> Callable[[str], List[os.DirEntry]]:
    """Build a listing function that drops ignored entries.

    Ignored directories are never listed, so nothing beneath them is walked.
    """
    if not config.ignore_patterns:
        return _scandir_quietly

    def listdir(path) -> List[os.DirEntry]:
        return [
            entry for entry in _scandir_quietly(path)
            if not config.should_ignore(Path(entry.path))
        ]

    return listdir


def _relative_key(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


def take_snapshot(
    root: Union[str, Path],
    config: Optional[WatcherConfig] = None,
) -> Snapshot:
    """
    Capture the metadata of everything beneath a root.

    The root itself is looked up first; if that fails the whole call fails.
    Errors on individual entries during the walk are skipped.

    Args:
        root: Directory (or file) to snapshot
        config: Watcher configuration (symlink handling, ignore patterns)

    Returns:
        Read-only mapping from the entry's root-relative path to its metadata

    Raises:
        RootNotFoundError: If the root does not exist
        SnapshotError: If the root cannot be inspected for another reason
    """
    config = config or WatcherConfig()
    root = Path(root)
    stat_fn = os.stat if config.follow_symlinks else os.lstat

    try:
        root_st = stat_fn(root)
    except FileNotFoundError as e:
        raise RootNotFoundError(f"Root does not exist: {root}", path=root) from e
    except OSError as e:
        raise SnapshotError(f"Cannot read root {root}: {e}", path=root) from e

    entries: Dict[str, EntryInfo] = {}

    if not stat.S_ISDIR(root_st.st_mode):
        entries[root.name] = EntryInfo.from_stat(root, root_st)
        return MappingProxyType(entries)

    try:
        dir_snapshot = DirectorySnapshot(
            str(root),
            recursive=True,
            stat=stat_fn,
            listdir=_make_listdir(config),
        )
    except OSError as e:
        # The root vanished between the lookup above and the walk.
        raise SnapshotError(f"Cannot read root {root}: {e}", path=root) from e

    for raw_path in dir_snapshot.paths:
        path = Path(raw_path)
        if path == root:
            continue
        try:
            st = dir_snapshot.stat_info(raw_path)
        except KeyError:
            continue
        entries[_relative_key(root, path)] = EntryInfo.from_stat(path, st)

    return MappingProxyType(entries)
