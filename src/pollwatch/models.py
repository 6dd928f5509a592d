"""Data models for the polling watcher package."""

import json
import os
import stat
from dataclasses import dataclass, replace
from enum import IntFlag
from pathlib import Path
from typing import List, Mapping


class Op(IntFlag):
    """Kinds of change carried by an event. Flags may be combined."""
    CREATE = 1
    WRITE = 2
    REMOVE = 4
    RENAME = 8
    CHMOD = 16


# Order used when rendering an event, independent of the bit values.
_DISPLAY_ORDER = (Op.CREATE, Op.REMOVE, Op.WRITE, Op.RENAME, Op.CHMOD)


@dataclass(frozen=True)
class Event:
    """
    A change observed under a watched root.

    Attributes:
        path: Full path of the changed entry
        op: One or more change flags
    """
    path: Path
    op: Op

    def has(self, op: Op) -> bool:
        """Return True if every flag in op is set on this event."""
        return self.op & op == op

    def op_names(self) -> List[str]:
        """Names of the set flags, in display order."""
        return [flag.name for flag in _DISPLAY_ORDER if self.op & flag]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "path": str(self.path),
            "op": self.op_names(),
        }

    def __str__(self) -> str:
        quoted = json.dumps(str(self.path), ensure_ascii=False)
        return f"{quoted}: {'|'.join(self.op_names())}"


@dataclass(frozen=True)
class EntryInfo:
    """
    Metadata of one filesystem entry at the time a snapshot was taken.

    Attributes:
        name: Base name of the entry
        path: Full path of the entry
        mtime_ns: Modification time in nanoseconds
        mode: Full st_mode (file type and permission bits)
        is_directory: Whether the entry is a directory
    """
    name: str
    path: Path
    mtime_ns: int
    mode: int
    is_directory: bool = False

    @classmethod
    def from_stat(cls, path: Path, st: os.stat_result) -> "EntryInfo":
        """Create from a stat result."""
        return cls(
            name=path.name,
            path=path,
            mtime_ns=st.st_mtime_ns,
            mode=st.st_mode,
            is_directory=stat.S_ISDIR(st.st_mode),
        )


# Entry key (path relative to the root, "/"-separated) -> metadata.
Snapshot = Mapping[str, EntryInfo]


@dataclass(frozen=True)
class WatchTarget:
    """
    A registered root and the snapshot last taken of it.

    Attributes:
        root: The root path, as registered
        snapshot: Most recent successful snapshot of the root
    """
    root: Path
    snapshot: Snapshot

    def with_snapshot(self, snapshot: Snapshot) -> "WatchTarget":
        """Return a copy of this target holding a newer snapshot."""
        return replace(self, snapshot=snapshot)
