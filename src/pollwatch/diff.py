"""Derive change events from two snapshots of the same root."""

from typing import Iterator, List

from .models import Event, Op, Snapshot


def iter_changes(old: Snapshot, new: Snapshot) -> Iterator[Event]:
    """
    Yield the events that turn old into new.

    Entries only in new yield CREATE. Entries in both yield WRITE when the
    modification time differs and, separately, CHMOD when the mode differs.
    Entries only in old yield REMOVE, after everything else. Renames show
    up as a REMOVE of the old path plus a CREATE of the new one; RENAME is
    never produced here.

    Args:
        old: Snapshot from the previous tick
        new: Snapshot just taken

    Yields:
        Event objects, one flag each
    """
    for key, info in new.items():
        previous = old.get(key)
        if previous is None:
            yield Event(info.path, Op.CREATE)
            continue
        if previous.mtime_ns != info.mtime_ns:
            yield Event(info.path, Op.WRITE)
        if previous.mode != info.mode:
            yield Event(info.path, Op.CHMOD)

    for key, info in old.items():
        if key not in new:
            yield Event(info.path, Op.REMOVE)


def diff_snapshots(old: Snapshot, new: Snapshot) -> List[Event]:
    """Return all events between two snapshots as a list."""
    return list(iter_changes(old, new))
