"""Tests for diff module."""

import pytest
from pathlib import Path

from pollwatch.diff import diff_snapshots, iter_changes
from pollwatch.models import EntryInfo, Event, Op

ROOT = Path("/tmp/w")


def entry(key: str, mtime_ns: int = 1, mode: int = 0o100644) -> EntryInfo:
    path = ROOT / key
    return EntryInfo(name=path.name, path=path, mtime_ns=mtime_ns, mode=mode)


def snapshot(*entries: EntryInfo) -> dict:
    return {info.path.relative_to(ROOT).as_posix(): info for info in entries}


class TestDiffSnapshots:
    """Tests for diff_snapshots."""

    def test_identical_snapshots_yield_nothing(self):
        snap = snapshot(entry("a.txt"), entry("sub", mode=0o40755), entry("sub/b.txt"))

        assert diff_snapshots(snap, snap) == []

    def test_empty_snapshots_yield_nothing(self):
        assert diff_snapshots({}, {}) == []

    def test_create(self):
        old = snapshot(entry("a.txt"))
        new = snapshot(entry("a.txt"), entry("b.txt"))

        assert diff_snapshots(old, new) == [Event(ROOT / "b.txt", Op.CREATE)]

    def test_remove(self):
        old = snapshot(entry("a.txt"), entry("b.txt"))
        new = snapshot(entry("a.txt"))

        assert diff_snapshots(old, new) == [Event(ROOT / "b.txt", Op.REMOVE)]

    def test_write(self):
        old = snapshot(entry("a.txt", mtime_ns=1))
        new = snapshot(entry("a.txt", mtime_ns=2))

        assert diff_snapshots(old, new) == [Event(ROOT / "a.txt", Op.WRITE)]

    def test_chmod(self):
        old = snapshot(entry("a.txt", mode=0o100644))
        new = snapshot(entry("a.txt", mode=0o100600))

        assert diff_snapshots(old, new) == [Event(ROOT / "a.txt", Op.CHMOD)]

    def test_write_and_chmod_are_separate_events(self):
        old = snapshot(entry("a.txt", mtime_ns=1, mode=0o100644))
        new = snapshot(entry("a.txt", mtime_ns=2, mode=0o100755))

        events = diff_snapshots(old, new)

        assert events == [
            Event(ROOT / "a.txt", Op.WRITE),
            Event(ROOT / "a.txt", Op.CHMOD),
        ]

    def test_rename_is_remove_plus_create(self):
        old = snapshot(entry("old.txt"))
        new = snapshot(entry("new.txt"))

        events = diff_snapshots(old, new)

        assert events == [
            Event(ROOT / "new.txt", Op.CREATE),
            Event(ROOT / "old.txt", Op.REMOVE),
        ]
        assert not any(event.has(Op.RENAME) for event in events)

    def test_removals_come_last(self):
        old = snapshot(entry("gone1"), entry("kept", mtime_ns=1), entry("gone2"))
        new = snapshot(entry("added1"), entry("kept", mtime_ns=2), entry("added2"))

        events = diff_snapshots(old, new)

        assert len(events) == 5
        assert {e.op for e in events[:3]} == {Op.CREATE, Op.WRITE}
        assert {e.path.name for e in events[3:]} == {"gone1", "gone2"}
        assert all(e.op == Op.REMOVE for e in events[3:])

    def test_same_name_in_different_directories(self):
        old = snapshot(entry("one/x"), entry("two/x"))
        new = snapshot(entry("one/x"))

        assert diff_snapshots(old, new) == [Event(ROOT / "two" / "x", Op.REMOVE)]

    def test_remove_uses_old_path(self):
        old = {"a": entry("a")}

        events = diff_snapshots(old, {})

        assert events[0].path == ROOT / "a"

    def test_iter_changes_is_lazy(self):
        old = snapshot(entry("a.txt"))
        new = snapshot(entry("b.txt"))

        changes = iter_changes(old, new)

        assert next(changes) == Event(ROOT / "b.txt", Op.CREATE)
        assert next(changes) == Event(ROOT / "a.txt", Op.REMOVE)
        with pytest.raises(StopIteration):
            next(changes)
