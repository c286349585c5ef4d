"""
Unit tests for snapshot persistence.
"""

import pytest

from kvserver.store import Store
from kvserver.persistence import SnapshotWriter, format_snapshot


class TestFormatSnapshot:

    def test_empty_store(self, store: Store):
        assert format_snapshot(store) == ""

    def test_one_line_per_entry_in_order(self, store: Store):
        store.set("b", "2")
        store.set("a", "1")

        assert format_snapshot(store) == "b: 2\na: 1\n"

    def test_no_escaping(self, store: Store):
        """Delimiters inside keys/values are written verbatim."""
        store.set("a: b", "c")

        assert format_snapshot(store) == "a: b: c\n"


class TestSnapshotWriter:

    def test_write_creates_file(self, tmp_path, store: Store):
        path = tmp_path / "store"
        store.set("name", "alice")

        SnapshotWriter(path).write(store)

        assert path.read_text(encoding="utf-8") == "name: alice\n"

    def test_write_truncates(self, tmp_path, store: Store):
        path = tmp_path / "store"
        path.write_text("stale: data\nmore: stale\n", encoding="utf-8")
        store.set("a", "1")

        SnapshotWriter(path).write(store)

        assert path.read_text(encoding="utf-8") == "a: 1\n"

    def test_empty_store_writes_empty_file(self, tmp_path, store: Store):
        path = tmp_path / "store"
        path.write_text("old: value\n", encoding="utf-8")

        SnapshotWriter(path).write(store)

        assert path.read_text(encoding="utf-8") == ""

    def test_line_count_matches_store(self, tmp_path, store: Store):
        path = tmp_path / "store"
        for i in range(5):
            store.set(f"k{i}", f"v{i}")

        SnapshotWriter(str(path)).write(store)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == len(store)
        assert all(line == f"{k}: {v}" for line, (k, v) in zip(lines, store.items()))

    def test_undecodable_bytes_written_verbatim(self, tmp_path, store: Store):
        path = tmp_path / "store"
        store.set("k", b"\xff".decode("utf-8", "surrogateescape"))

        SnapshotWriter(path).write(store)

        assert path.read_bytes() == b"k: \xff\n"

    def test_unwritable_path_raises(self, tmp_path, store: Store):
        writer = SnapshotWriter(tmp_path / "missing-dir" / "store")

        with pytest.raises(OSError):
            writer.write(store)
