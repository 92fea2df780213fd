#!/usr/bin/env python3
"""Tests for CSV snapshot sinks."""

import pytest

from cashbook.core.exceptions import StorageError
from cashbook.csvio.snapshots import DirectorySnapshotSink, NullSnapshotSink


class TestDirectorySnapshotSink:
    """Test writing snapshots below the export directory."""

    def test_writes_nested_file(self, temp_dir):
        sink = DirectorySnapshotSink(temp_dir)

        sink.emit("default-store/employees.csv", "id,name\n")

        assert (temp_dir / "default-store" / "employees.csv").read_text(encoding="utf-8") == "id,name\n"

    def test_overwrites_previous_snapshot(self, temp_dir):
        sink = DirectorySnapshotSink(temp_dir)
        sink.emit("stores.csv", "old\n")
        sink.emit("stores.csv", "new\n")

        assert (temp_dir / "stores.csv").read_text(encoding="utf-8") == "new\n"

    def test_rejects_paths_outside_root(self, temp_dir):
        with pytest.raises(StorageError, match="escapes"):
            DirectorySnapshotSink(temp_dir / "exports").emit("../escape.csv", "x")

    def test_write_failure_is_storage_error(self, temp_dir):
        (temp_dir / "blocked").write_text("a file, not a directory")
        sink = DirectorySnapshotSink(temp_dir)

        with pytest.raises(StorageError):
            sink.emit("blocked/employees.csv", "x")


def test_null_sink_discards():
    assert NullSnapshotSink().emit("stores.csv", "x") is None
