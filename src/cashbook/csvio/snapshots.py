#!/usr/bin/env python3
"""
CSV Snapshot Sinks

After every change a repository publishes a CSV snapshot of the affected
partition (e.g. "default-store/employees.csv"). A sink decides where the
snapshot goes.
"""

import logging
from pathlib import Path
from typing import Protocol

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class SnapshotSink(Protocol):
    """Destination for CSV snapshots."""

    def emit(self, filename: str, content: str) -> None:
        """Publish content under a relative filename."""
        ...


class DirectorySnapshotSink:
    """Write snapshots as files below a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        path = (self.root / filename).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Snapshot path escapes export directory: {filename!r}")
        return path

    def emit(self, filename: str, content: str) -> None:
        path = self.path_for(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write snapshot {path}: {e}") from e
        logger.debug("Wrote snapshot %s", path)


class NullSnapshotSink:
    """Discard snapshots (snapshots disabled)."""

    def emit(self, filename: str, content: str) -> None:
        return None
