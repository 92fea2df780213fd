#!/usr/bin/env python3
"""
Durable Key-Value Storage

The cashbook persists every collection as a JSON document under a logical
key (e.g. "store_sales_records"). Two substrates are provided:

- JsonFileKeyValueStore: one pretty-printed JSON file per key on disk
- MemoryKeyValueStore: process-local dictionary, used for tests and dry runs

Values must be JSON-serializable. Both substrates hand out copies so callers
can never mutate stored state by accident.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from .exceptions import StorageError
from .json_utils import read_json, write_json

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Protocol for the durable key-value substrate."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default if absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Durably store value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...

    def contains(self, key: str) -> bool:
        """Check whether key has a stored value."""
        ...

    def last_modified(self, key: str) -> datetime | None:
        """Timestamp of the last write to key, or None if absent."""
        ...

    def size_bytes(self, key: str) -> int | None:
        """Serialized size of the value under key, or None if absent."""
        ...


def _check_key(key: str) -> str:
    if not _KEY_PATTERN.match(key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class JsonFileKeyValueStore:
    """
    Key-value store backed by one JSON file per key.

    Writes go through write_json, which replaces the file atomically, so a
    crash mid-write never leaves a truncated document behind.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{_check_key(key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return read_json(path)
        except json.JSONDecodeError as e:
            logger.error("Corrupt storage file %s: %s", path, e)
            raise StorageError(f"Corrupt data under key {key!r}: {e}") from e
        except OSError as e:
            raise StorageError(f"Could not read key {key!r}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            write_json(path, value)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write storage key %s: %s", key, e)
            raise StorageError(f"Could not write key {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not delete key {key!r}: {e}") from e

    def contains(self, key: str) -> bool:
        return self._path(key).exists()

    def last_modified(self, key: str) -> datetime | None:
        path = self._path(key)
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime)

    def size_bytes(self, key: str) -> int | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.stat().st_size


class MemoryKeyValueStore:
    """In-memory key-value store with the same copy semantics as the file store."""

    def __init__(self):
        self._data: dict[str, str] = {}
        self._modified: dict[str, datetime] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(_check_key(key))
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[_check_key(key)] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not write key {key!r}: {e}") from e
        self._modified[key] = datetime.now()

    def delete(self, key: str) -> None:
        self._data.pop(_check_key(key), None)
        self._modified.pop(key, None)

    def contains(self, key: str) -> bool:
        return _check_key(key) in self._data

    def last_modified(self, key: str) -> datetime | None:
        return self._modified.get(key)

    def size_bytes(self, key: str) -> int | None:
        raw = self._data.get(key)
        return None if raw is None else len(raw.encode("utf-8"))
