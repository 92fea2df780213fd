#!/usr/bin/env python3
"""
DataStore Protocol - Standard interface for persisted cashbook collections.

Every repository (stores, employees, advances, salaries, sales) exposes the
same metadata surface so the CLI can report on storage state without
knowing each collection's layout.
"""

from datetime import datetime
from typing import Protocol


class DataStore(Protocol):
    """
    Protocol for collection metadata queries.

    Implementations keep their own load/save semantics; this protocol only
    covers the questions asked by status reporting.
    """

    entity_name: str

    def exists(self) -> bool:
        """
        Check if the collection has ever been persisted.

        Returns:
            True if data exists in storage, False otherwise
        """
        ...

    def last_modified(self) -> datetime | None:
        """
        Get timestamp of most recent write.

        Returns:
            datetime of last modification, or None if data doesn't exist
        """
        ...

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        ...

    def item_count(self) -> int | None:
        """
        Get count of records across all partitions.

        Returns:
            Count of records, or None if data doesn't exist
        """
        ...

    def size_bytes(self) -> int | None:
        """
        Get serialized storage size in bytes.

        Returns:
            Size in bytes, or None if data doesn't exist
        """
        ...

    def summary_text(self) -> str:
        """
        Get human-readable summary of current data state.

        Returns:
            Brief text description for display in CLI output and logs
        """
        ...
