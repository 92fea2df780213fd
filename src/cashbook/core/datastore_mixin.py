#!/usr/bin/env python3
"""
DataStore Mixin - Common metadata for key-value backed repositories.

Repositories persist one JSON document under a storage key; this mixin turns
that key into the DataStore metadata surface.
"""

from abc import abstractmethod
from datetime import datetime

from .kvstore import KeyValueStore


class DataStoreMixin:
    """
    Mixin providing common DataStore functionality.

    Subclasses must set:
    - storage_key: key of the persisted document
    - entity_name: plural noun used in summaries (e.g. "employees")
    - self.kv: the KeyValueStore

    and implement item_count().
    """

    storage_key: str
    entity_name: str
    kv: KeyValueStore

    def exists(self) -> bool:
        """Check if the collection has been persisted."""
        return self.kv.contains(self.storage_key)

    def last_modified(self) -> datetime | None:
        """Get timestamp of most recent write."""
        return self.kv.last_modified(self.storage_key)

    def size_bytes(self) -> int | None:
        """Get serialized size of the collection."""
        return self.kv.size_bytes(self.storage_key)

    @abstractmethod
    def item_count(self) -> int | None:
        """Get count of items/records in stored data."""
        ...

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def summary_text(self) -> str:
        """Get human-readable summary."""
        count = self.item_count()
        if count is None:
            return f"No {self.entity_name} saved yet"
        return f"{self.entity_name.capitalize()}: {count} record(s)"
