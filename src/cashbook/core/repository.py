#!/usr/bin/env python3
"""
Partitioned Repository Base

Employees, advances, salaries and sales records are each stored as one
document of the form {store_id: [entity, ...]} under a storage key.
Entities keep insertion order inside a partition.

Every mutation:
1. builds the new partition,
2. writes the whole document to the key-value store,
3. only then swaps the in-memory cache (a failed write leaves it as it was),
4. publishes a CSV snapshot of the partition.
"""

from __future__ import annotations

import copy
import logging
from abc import abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from ..csvio.codec import CsvSchema, encode
from ..csvio.snapshots import NullSnapshotSink, SnapshotSink
from .datastore_mixin import DataStoreMixin
from .exceptions import StorageError
from .kvstore import KeyValueStore

logger = logging.getLogger(__name__)

E = TypeVar("E")


class PartitionedRepository(DataStoreMixin, Generic[E]):
    """
    Store-partitioned collection persisted under one key.

    Subclasses set storage_key, entity_name and snapshot_name, and provide
    schema and _from_dict(). Entities must expose a `key` property and a
    `to_dict()` method.
    """

    storage_key: str
    entity_name: str
    snapshot_name: str

    def __init__(self, kv: KeyValueStore, sink: SnapshotSink | None = None):
        self.kv = kv
        self.sink: SnapshotSink = sink or NullSnapshotSink()
        self._cache: dict[str, list[E]] | None = None

    @property
    @abstractmethod
    def schema(self) -> CsvSchema[E]:
        """CSV layout used for snapshots."""
        ...

    @abstractmethod
    def _from_dict(self, data: Mapping[str, Any]) -> E:
        """Rebuild an entity from its stored dictionary."""
        ...

    def _key(self, entity: E) -> str:
        return entity.key  # type: ignore[attr-defined]

    def _prepare(self, store_id: str, entity: E) -> E:
        """Hook run on every entity before it is stored."""
        return entity

    def _check_delete(self, store_id: str, key: str) -> None:
        """Hook run before a delete; raise to refuse it."""
        return None

    # Reads

    def _load(self) -> dict[str, list[E]]:
        if self._cache is None:
            raw = self.kv.get(self.storage_key, {}) or {}
            self._cache = {
                store_id: [self._from_dict(item) for item in items] for store_id, items in raw.items()
            }
        return self._cache

    def reload(self) -> None:
        """Drop the in-memory cache so the next read hits storage."""
        self._cache = None

    def partitions(self) -> list[str]:
        """Store ids that have a partition."""
        return list(self._load().keys())

    def list(self, store_id: str) -> list[E]:
        """All entities of a store, in insertion order."""
        return copy.deepcopy(self._load().get(store_id, []))

    def get(self, store_id: str, key: str) -> E | None:
        """Entity with the given key, or None."""
        for entity in self._load().get(store_id, []):
            if self._key(entity) == key:
                return copy.deepcopy(entity)
        return None

    def item_count(self) -> int | None:
        if not self.exists():
            return None
        return sum(len(items) for items in self._load().values())

    # Writes

    def _commit(self, store_id: str, entities: list[E]) -> None:
        updated = dict(self._load())
        updated[store_id] = entities
        raw = {sid: [entity.to_dict() for entity in items] for sid, items in updated.items()}  # type: ignore[attr-defined]

        self.kv.set(self.storage_key, raw)
        self._cache = updated
        self._emit_snapshot(store_id)

    def _emit_snapshot(self, store_id: str) -> None:
        filename = f"{store_id}/{self.snapshot_name}.csv"
        try:
            self.sink.emit(filename, encode(self._load().get(store_id, []), self.schema))
        except StorageError as e:
            logger.error("Snapshot %s not written: %s", filename, e)

    def upsert(self, store_id: str, entity: E) -> E:
        """
        Insert an entity, or replace the one with the same key in place.

        Returns:
            The stored entity (after any preparation, e.g. derived fields)
        """
        prepared = self._prepare(store_id, copy.deepcopy(entity))
        key = self._key(prepared)
        entities = list(self._load().get(store_id, []))

        for index, existing in enumerate(entities):
            if self._key(existing) == key:
                entities[index] = prepared
                action = "Updated"
                break
        else:
            entities.append(prepared)
            action = "Added"

        self._commit(store_id, entities)
        logger.info("%s %s %s in store %s", action, self.entity_name, key, store_id)
        return copy.deepcopy(prepared)

    def delete(self, store_id: str, key: str) -> bool:
        """
        Remove an entity.

        Returns:
            True if an entity was removed, False if the key was unknown
        """
        entities = self._load().get(store_id, [])
        remaining = [entity for entity in entities if self._key(entity) != key]
        if len(remaining) == len(entities):
            return False

        self._check_delete(store_id, key)
        self._commit(store_id, remaining)
        logger.info("Deleted %s %s from store %s", self.entity_name, key, store_id)
        return True

    def replace_partition(self, store_id: str, entities: Iterable[E]) -> None:
        """Replace a store's whole partition in one write."""
        prepared = [self._prepare(store_id, copy.deepcopy(entity)) for entity in entities]
        self._commit(store_id, prepared)
        logger.info("Replaced %s for store %s (%d records)", self.entity_name, store_id, len(prepared))

    def add_new(self, store_id: str, entities: Iterable[E]) -> list[E]:
        """
        Append entities whose keys are not yet in the partition, in one write.

        Only the new entities go through preparation; stored entities are
        written back exactly as they are. Entities with a key already present
        are skipped.

        Returns:
            The entities that were added, after preparation
        """
        stored = list(self._load().get(store_id, []))
        taken = {self._key(entity) for entity in stored}

        added: list[E] = []
        for entity in entities:
            prepared = self._prepare(store_id, copy.deepcopy(entity))
            key = self._key(prepared)
            if key in taken:
                continue
            taken.add(key)
            added.append(prepared)

        if added:
            self._commit(store_id, stored + added)
            logger.info("Added %d %s to store %s", len(added), self.entity_name, store_id)
        return copy.deepcopy(added)
