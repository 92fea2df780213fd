#!/usr/bin/env python3
"""
Store Repository

The store list is the one collection that is not partitioned: it is a
single global list under "stores_data", snapshotted to stores.csv.
"""

from __future__ import annotations

import copy
import logging

from ..core.datastore_mixin import DataStoreMixin
from ..core.exceptions import StorageError
from ..core.kvstore import KeyValueStore
from ..csvio.codec import encode
from ..csvio.schemas import STORES
from ..csvio.snapshots import NullSnapshotSink, SnapshotSink
from .context import StoreContext
from .models import Store

logger = logging.getLogger(__name__)


class StoreRepository(DataStoreMixin):
    """Global list of stores keyed by id."""

    storage_key = "stores_data"
    entity_name = "stores"
    snapshot_name = "stores.csv"

    def __init__(self, kv: KeyValueStore, sink: SnapshotSink | None = None):
        self.kv = kv
        self.sink: SnapshotSink = sink or NullSnapshotSink()
        self._cache: list[Store] | None = None

    def _load(self) -> list[Store]:
        if self._cache is None:
            self._cache = [Store.from_dict(item) for item in self.kv.get(self.storage_key, []) or []]
        return self._cache

    def _commit(self, stores: list[Store]) -> None:
        self.kv.set(self.storage_key, [store.to_dict() for store in stores])
        self._cache = stores
        try:
            self.sink.emit(self.snapshot_name, encode(stores, STORES))
        except StorageError as e:
            logger.error("Snapshot %s not written: %s", self.snapshot_name, e)

    def reload(self) -> None:
        self._cache = None

    def list(self) -> list[Store]:
        return copy.deepcopy(self._load())

    def get(self, store_id: str) -> Store | None:
        for store in self._load():
            if store.id == store_id:
                return copy.deepcopy(store)
        return None

    def item_count(self) -> int | None:
        if not self.exists():
            return None
        return len(self._load())

    def upsert(self, store: Store) -> Store:
        """Add a store, or replace the one with the same id in place."""
        stores = list(self._load())
        stored = copy.deepcopy(store)
        for index, existing in enumerate(stores):
            if existing.id == store.id:
                stores[index] = stored
                break
        else:
            stores.append(stored)

        self._commit(stores)
        logger.info("Saved store %s (%s)", store.id, store.name)
        return copy.deepcopy(stored)

    def delete(self, store_id: str) -> bool:
        """
        Remove a store. If it was the active store the active pointer is
        cleared. Partition data of the store is left in place.

        Returns:
            True if a store was removed
        """
        stores = self._load()
        remaining = [store for store in stores if store.id != store_id]
        if len(remaining) == len(stores):
            return False

        self._commit(remaining)
        context = StoreContext(self.kv)
        if context.get_active_store_id() == store_id:
            context.clear()
        logger.info("Deleted store %s", store_id)
        return True

    def replace_all(self, stores: list[Store]) -> None:
        """Replace the whole store list in one write."""
        self._commit(copy.deepcopy(stores))
        logger.info("Replaced store list (%d stores)", len(stores))
