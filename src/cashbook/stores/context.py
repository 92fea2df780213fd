#!/usr/bin/env python3
"""
Store Context

Tracks which store the user is working in. Every service call reads the
active store id at its start and scopes its reads and writes to that
store's partition.
"""

import logging
from typing import TYPE_CHECKING

from ..core.exceptions import NoActiveStoreError
from ..core.kvstore import KeyValueStore
from .models import Store

if TYPE_CHECKING:
    from .repository import StoreRepository

logger = logging.getLogger(__name__)

ACTIVE_STORE_KEY = "active_store_id"
DEFAULT_STORE_FLAG_KEY = "default_store_initialized"

DEFAULT_STORE_ID = "default-store"
DEFAULT_STORE_NAME = "Main Store"
DEFAULT_STORE_ADDRESS = "Default Address"


class StoreContext:
    """Active store pointer, persisted in the key-value store."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def get_active_store_id(self) -> str | None:
        return self.kv.get(ACTIVE_STORE_KEY)

    def set_active_store(self, store_id: str) -> None:
        self.kv.set(ACTIVE_STORE_KEY, store_id)
        logger.info("Active store set to %s", store_id)

    def clear(self) -> None:
        self.kv.delete(ACTIVE_STORE_KEY)
        logger.info("Active store cleared")

    def require_active_store_id(self) -> str:
        """
        Get the active store id.

        Raises:
            NoActiveStoreError: If no store is active
        """
        store_id = self.get_active_store_id()
        if not store_id:
            raise NoActiveStoreError("No active store; select one with 'cashbook store use <id>'")
        return store_id


def initialize_default_store(stores: "StoreRepository", context: StoreContext) -> Store | None:
    """
    Create and activate the default store on first run.

    Does nothing when any store exists or the bootstrap has already run
    once (so a deliberately emptied store list stays empty).

    Returns:
        The created store, or None if nothing was done
    """
    if stores.list() or context.kv.get(DEFAULT_STORE_FLAG_KEY, False):
        return None

    store = Store(id=DEFAULT_STORE_ID, name=DEFAULT_STORE_NAME, address=DEFAULT_STORE_ADDRESS)
    stores.upsert(store)
    context.set_active_store(store.id)
    context.kv.set(DEFAULT_STORE_FLAG_KEY, True)
    logger.info("Created default store %s", store.id)
    return store


def get_active_store(stores: "StoreRepository", context: StoreContext) -> Store | None:
    """The active store, or None if none is set or it no longer exists."""
    store_id = context.get_active_store_id()
    if not store_id:
        return None
    return stores.get(store_id)
