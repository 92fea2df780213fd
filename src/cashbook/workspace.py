#!/usr/bin/env python3
"""
Workspace

Wires together storage, snapshot sink, active-store context and the
repositories for one data directory. The CLI builds one per invocation;
tests build one over an in-memory store.
"""

import logging
import random
from dataclasses import dataclass

from .core.config import Config
from .core.kvstore import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .csvio.snapshots import DirectorySnapshotSink, NullSnapshotSink, SnapshotSink
from .employees.repository import EmployeeRepository
from .reconciliation.policy import ReconciliationSettings
from .salary.repository import AdvanceRepository, SalaryRepository
from .sales.repository import SalesRepository
from .stores.context import StoreContext, get_active_store, initialize_default_store
from .stores.models import Store
from .stores.repository import StoreRepository

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """All repositories sharing one key-value store and snapshot sink."""

    kv: KeyValueStore
    sink: SnapshotSink
    settings: ReconciliationSettings
    context: StoreContext
    stores: StoreRepository
    employees: EmployeeRepository
    advances: AdvanceRepository
    salaries: SalaryRepository
    sales: SalesRepository

    @classmethod
    def create(
        cls,
        kv: KeyValueStore,
        sink: SnapshotSink | None = None,
        settings: ReconciliationSettings | None = None,
    ) -> "Workspace":
        sink = sink or NullSnapshotSink()
        settings = settings or ReconciliationSettings()
        advances = AdvanceRepository(kv, sink)
        salaries = SalaryRepository(kv, sink)
        return cls(
            kv=kv,
            sink=sink,
            settings=settings,
            context=StoreContext(kv),
            stores=StoreRepository(kv, sink),
            employees=EmployeeRepository(kv, sink, advances, salaries),
            advances=advances,
            salaries=salaries,
            sales=SalesRepository(kv, sink, settings),
        )

    @classmethod
    def from_config(cls, config: Config, rng: random.Random | None = None) -> "Workspace":
        """Workspace backed by JSON files under the configured storage directory."""
        sink: SnapshotSink
        if config.storage.snapshots_enabled:
            sink = DirectorySnapshotSink(config.storage.export_dir)
        else:
            sink = NullSnapshotSink()
        logger.debug("Opening workspace at %s", config.storage.storage_dir)
        return cls.create(
            JsonFileKeyValueStore(config.storage.storage_dir),
            sink,
            ReconciliationSettings.from_config(config.reconciliation, rng),
        )

    @classmethod
    def in_memory(cls, sink: SnapshotSink | None = None, settings: ReconciliationSettings | None = None) -> "Workspace":
        return cls.create(MemoryKeyValueStore(), sink, settings)

    def bootstrap(self) -> Store | None:
        """Create the default store on first use."""
        return initialize_default_store(self.stores, self.context)

    def active_store(self) -> Store | None:
        return get_active_store(self.stores, self.context)

    def active_store_id(self) -> str:
        """
        Id of the active store.

        Raises:
            NoActiveStoreError: If no store is active
        """
        return self.context.require_active_store_id()

    def repositories(self) -> list:
        """Every repository, for status reporting."""
        return [self.stores, self.employees, self.advances, self.salaries, self.sales]
