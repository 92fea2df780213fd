#!/usr/bin/env python3
"""
Sales Record Repository

One till sheet per store per day. Saving a sheet for a date that already
has one replaces it. Derived figures are always recomputed on save, so a
stored record never carries stale totals.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..core.dates import FinancialDate
from ..core.kvstore import KeyValueStore
from ..core.repository import PartitionedRepository
from ..csvio.codec import CsvSchema
from ..csvio.schemas import SALES
from ..csvio.snapshots import SnapshotSink
from ..reconciliation.engine import derive_all, validate_record
from ..reconciliation.models import SalesRecord
from ..reconciliation.policy import ReconciliationSettings

logger = logging.getLogger(__name__)


class SalesRepository(PartitionedRepository[SalesRecord]):
    """Daily sales records per store, keyed by date."""

    storage_key = "store_sales_records"
    entity_name = "sales records"
    snapshot_name = "sales_records"

    def __init__(
        self,
        kv: KeyValueStore,
        sink: SnapshotSink | None = None,
        settings: ReconciliationSettings | None = None,
    ):
        super().__init__(kv, sink)
        self.settings = settings or ReconciliationSettings()

    @property
    def schema(self) -> CsvSchema[SalesRecord]:
        return SALES

    def _from_dict(self, data: Mapping[str, Any]) -> SalesRecord:
        return SalesRecord.from_dict(data)

    def _prepare(self, store_id: str, entity: SalesRecord) -> SalesRecord:
        entity.store_id = store_id
        derived = derive_all(entity, self.settings)
        validate_record(derived, self.settings)
        return derived

    def get_for_date(self, store_id: str, date: FinancialDate) -> SalesRecord | None:
        return self.get(store_id, date.to_iso_string())

    def latest(self, store_id: str) -> SalesRecord | None:
        """Most recent record by date."""
        return max(self.list(store_id), key=lambda r: r.date, default=None)

    def between(self, store_id: str, start: FinancialDate, end: FinancialDate) -> list[SalesRecord]:
        """Records with start <= date <= end, oldest first."""
        records = [r for r in self.list(store_id) if start <= r.date <= end]
        return sorted(records, key=lambda r: r.date)
