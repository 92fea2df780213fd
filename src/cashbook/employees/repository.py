#!/usr/bin/env python3
"""Employee repository."""

import logging
from collections.abc import Mapping
from typing import Any

from ..core.exceptions import ReferentialIntegrityError
from ..core.kvstore import KeyValueStore
from ..core.repository import PartitionedRepository
from ..csvio.codec import CsvSchema
from ..csvio.schemas import EMPLOYEES
from ..csvio.snapshots import SnapshotSink
from ..salary.repository import AdvanceRepository, SalaryRepository
from .models import Employee

logger = logging.getLogger(__name__)


class EmployeeRepository(PartitionedRepository[Employee]):
    """
    Employees per store.

    An employee referenced by any advance or salary sheet in the same store
    cannot be deleted.
    """

    storage_key = "store_employees"
    entity_name = "employees"
    snapshot_name = "employees"

    def __init__(
        self,
        kv: KeyValueStore,
        sink: SnapshotSink | None = None,
        advances: AdvanceRepository | None = None,
        salaries: SalaryRepository | None = None,
    ):
        super().__init__(kv, sink)
        self.advances = advances or AdvanceRepository(kv)
        self.salaries = salaries or SalaryRepository(kv)

    @property
    def schema(self) -> CsvSchema[Employee]:
        return EMPLOYEES

    def _from_dict(self, data: Mapping[str, Any]) -> Employee:
        return Employee.from_dict(data)

    def _check_delete(self, store_id: str, key: str) -> None:
        references = {
            "advances": len(self.advances.for_employee(store_id, key)),
            "salary records": len(self.salaries.for_employee(store_id, key)),
        }
        references = {kind: count for kind, count in references.items() if count}
        if references:
            logger.warning("Refusing to delete employee %s in store %s: %s", key, store_id, references)
            raise ReferentialIntegrityError("employee", key, references)

    def find_by_name(self, store_id: str, name: str) -> Employee | None:
        """Case-insensitive lookup by name."""
        wanted = name.strip().lower()
        for employee in self.list(store_id):
            if employee.name.strip().lower() == wanted:
                return employee
        return None

    def next_employee_number(self, store_id: str) -> int:
        return max((e.employee_number for e in self.list(store_id)), default=0) + 1
