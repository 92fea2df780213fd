#!/usr/bin/env python3
"""Salary and advance repositories."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..core.dates import validate_month
from ..core.money import Money
from ..core.repository import PartitionedRepository
from ..csvio.codec import CsvSchema
from ..csvio.schemas import ADVANCES, SALARIES
from .calculator import build_salary, chain_balances, latest_before
from .models import EmployeeSalary, SalaryAdvance

logger = logging.getLogger(__name__)


class AdvanceRepository(PartitionedRepository[SalaryAdvance]):
    """Advances and bank transfers paid to employees, per store."""

    storage_key = "employee_salary_advances"
    entity_name = "advances"
    snapshot_name = "advances"

    @property
    def schema(self) -> CsvSchema[SalaryAdvance]:
        return ADVANCES

    def _from_dict(self, data: Mapping[str, Any]) -> SalaryAdvance:
        return SalaryAdvance.from_dict(data)

    def for_employee(self, store_id: str, employee_id: str) -> list[SalaryAdvance]:
        return [a for a in self.list(store_id) if a.employee_id == employee_id]

    def for_month(self, store_id: str, month: str) -> list[SalaryAdvance]:
        return [a for a in self.list(store_id) if a.month == month]


class SalaryRepository(PartitionedRepository[EmployeeSalary]):
    """Monthly salary sheets, per store."""

    storage_key = "employee_salary_data"
    entity_name = "salaries"
    snapshot_name = "salaries"

    @property
    def schema(self) -> CsvSchema[EmployeeSalary]:
        return SALARIES

    def _from_dict(self, data: Mapping[str, Any]) -> EmployeeSalary:
        return EmployeeSalary.from_dict(data)

    def for_employee(self, store_id: str, employee_id: str) -> list[EmployeeSalary]:
        return sorted(
            (s for s in self.list(store_id) if s.employee_id == employee_id),
            key=lambda s: s.month,
        )

    def for_month(self, store_id: str, month: str) -> list[EmployeeSalary]:
        return [s for s in self.list(store_id) if s.month == month]

    def save_month(
        self,
        store_id: str,
        month: str,
        salaries_by_employee: Mapping[str, Money],
        employee_ids: Iterable[str],
        advances: Iterable[SalaryAdvance],
    ) -> list[EmployeeSalary]:
        """
        Compute and store a month's sheets for the given employees.

        Employees missing from salaries_by_employee get a salary of ₹0.
        Existing sheets for the month are replaced in place, and every
        balance_till_date in the partition is re-chained in one write.

        Returns:
            The month's sheets, in employee order
        """
        month = validate_month(month)
        advances = list(advances)
        existing = self.list(store_id)

        sheets = [
            build_salary(
                month,
                employee_id,
                salaries_by_employee.get(employee_id, Money.zero()),
                advances,
                latest_before(existing, employee_id, month),
            )
            for employee_id in employee_ids
        ]

        by_id = {sheet.id: sheet for sheet in sheets}
        merged = [by_id.pop(s.id, s) for s in existing]
        merged.extend(by_id.values())

        self.replace_partition(store_id, chain_balances(merged))
        logger.info("Saved %d salary sheet(s) for %s in store %s", len(sheets), month, store_id)

        saved = {s.id: s for s in self.list(store_id)}
        return [saved[sheet.id] for sheet in sheets]

    def rechain(self, store_id: str) -> None:
        """Re-derive balance_till_date across the partition."""
        self.replace_partition(store_id, chain_balances(self.list(store_id)))
