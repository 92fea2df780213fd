#!/usr/bin/env python3
"""Tests for employee-specific repository rules."""

import pytest

from cashbook.core.exceptions import ReferentialIntegrityError
from cashbook.core.kvstore import MemoryKeyValueStore
from cashbook.core.money import Money
from cashbook.employees.repository import EmployeeRepository
from cashbook.salary.repository import AdvanceRepository, SalaryRepository
from tests.fixtures.records import sample_advance, sample_employee


class TestEmployeeRepository:
    """Test lookups and referential integrity on delete."""

    def setup_method(self):
        kv = MemoryKeyValueStore()
        self.advances = AdvanceRepository(kv)
        self.salaries = SalaryRepository(kv)
        self.employees = EmployeeRepository(kv, advances=self.advances, salaries=self.salaries)
        self.employees.upsert("s1", sample_employee("e1", "Asha Verma", 1))
        self.employees.upsert("s1", sample_employee("e2", "Ravi Kumar", 4))

    def test_find_by_name_ignores_case_and_spaces(self):
        assert self.employees.find_by_name("s1", "  asha VERMA ").id == "e1"
        assert self.employees.find_by_name("s1", "Meena") is None
        assert self.employees.find_by_name("s2", "Asha Verma") is None

    def test_next_employee_number(self):
        assert self.employees.next_employee_number("s1") == 5
        assert self.employees.next_employee_number("empty") == 1

    def test_delete_refused_while_advances_exist(self):
        self.advances.upsert("s1", sample_advance("a1", "e1"))
        self.advances.upsert("s1", sample_advance("a2", "e1"))

        with pytest.raises(ReferentialIntegrityError) as excinfo:
            self.employees.delete("s1", "e1")

        assert excinfo.value.references == {"advances": 2}
        assert "2 advances" in str(excinfo.value)
        assert self.employees.get("s1", "e1") is not None

    def test_delete_refused_while_salary_sheets_exist(self):
        self.salaries.save_month("s1", "2024-04", {"e2": Money.from_rupees(9000)}, ["e2"], [])

        with pytest.raises(ReferentialIntegrityError) as excinfo:
            self.employees.delete("s1", "e2")

        assert excinfo.value.references == {"salary records": 1}
        assert [e.id for e in self.employees.list("s1")] == ["e1", "e2"]

    def test_references_in_other_stores_do_not_block(self):
        self.advances.upsert("s2", sample_advance("a1", "e1"))

        assert self.employees.delete("s1", "e1") is True

    def test_unknown_employee_delete(self):
        assert self.employees.delete("s1", "nobody") is False
