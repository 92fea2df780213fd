#!/usr/bin/env python3
"""Tests for storing monthly salary sheets."""

import pytest

from cashbook.core.kvstore import MemoryKeyValueStore
from cashbook.core.money import Money
from cashbook.salary.repository import AdvanceRepository, SalaryRepository
from tests.fixtures.records import sample_advance
from tests.fixtures.storage import RecordingSnapshotSink


class TestAdvanceRepository:
    """Test advance queries."""

    def test_for_employee_and_month(self):
        repo = AdvanceRepository(MemoryKeyValueStore())
        repo.upsert("s1", sample_advance("a1", "e1", "2024-04-05"))
        repo.upsert("s1", sample_advance("a2", "e2", "2024-04-06"))
        repo.upsert("s1", sample_advance("a3", "e1", "2024-05-01"))

        assert [a.id for a in repo.for_employee("s1", "e1")] == ["a1", "a3"]
        assert [a.id for a in repo.for_month("s1", "2024-04")] == ["a1", "a2"]


class TestSalaryRepository:
    """Test save_month and balance re-chaining."""

    def setup_method(self):
        self.sink = RecordingSnapshotSink()
        self.repo = SalaryRepository(MemoryKeyValueStore(), self.sink)

    def test_save_month_builds_a_sheet_per_employee(self):
        advances = [sample_advance("a1", "e1", "2024-04-05", 2000)]

        sheets = self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(9000)}, ["e1", "e2"], advances)

        assert [s.id for s in sheets] == ["2024-04-e1", "2024-04-e2"]
        assert sheets[0].balance_current == Money.from_rupees(-7000)
        assert sheets[1].salary == Money.zero()
        assert "s1/salaries.csv" in self.sink.snapshots

    def test_months_chain_in_order(self):
        self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(1000)}, ["e1"], [])
        self.repo.save_month("s1", "2024-05", {"e1": Money.from_rupees(2000)}, ["e1"], [])

        may = self.repo.get("s1", "2024-05-e1")
        assert may.balance_till_date == Money.from_rupees(-3000)

    def test_backfilled_month_rechains_later_months(self):
        self.repo.save_month("s1", "2024-05", {"e1": Money.from_rupees(2000)}, ["e1"], [])
        self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(1000)}, ["e1"], [])

        assert [s.month for s in self.repo.for_employee("s1", "e1")] == ["2024-04", "2024-05"]
        assert self.repo.get("s1", "2024-05-e1").balance_till_date == Money.from_rupees(-3000)

    def test_recomputing_a_month_replaces_it(self):
        self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(1000)}, ["e1"], [])
        self.repo.save_month("s1", "2024-05", {"e1": Money.from_rupees(2000)}, ["e1"], [])
        self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(500)}, ["e1"], [])

        assert len(self.repo.list("s1")) == 2
        assert [s.month for s in self.repo.list("s1")] == ["2024-04", "2024-05"]
        assert self.repo.get("s1", "2024-05-e1").balance_till_date == Money.from_rupees(-2500)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            self.repo.save_month("s1", "April", {}, ["e1"], [])

    def test_rechain_repairs_stale_balances(self):
        self.repo.save_month("s1", "2024-04", {"e1": Money.from_rupees(1000)}, ["e1"], [])
        self.repo.save_month("s1", "2024-05", {"e1": Money.from_rupees(2000)}, ["e1"], [])
        sheets = self.repo.list("s1")
        sheets[1].balance_till_date = Money.from_rupees(123)
        self.repo.replace_partition("s1", sheets)

        self.repo.rechain("s1")

        assert self.repo.get("s1", "2024-05-e1").balance_till_date == Money.from_rupees(-3000)
