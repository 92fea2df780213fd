#!/usr/bin/env python3
"""
Tests for DataStore interface contracts across all repositories.

Every repository exposes the same metadata surface used by `cashbook status`.
"""

import pytest

from cashbook.core.kvstore import MemoryKeyValueStore
from cashbook.employees.repository import EmployeeRepository
from cashbook.salary.repository import AdvanceRepository, SalaryRepository
from cashbook.sales.repository import SalesRepository
from cashbook.stores.repository import StoreRepository

REPOSITORIES = [StoreRepository, EmployeeRepository, AdvanceRepository, SalaryRepository, SalesRepository]
IDS = [cls.__name__ for cls in REPOSITORIES]


@pytest.mark.parametrize("repository_class", REPOSITORIES, ids=IDS)
def test_empty_repository_reports_no_data(repository_class):
    repository = repository_class(MemoryKeyValueStore())

    assert repository.exists() is False
    assert repository.item_count() is None
    assert repository.last_modified() is None
    assert repository.size_bytes() is None
    assert repository.age_days() is None
    assert repository.summary_text() == f"No {repository.entity_name} saved yet"


@pytest.mark.parametrize("repository_class", REPOSITORIES, ids=IDS)
def test_repository_storage_keys_are_distinct(repository_class):
    keys = {cls.storage_key for cls in REPOSITORIES}
    assert len(keys) == len(REPOSITORIES)
    assert repository_class.storage_key in {
        "stores_data",
        "store_employees",
        "employee_salary_advances",
        "employee_salary_data",
        "store_sales_records",
    }
