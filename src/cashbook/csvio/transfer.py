#!/usr/bin/env python3
"""
CSV Import and Export

Imports merge new records into a store partition and never overwrite
existing ones. Records are matched by:

- employees: name, case-insensitive
- sales records: date
- stores: id
- salaries and advances: id

Each import reads, decodes, merges and then persists in a single write.
Imports and exports of the same partition are serialized by a lock; a
failed import leaves the partition as it was.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from ..core.dates import FinancialDate, validate_month
from ..core.exceptions import ParseError, StorageError
from ..core.ids import new_record_id
from ..employees.models import Employee
from ..reconciliation.models import SalesRecord
from ..salary.calculator import build_salary, chain_balances, latest_before
from ..salary.models import AdvanceType, EmployeeSalary, SalaryAdvance
from ..stores.models import Store
from ..workspace import Workspace
from .codec import decode, detect_schema, encode
from .schemas import (
    ADVANCES,
    EMPLOYEE_TEMPLATE,
    EMPLOYEES,
    SALARIES,
    SALARY_LEDGER,
    SALES,
    SALES_TEMPLATE,
    STORES,
    LedgerRow,
    advance_ledger_row,
    salary_ledger_row,
)

logger = logging.getLogger(__name__)

STORES_PARTITION = "__stores__"


class PartitionLocks:
    """One lock per store partition, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, partition: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(partition, threading.Lock())

    @contextmanager
    def hold(self, partition: str) -> Iterator[None]:
        with self.lock_for(partition):
            yield


_locks = PartitionLocks()


@dataclass
class ImportResult:
    """Outcome of importing one CSV file into one collection."""

    entity: str
    imported: int = 0
    duplicates: int = 0
    errors: list[ParseError] = field(default_factory=list)

    def summary(self) -> str:
        text = f"Imported {self.imported} {self.entity}"
        if self.duplicates:
            text += f", skipped {self.duplicates} already present"
        if self.errors:
            text += f", {len(self.errors)} row(s) with errors"
        return text


@dataclass
class LedgerImportResult:
    """Outcome of importing a combined salary/advance file."""

    salaries: ImportResult
    advances: ImportResult
    # Rows whose employee could not be resolved, plus undecodable rows
    errors: list[ParseError] = field(default_factory=list)


def read_import_file(path: Path) -> str:
    """
    Read a CSV file for import.

    Raises:
        StorageError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Could not read {path}: {e}") from e


# Imports


def import_employees(workspace: Workspace, store_id: str, text: str) -> ImportResult:
    """
    Import employees from either the template layout (name,mobile,joiningDate)
    or the store layout (id,name,mobile,joiningDate,employeeNumber).
    """
    schema = detect_schema(text, [EMPLOYEE_TEMPLATE, EMPLOYEES])

    with _locks.hold(store_id):
        decoded = decode(text, schema)
        result = ImportResult("employees", errors=list(decoded.errors))

        existing = workspace.employees.list(store_id)
        taken_names = {e.name.strip().lower() for e in existing}
        taken_ids = {e.id for e in existing}
        taken_numbers = {e.employee_number for e in existing}
        next_number = workspace.employees.next_employee_number(store_id)

        added: list[Employee] = []
        for employee in decoded.entities:
            name_key = employee.name.strip().lower()
            if name_key in taken_names:
                result.duplicates += 1
                continue
            if schema is EMPLOYEE_TEMPLATE or employee.id in taken_ids:
                employee.id = new_record_id()
            if schema is EMPLOYEE_TEMPLATE or employee.employee_number in taken_numbers:
                while next_number in taken_numbers:
                    next_number += 1
                employee.employee_number = next_number
            taken_names.add(name_key)
            taken_ids.add(employee.id)
            taken_numbers.add(employee.employee_number)
            added.append(employee)

        workspace.employees.add_new(store_id, added)
        result.imported = len(added)

    logger.info("Employee import into %s: %s", store_id, result.summary())
    return result


def import_sales(workspace: Workspace, store_id: str, text: str) -> ImportResult:
    """Import sales records from the template or export layout; derived columns are recomputed."""
    schema = detect_schema(text, [SALES_TEMPLATE, SALES])

    with _locks.hold(store_id):
        decoded = decode(text, schema)
        result = ImportResult("sales records", errors=list(decoded.errors))

        existing = workspace.sales.list(store_id)
        taken = {record.key for record in existing}

        added: list[SalesRecord] = []
        for record in decoded.entities:
            if record.key in taken:
                result.duplicates += 1
                continue
            record.store_id = store_id
            taken.add(record.key)
            added.append(record)

        workspace.sales.add_new(store_id, added)
        result.imported = len(added)

    logger.info("Sales import into %s: %s", store_id, result.summary())
    return result


def import_stores(workspace: Workspace, text: str) -> ImportResult:
    """Import stores; ids already present are left untouched."""
    with _locks.hold(STORES_PARTITION):
        decoded = decode(text, STORES)
        result = ImportResult("stores", errors=list(decoded.errors))

        existing = workspace.stores.list()
        taken = {store.id for store in existing}

        added: list[Store] = []
        for store in decoded.entities:
            if store.id in taken:
                result.duplicates += 1
                continue
            taken.add(store.id)
            added.append(store)

        if added:
            workspace.stores.replace_all(existing + added)
        result.imported = len(added)

    logger.info("Store import: %s", result.summary())
    return result


def _unknown_employee(line_number: int, employee_id: str) -> ParseError:
    error = ParseError(line_number, f"no employee with id {employee_id!r} in this store")
    logger.warning("Skipping row: %s", error)
    return error


def import_advances(workspace: Workspace, store_id: str, text: str) -> ImportResult:
    """
    Import advances in the advances.csv layout.

    Rows are matched by id; rows naming an employee the store does not
    have are reported as errors. Existing salary sheets are not recomputed.
    """
    with _locks.hold(store_id):
        decoded = decode(text, ADVANCES)
        result = ImportResult("advances", errors=list(decoded.errors))

        employee_ids = {e.id for e in workspace.employees.list(store_id)}
        taken = {a.id for a in workspace.advances.list(store_id)}

        added: list[SalaryAdvance] = []
        for advance, line_number in zip(decoded.entities, decoded.line_numbers):
            if advance.employee_id not in employee_ids:
                result.errors.append(_unknown_employee(line_number, advance.employee_id))
                continue
            if advance.id in taken:
                result.duplicates += 1
                continue
            taken.add(advance.id)
            added.append(advance)

        workspace.advances.add_new(store_id, added)
        result.imported = len(added)

    logger.info("Advance import into %s: %s", store_id, result.summary())
    return result


def import_salaries(workspace: Workspace, store_id: str, text: str) -> ImportResult:
    """
    Import salary sheets in the salaries.csv layout.

    Rows are matched by id and stored with the figures as written, except
    balance_till_date, which is re-chained across the whole partition.
    """
    with _locks.hold(store_id):
        decoded = decode(text, SALARIES)
        result = ImportResult("salary records", errors=list(decoded.errors))

        employee_ids = {e.id for e in workspace.employees.list(store_id)}
        existing = workspace.salaries.list(store_id)
        taken = {s.id for s in existing}

        added: list[EmployeeSalary] = []
        for sheet, line_number in zip(decoded.entities, decoded.line_numbers):
            if sheet.employee_id not in employee_ids:
                result.errors.append(_unknown_employee(line_number, sheet.employee_id))
                continue
            if sheet.id in taken:
                result.duplicates += 1
                continue
            taken.add(sheet.id)
            added.append(sheet)

        if added:
            workspace.salaries.replace_partition(store_id, chain_balances(existing + added))
        result.imported = len(added)

    logger.info("Salary import into %s: %s", store_id, result.summary())
    return result


def _resolve_employee(row: LedgerRow, employees: list[Employee]) -> str | None:
    """Match a ledger row to an employee id, by id first and then by name."""
    if any(e.id == row.employee_id for e in employees):
        return row.employee_id
    wanted = row.employee_name.strip().lower()
    for employee in employees:
        if employee.name.strip().lower() == wanted:
            return employee.id
    return None


def import_salary_ledger(workspace: Workspace, store_id: str, text: str) -> LedgerImportResult:
    """
    Import the combined salary/advance file.

    Advances are merged first so imported salary sheets see them. Salary
    sheets are recomputed from their salary amount and the partition's
    balances are re-chained.
    """
    with _locks.hold(store_id):
        decoded = decode(text, SALARY_LEDGER)
        result = LedgerImportResult(ImportResult("salary records"), ImportResult("advances"), list(decoded.errors))
        employees = workspace.employees.list(store_id)

        existing_advances = workspace.advances.list(store_id)
        existing_salaries = workspace.salaries.list(store_id)
        advance_ids = {a.id for a in existing_advances}
        salary_ids = {s.id for s in existing_salaries}

        new_advances: list[SalaryAdvance] = []
        salary_rows: list[tuple[LedgerRow, str]] = []

        for row, line_number in zip(decoded.entities, decoded.line_numbers):
            employee_id = _resolve_employee(row, employees)
            if employee_id is None:
                error = ParseError(line_number, f"no employee matches id {row.employee_id!r} or name {row.employee_name!r}")
                logger.warning("Skipping ledger row: %s", error)
                result.errors.append(error)
                continue

            try:
                if row.kind == "advance":
                    advance = SalaryAdvance(
                        id=row.id or new_record_id(),
                        date=FinancialDate.from_string(row.date),
                        amount=row.amount,
                        employee_id=employee_id,
                        comments=row.comments,
                        type=AdvanceType.parse(row.advance_type),
                    )
                    if advance.id in advance_ids:
                        result.advances.duplicates += 1
                        continue
                    advance_ids.add(advance.id)
                    new_advances.append(advance)
                else:
                    validate_month(row.month)
                    salary_rows.append((row, employee_id))
            except ValueError as e:
                error = ParseError(line_number, str(e))
                logger.warning("Skipping ledger row: %s", error)
                result.errors.append(error)

        all_advances = existing_advances + new_advances
        new_salaries: list[EmployeeSalary] = []
        for row, employee_id in salary_rows:
            sheet = build_salary(
                row.month,
                employee_id,
                row.amount,
                all_advances,
                latest_before(existing_salaries, employee_id, row.month),
            )
            sheet.id = row.id or sheet.id
            if sheet.id in salary_ids:
                result.salaries.duplicates += 1
                continue
            salary_ids.add(sheet.id)
            new_salaries.append(sheet)

        workspace.advances.add_new(store_id, new_advances)
        if new_salaries:
            workspace.salaries.replace_partition(store_id, chain_balances(existing_salaries + new_salaries))

        result.advances.imported = len(new_advances)
        result.salaries.imported = len(new_salaries)

    logger.info(
        "Salary ledger import into %s: %s; %s",
        store_id,
        result.salaries.summary(),
        result.advances.summary(),
    )
    return result


# Exports


def export_filename(entity: str, day: date | None = None) -> str:
    """File name for an export, e.g. "employees_2024-04-01.csv"."""
    return f"{entity}_{(day or date.today()).isoformat()}.csv"


def _write_export(directory: Path, entity: str, content: str, day: date | None) -> Path:
    path = Path(directory) / export_filename(entity, day)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Could not write export {path}: {e}") from e
    logger.info("Exported %s to %s", entity, path)
    return path


def export_employees(workspace: Workspace, store_id: str, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(store_id):
        content = encode(workspace.employees.list(store_id), EMPLOYEES)
        return _write_export(directory, "employees", content, day)


def export_sales(workspace: Workspace, store_id: str, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(store_id):
        records = sorted(workspace.sales.list(store_id), key=lambda r: r.date)
        return _write_export(directory, "sales_records", encode(records, SALES), day)


def export_stores(workspace: Workspace, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(STORES_PARTITION):
        return _write_export(directory, "stores", encode(workspace.stores.list(), STORES), day)


def salary_ledger_text(workspace: Workspace, store_id: str) -> str:
    """Combined salary/advance CSV for a store: salary rows first, then advances."""
    names = {e.id: e.name for e in workspace.employees.list(store_id)}
    rows = [salary_ledger_row(s, names.get(s.employee_id, "Unknown")) for s in workspace.salaries.list(store_id)]
    rows += [advance_ledger_row(a, names.get(a.employee_id, "Unknown")) for a in workspace.advances.list(store_id)]
    return encode(rows, SALARY_LEDGER)


def export_salary_ledger(workspace: Workspace, store_id: str, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(store_id):
        return _write_export(directory, "salary_data", salary_ledger_text(workspace, store_id), day)


def export_salaries(workspace: Workspace, store_id: str, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(store_id):
        sheets = sorted(workspace.salaries.list(store_id), key=lambda s: (s.month, s.employee_id))
        return _write_export(directory, "salaries", encode(sheets, SALARIES), day)


def export_advances(workspace: Workspace, store_id: str, directory: Path, day: date | None = None) -> Path:
    with _locks.hold(store_id):
        advances = sorted(workspace.advances.list(store_id), key=lambda a: a.date)
        return _write_export(directory, "advances", encode(advances, ADVANCES), day)
