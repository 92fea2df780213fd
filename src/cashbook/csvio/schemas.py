#!/usr/bin/env python3
"""
Entity CSV Layouts

Fixed column layouts for every file the cashbook reads or writes. Money
cells are plain decimal rupees ("5000", "12.5"); dates are YYYY-MM-DD.

Derived sales figures are written on export but never read back: an
imported sales row is re-derived by the sales repository.
"""

from dataclasses import dataclass

from ..core.ids import new_record_id
from ..core.money import Money
from ..employees.models import Employee
from ..reconciliation.models import (
    ADVANCE_SLOTS,
    NOTE_VALUES,
    Denominations,
    EmployeeAdvances,
    OtherExpenses,
    SalesRecord,
)
from ..salary.models import AdvanceType, EmployeeSalary, SalaryAdvance
from ..stores.models import Store, validate_store_id
from .codec import CsvSchema, bool_cell, money_cell, parse_bool, parse_count, parse_date, parse_money

# Stores


def _store_row(store: Store) -> list[str]:
    return [
        store.id,
        store.name,
        store.address,
        store.phone or "",
        store.email or "",
        bool_cell(store.is_active),
        store.created_at,
    ]


def _store_from_row(cells: list[str]) -> Store:
    store_id, name, address, phone, email, is_active, created_at = (cell.strip() for cell in cells)
    if not store_id or not name:
        raise ValueError("store id and name are required")
    validate_store_id(store_id)
    store = Store(id=store_id, name=name, address=address, phone=phone or None, email=email or None)
    store.is_active = parse_bool(is_active) if is_active else True
    if created_at:
        store.created_at = created_at
    return store


STORES: CsvSchema[Store] = CsvSchema(
    name="stores",
    headers=("id", "name", "address", "phone", "email", "isActive", "createdAt"),
    to_row=_store_row,
    from_row=_store_from_row,
)


# Employees


def _employee_row(employee: Employee) -> list[str]:
    return [
        employee.id,
        employee.name,
        employee.mobile,
        employee.joining_date.to_iso_string(),
        str(employee.employee_number),
    ]


def _employee_from_row(cells: list[str]) -> Employee:
    employee_id, name, mobile, joining_date, employee_number = (cell.strip() for cell in cells)
    if not name:
        raise ValueError("employee name is required")
    return Employee(
        id=employee_id or new_record_id(),
        name=name,
        mobile=mobile,
        joining_date=parse_date(joining_date, "joiningDate"),
        employee_number=parse_count(employee_number, "employeeNumber") or 1,
    )


def _template_employee_from_row(cells: list[str]) -> Employee:
    name, mobile, joining_date = (cell.strip() for cell in cells)
    if not name:
        raise ValueError("employee name is required")
    return Employee(
        id=new_record_id(),
        name=name,
        mobile=mobile,
        joining_date=parse_date(joining_date, "joiningDate"),
    )


EMPLOYEES: CsvSchema[Employee] = CsvSchema(
    name="employees",
    headers=("id", "name", "mobile", "joiningDate", "employeeNumber"),
    to_row=_employee_row,
    from_row=_employee_from_row,
)

# Simple layout handed out as a template; ids and numbers are assigned on import
EMPLOYEE_TEMPLATE: CsvSchema[Employee] = CsvSchema(
    name="employee template",
    headers=("name", "mobile", "joiningDate"),
    to_row=lambda employee: [employee.name, employee.mobile, employee.joining_date.to_iso_string()],
    from_row=_template_employee_from_row,
)


# Sales records

SALES_HEADERS: tuple[str, ...] = (
    "Date",
    "Store ID",
    "Opening Cash",
    "Total POS Sales",
    "Paytm Sales",
    *(f"Employee{n} Advance" for n in range(1, len(ADVANCE_SLOTS) + 1)),
    "Cleaning Expenses",
    "Other Expense 1 Name",
    "Other Expense 1 Amount",
    "Other Expense 2 Name",
    "Other Expense 2 Amount",
    *(f"Rs.{note} Count" for note in NOTE_VALUES),
    "Cash Withdrawn",
    "Total Expenses",
    "Total from Denominations",
    "Closing Cash",
    "Total Cash Sales",
    "Total Cash",
    "Cash Difference",
)

SALES_TEMPLATE_HEADERS: tuple[str, ...] = (
    "date",
    "openingCash",
    "totalSalesPOS",
    "paytmSales",
    *(f"employeeAdvances.{slot}" for slot in ADVANCE_SLOTS),
    "cleaningExpenses",
    "otherExpenses.name1",
    "otherExpenses.amount1",
    "otherExpenses.name2",
    "otherExpenses.amount2",
    *(f"denominations.d{note}" for note in NOTE_VALUES),
    "cashWithdrawn",
)


def _sales_input_cells(record: SalesRecord) -> list[str]:
    """Input cells shared by both sales layouts, after date (and store id)."""
    return [
        money_cell(record.opening_cash),
        money_cell(record.total_sales_pos),
        money_cell(record.paytm_sales),
        *(money_cell(amount) for amount in record.employee_advances.amounts()),
        money_cell(record.cleaning_expenses),
        record.other_expenses.name1,
        money_cell(record.other_expenses.amount1),
        record.other_expenses.name2,
        money_cell(record.other_expenses.amount2),
        *(str(count) for count in record.denominations.counts().values()),
        money_cell(record.cash_withdrawn),
    ]


def _sales_inputs_from_cells(
    date: str, store_id: str, cells: list[str], headers: tuple[str, ...], date_column: str
) -> SalesRecord:
    """
    Build a record from the input cells that follow the date/store columns.

    `headers` are the matching column names, used in error messages.
    """
    it = iter(zip(cells, headers))

    def money() -> Money:
        cell, column = next(it)
        return parse_money(cell, column)

    def text() -> str:
        cell, _ = next(it)
        return cell.strip()

    opening_cash = money()
    total_sales_pos = money()
    paytm_sales = money()
    advances = EmployeeAdvances(**{slot: money() for slot in ADVANCE_SLOTS})
    cleaning_expenses = money()
    other_expenses = OtherExpenses(name1=text(), amount1=money(), name2=text(), amount2=money())
    counts = {}
    for note in NOTE_VALUES:
        cell, column = next(it)
        counts[note] = parse_count(cell, column)
    cash_withdrawn = money()

    return SalesRecord(
        date=parse_date(date, date_column),
        store_id=store_id.strip(),
        opening_cash=opening_cash,
        total_sales_pos=total_sales_pos,
        paytm_sales=paytm_sales,
        employee_advances=advances,
        cleaning_expenses=cleaning_expenses,
        other_expenses=other_expenses,
        denominations=Denominations.from_mapping(counts),
        cash_withdrawn=cash_withdrawn,
    )


def _sales_row(record: SalesRecord) -> list[str]:
    return [
        record.date.to_iso_string(),
        record.store_id,
        *_sales_input_cells(record),
        *(money_cell(value) for value in record.derived_values().values()),
    ]


def _sales_from_row(cells: list[str]) -> SalesRecord:
    return _sales_inputs_from_cells(cells[0], cells[1], cells[2:22], SALES_HEADERS[2:22], "Date")


def _sales_template_row(record: SalesRecord) -> list[str]:
    return [record.date.to_iso_string(), *_sales_input_cells(record)]


def _sales_template_from_row(cells: list[str]) -> SalesRecord:
    return _sales_inputs_from_cells(cells[0], "", cells[1:21], SALES_TEMPLATE_HEADERS[1:21], "date")


SALES: CsvSchema[SalesRecord] = CsvSchema(
    name="sales",
    headers=SALES_HEADERS,
    to_row=_sales_row,
    from_row=_sales_from_row,
)

SALES_TEMPLATE: CsvSchema[SalesRecord] = CsvSchema(
    name="sales template",
    headers=SALES_TEMPLATE_HEADERS,
    to_row=_sales_template_row,
    from_row=_sales_template_from_row,
)


# Salaries and advances

_SALARY_MONEY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("salary", "salary"),
    ("totalSales", "total_sales"),
    ("monthlyBankTransfers", "monthly_bank_transfers"),
    ("monthlyCashWithdrawn", "monthly_cash_withdrawn"),
    ("totalSalaryAdvance", "total_salary_advance"),
    ("balanceCurrent", "balance_current"),
    ("balanceTillDate", "balance_till_date"),
)


def _salary_row(salary: EmployeeSalary) -> list[str]:
    return [
        salary.id,
        salary.month,
        salary.employee_id,
        *(money_cell(getattr(salary, attr)) for _, attr in _SALARY_MONEY_COLUMNS),
    ]


def _salary_from_row(cells: list[str]) -> EmployeeSalary:
    salary_id, month, employee_id = (cell.strip() for cell in cells[:3])
    month = parse_date(f"{month}-01", "month").month_key()
    return EmployeeSalary(
        id=salary_id or EmployeeSalary.make_id(month, employee_id),
        month=month,
        employee_id=employee_id,
        **{attr: parse_money(cell, column) for cell, (column, attr) in zip(cells[3:], _SALARY_MONEY_COLUMNS)},
    )


SALARIES: CsvSchema[EmployeeSalary] = CsvSchema(
    name="salaries",
    headers=("id", "month", "employeeId", *(column for column, _ in _SALARY_MONEY_COLUMNS)),
    to_row=_salary_row,
    from_row=_salary_from_row,
)


def _advance_row(advance: SalaryAdvance) -> list[str]:
    return [
        advance.id,
        advance.date.to_iso_string(),
        money_cell(advance.amount),
        advance.employee_id,
        advance.comments,
        advance.type.value,
    ]


def _advance_from_row(cells: list[str]) -> SalaryAdvance:
    advance_id, date, amount, employee_id, comments, advance_type = cells
    return SalaryAdvance(
        id=advance_id.strip() or new_record_id(),
        date=parse_date(date, "date"),
        amount=parse_money(amount, "amount"),
        employee_id=employee_id.strip(),
        comments=comments.strip(),
        type=AdvanceType.parse(advance_type),
    )


ADVANCES: CsvSchema[SalaryAdvance] = CsvSchema(
    name="advances",
    headers=("id", "date", "amount", "employeeId", "comments", "type"),
    to_row=_advance_row,
    from_row=_advance_from_row,
)


@dataclass
class LedgerRow:
    """
    One row of the combined salary/advance file.

    kind is "salary" or "advance". Employee resolution happens on import,
    so the row keeps both the id and the name as written.
    """

    kind: str
    id: str
    date: str
    employee_id: str
    employee_name: str
    month: str
    amount: Money
    comments: str = ""
    advance_type: str = ""


def _ledger_from_row(cells: list[str]) -> LedgerRow:
    kind, row_id, date, employee_id, employee_name, month, amount, comments, advance_type = (
        cell.strip() for cell in cells
    )
    kind = kind.lower()
    if kind not in ("salary", "advance"):
        raise ValueError(f"type: expected 'salary' or 'advance', got {kind!r}")
    return LedgerRow(
        kind=kind,
        id=row_id,
        date=date,
        employee_id=employee_id,
        employee_name=employee_name,
        month=month,
        amount=parse_money(amount, "amount"),
        comments=comments,
        advance_type=advance_type,
    )


def _ledger_row(row: LedgerRow) -> list[str]:
    return [
        row.kind,
        row.id,
        row.date,
        row.employee_id,
        row.employee_name,
        row.month,
        money_cell(row.amount),
        row.comments,
        row.advance_type,
    ]


SALARY_LEDGER: CsvSchema[LedgerRow] = CsvSchema(
    name="salary ledger",
    headers=("type", "id", "date", "employeeId", "employeeName", "month", "amount", "comments", "type"),
    to_row=_ledger_row,
    from_row=_ledger_from_row,
)


def salary_ledger_row(salary: EmployeeSalary, employee_name: str) -> LedgerRow:
    return LedgerRow(
        kind="salary",
        id=salary.id,
        date=f"{salary.month}-01",
        employee_id=salary.employee_id,
        employee_name=employee_name,
        month=salary.month,
        amount=salary.salary,
    )


def advance_ledger_row(advance: SalaryAdvance, employee_name: str) -> LedgerRow:
    return LedgerRow(
        kind="advance",
        id=advance.id,
        date=advance.date.to_iso_string(),
        employee_id=advance.employee_id,
        employee_name=employee_name,
        month=advance.month,
        amount=advance.amount,
        comments=advance.comments,
        advance_type=advance.type.value,
    )
