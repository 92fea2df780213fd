#!/usr/bin/env python3
"""
Reconciliation Engine

Pure calculations that turn a day's raw till inputs into the audited
figures: expenses, expected cash, counted cash and the difference between
them. Every function is total: missing amounts count as ₹0.

Sign convention: cash_difference = expected cash - counted cash, so a
positive difference means less cash was found than expected.
"""

from dataclasses import replace
from enum import Enum

from ..core.money import Money, money_sum
from .denominations import total_from_denominations
from .models import EmployeeAdvances, OtherExpenses, SalesRecord
from .policy import CASH_OFFSET, ReconciliationSettings

# Upper bound of a tolerable shortfall (inclusive)
WARNING_LIMIT = Money.from_rupees(50)


class DifferenceStatus(Enum):
    """Presentation class of a cash difference."""

    SUCCESS = "success"  # <= 0
    WARNING = "warning"  # 0 < d <= 50
    ERROR = "error"  # > 50


def _money(value: Money | None) -> Money:
    return value if value is not None else Money.zero()


def total_employee_advances(advances: EmployeeAdvances | None) -> Money:
    """Sum of the four employee advance slots."""
    if advances is None:
        return Money.zero()
    return money_sum(_money(amount) for amount in advances.amounts())


def total_other_expenses(other: OtherExpenses | None) -> Money:
    """amount1 + amount2."""
    if other is None:
        return Money.zero()
    return _money(other.amount1) + _money(other.amount2)


def total_expenses(record: SalesRecord) -> Money:
    """Employee advances + cleaning + other expenses."""
    return (
        total_employee_advances(record.employee_advances)
        + _money(record.cleaning_expenses)
        + total_other_expenses(record.other_expenses)
    )


def total_cash_sales(total_sales_pos: Money | None, paytm_sales: Money | None) -> Money:
    """POS sales minus the electronically paid portion."""
    return _money(total_sales_pos) - _money(paytm_sales)


def total_cash(
    opening_cash: Money | None,
    cash_sales: Money,
    expenses: Money,
    offset: Money = CASH_OFFSET,
) -> Money:
    """Expected cash: opening + cash sales - expenses + fixed offset."""
    return _money(opening_cash) + cash_sales - expenses + offset


def closing_cash(denominations_total: Money, cash_withdrawn: Money | None) -> Money:
    """Cash left in the till after the withdrawal."""
    return denominations_total - _money(cash_withdrawn)


def cash_difference(expected_cash: Money, denominations_total: Money) -> Money:
    """Expected cash minus counted cash."""
    return expected_cash - denominations_total


def difference_status(difference: Money) -> DifferenceStatus:
    """Classify a cash difference for display."""
    if difference <= Money.zero():
        return DifferenceStatus.SUCCESS
    if difference <= WARNING_LIMIT:
        return DifferenceStatus.WARNING
    return DifferenceStatus.ERROR


def derive_all(record: SalesRecord, settings: ReconciliationSettings | None = None) -> SalesRecord:
    """
    Recompute every derived field of a record.

    Returns a new record; the input is not modified. Applying derive_all to
    its own output gives the same figures unless the presentation policy
    rewrites the difference.

    Args:
        record: Till sheet with input fields filled in
        settings: Offset and policies (defaults: ₹50 offset, passthrough)

    Returns:
        Record with total_expenses, total_from_denominations, closing_cash,
        total_cash_sales, total_cash and cash_difference set
    """
    settings = settings or ReconciliationSettings()

    expenses = total_expenses(record)
    counted = total_from_denominations(record.denominations)
    cash_sales = total_cash_sales(record.total_sales_pos, record.paytm_sales)
    expected = total_cash(record.opening_cash, cash_sales, expenses, settings.cash_offset)
    difference = cash_difference(expected, counted)

    return replace(
        record,
        total_expenses=expenses,
        total_from_denominations=counted,
        closing_cash=closing_cash(counted, record.cash_withdrawn),
        total_cash_sales=cash_sales,
        total_cash=expected,
        cash_difference=settings.presentation.present(difference),
    )


def validate_record(record: SalesRecord, settings: ReconciliationSettings | None = None) -> None:
    """
    Run the validation policy against a derived record.

    Raises:
        ValidationError: If the active policy refuses the record
    """
    settings = settings or ReconciliationSettings()
    settings.validation.validate_cash_withdrawn(record.total_from_denominations, record.cash_withdrawn)
    settings.validation.validate_cash_difference(record.cash_difference)
