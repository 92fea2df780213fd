#!/usr/bin/env python3
"""
Salary Calculator

Builds monthly salary sheets from the salary agreed for the month and the
advances paid during it, and carries balances from month to month.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, replace

from ..core.currency import round_half_up_rupees
from ..core.money import Money, money_sum
from .models import AdvanceType, EmployeeSalary, SalaryAdvance

# Salary is 45% of the sales an employee is credited with
SALES_SHARE_PERCENT = 45


def month_advances(advances: Iterable[SalaryAdvance], employee_id: str, month: str) -> list[SalaryAdvance]:
    """Advances paid to one employee in one YYYY-MM month."""
    return [a for a in advances if a.employee_id == employee_id and a.month == month]


def sales_for_salary(salary: Money) -> Money:
    """Sales figure implied by a salary, rounded to whole rupees."""
    return Money.from_rupees(round_half_up_rupees(salary.to_paise(), SALES_SHARE_PERCENT))


def build_salary(
    month: str,
    employee_id: str,
    salary: Money,
    advances: Iterable[SalaryAdvance],
    previous: EmployeeSalary | None = None,
) -> EmployeeSalary:
    """
    Compute one employee's salary sheet for a month.

    Args:
        month: YYYY-MM month
        employee_id: Employee the sheet is for
        salary: Salary agreed for the month
        advances: Advances to consider (filtered to the employee and month here)
        previous: Latest earlier sheet of the same employee, if any

    Returns:
        EmployeeSalary with id "{month}-{employee_id}"
    """
    paid = month_advances(advances, employee_id, month)
    bank = money_sum(a.amount for a in paid if a.type is AdvanceType.BANK)
    cash = money_sum(a.amount for a in paid if a.type is AdvanceType.CASH)
    total_advance = bank + cash
    balance_current = total_advance - salary
    carried = previous.balance_till_date if previous is not None else Money.zero()

    return EmployeeSalary(
        id=EmployeeSalary.make_id(month, employee_id),
        month=month,
        employee_id=employee_id,
        salary=salary,
        total_sales=sales_for_salary(salary),
        monthly_bank_transfers=bank,
        monthly_cash_withdrawn=cash,
        total_salary_advance=total_advance,
        balance_current=balance_current,
        balance_till_date=carried + balance_current,
    )


def latest_before(salaries: Iterable[EmployeeSalary], employee_id: str, month: str) -> EmployeeSalary | None:
    """The employee's latest sheet for a month strictly before `month`."""
    earlier = [s for s in salaries if s.employee_id == employee_id and s.month < month]
    return max(earlier, key=lambda s: s.month, default=None)


def chain_balances(salaries: Iterable[EmployeeSalary]) -> list[EmployeeSalary]:
    """
    Recompute balance_till_date for every sheet.

    Each employee's sheets are walked in month order, adding balance_current
    to the running total. The returned list keeps the input order.
    """
    salaries = list(salaries)
    running: dict[str, Money] = defaultdict(Money.zero)
    chained: dict[int, EmployeeSalary] = {}

    for index in sorted(range(len(salaries)), key=lambda i: (salaries[i].employee_id, salaries[i].month)):
        sheet = salaries[index]
        running[sheet.employee_id] = running[sheet.employee_id] + sheet.balance_current
        chained[index] = replace(sheet, balance_till_date=running[sheet.employee_id])

    return [chained[index] for index in range(len(salaries))]


@dataclass
class FinancialSummary:
    """Totals for one employee across their salary sheets."""

    total_salary: Money
    total_bank: Money
    total_cash: Money

    @property
    def net_balance(self) -> Money:
        """Advances paid minus salary owed (positive means overpaid)."""
        return self.total_bank + self.total_cash - self.total_salary


def employee_financial_summary(
    salaries: Iterable[EmployeeSalary], employee_id: str, month: str | None = None
) -> FinancialSummary:
    """Sum an employee's sheets, optionally for a single month."""
    sheets = [s for s in salaries if s.employee_id == employee_id and (month is None or s.month == month)]
    return FinancialSummary(
        total_salary=money_sum(s.salary for s in sheets),
        total_bank=money_sum(s.monthly_bank_transfers for s in sheets),
        total_cash=money_sum(s.monthly_cash_withdrawn for s in sheets),
    )
