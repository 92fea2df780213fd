#!/usr/bin/env python3
"""
Salary CLI - Monthly Salary Sheets

Computes each employee's sheet for a month from the agreed salary and the
advances paid that month, carrying the running balance forward.
"""

import click

from ..core.currency import parse_rupees_to_paise
from ..core.dates import current_month, validate_month
from ..core.money import Money
from ..salary.calculator import employee_financial_summary
from .common import cashbook_errors, get_workspace


def _parse_assignments(values: tuple[str, ...]) -> dict[str, Money]:
    salaries: dict[str, Money] = {}
    for value in values:
        employee_id, sep, amount = value.partition("=")
        if not sep or not employee_id.strip():
            raise click.BadParameter(f"expected EMPLOYEE_ID=AMOUNT, got {value!r}", param_hint="--salary")
        try:
            salaries[employee_id.strip()] = Money.from_paise(parse_rupees_to_paise(amount))
        except ValueError:
            raise click.BadParameter(f"{amount!r} is not a valid amount", param_hint="--salary") from None
    return salaries


@click.group()
def salary() -> None:
    """Monthly salary commands."""
    pass


@salary.command()
@click.option("--month", help="Month (YYYY-MM, default: current month)")
@click.option("--salary", "assignments", multiple=True, help="EMPLOYEE_ID=AMOUNT (repeatable)")
@click.pass_context
@cashbook_errors
def compute(ctx: click.Context, month: str | None, assignments: tuple[str, ...]) -> None:
    """
    Compute and save salary sheets for every employee of the active store.

    Employees without --salary get a salary of ₹0 for the month.

    Example:
      cashbook salary compute --month 2024-04 --salary 17123abc=12000 --salary 17124def=9000
    """
    try:
        month = validate_month(month or current_month())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--month") from None
    salaries = _parse_assignments(assignments)

    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    employees = workspace.employees.list(store_id)
    if not employees:
        raise click.ClickException("No employees in the active store")

    unknown = set(salaries) - {e.id for e in employees}
    if unknown:
        raise click.ClickException(f"Unknown employee id(s): {', '.join(sorted(unknown))}")

    sheets = workspace.salaries.save_month(
        store_id,
        month,
        salaries,
        [e.id for e in employees],
        workspace.advances.list(store_id),
    )

    names = {e.id: e.name for e in employees}
    click.echo(f"Salary sheets for {month}:")
    for sheet in sheets:
        click.echo(
            f"  {names[sheet.employee_id]:<24} salary {sheet.salary}  advances {sheet.total_salary_advance}  "
            f"balance {sheet.balance_current}  till date {sheet.balance_till_date}"
        )
    click.echo("✅ Salary data updated")


@salary.command("list")
@click.option("--month", help="Only this month (YYYY-MM)")
@click.option("--employee", "employee_id", help="Only this employee")
@click.pass_context
@cashbook_errors
def list_salaries(ctx: click.Context, month: str | None, employee_id: str | None) -> None:
    """List stored salary sheets."""
    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    names = {e.id: e.name for e in workspace.employees.list(store_id)}

    sheets = [
        s
        for s in workspace.salaries.list(store_id)
        if (month is None or s.month == month) and (employee_id is None or s.employee_id == employee_id)
    ]
    if not sheets:
        click.echo("No salary sheets found.")
        return

    for sheet in sorted(sheets, key=lambda s: (s.month, names.get(s.employee_id, ""))):
        click.echo(
            f"{sheet.month}  {names.get(sheet.employee_id, 'Unknown'):<24} salary {sheet.salary}  "
            f"bank {sheet.monthly_bank_transfers}  cash {sheet.monthly_cash_withdrawn}  "
            f"balance {sheet.balance_current}  till date {sheet.balance_till_date}"
        )


@salary.command()
@click.argument("employee_id")
@click.option("--month", help="Only this month (YYYY-MM)")
@click.pass_context
@cashbook_errors
def summary(ctx: click.Context, employee_id: str, month: str | None) -> None:
    """Financial summary for one employee."""
    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    person = workspace.employees.get(store_id, employee_id)
    if person is None:
        raise click.ClickException(f"No employee with id {employee_id!r}")

    totals = employee_financial_summary(workspace.salaries.list(store_id), employee_id, month)

    click.echo(f"{person.name} ({month or 'all months'})")
    click.echo(f"  Total Salary:   {totals.total_salary}")
    click.echo(f"  Bank Transfers: {totals.total_bank}")
    click.echo(f"  Cash Advances:  {totals.total_cash}")
    click.echo(f"  Net Balance:    {totals.net_balance}")
