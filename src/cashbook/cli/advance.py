#!/usr/bin/env python3
"""Advance CLI - cash advances and bank transfers paid to employees."""

import click

from ..core.dates import FinancialDate
from ..core.ids import new_record_id
from ..core.money import Money
from ..reports.summary import advances_report
from ..salary.models import AdvanceType, SalaryAdvance
from .common import AMOUNT, DATE, cashbook_errors, get_workspace


@click.group()
def advance() -> None:
    """Salary advance and transfer commands."""
    pass


@advance.command()
@click.argument("employee_id")
@click.argument("amount", type=AMOUNT)
@click.option("--date", "advance_date", type=DATE, help="Date paid (YYYY-MM-DD, default: today)")
@click.option("--type", "advance_type", type=click.Choice(["bank", "cash"]), default="bank", show_default=True)
@click.option("--comments", default="", help="Free-form note")
@click.pass_context
@cashbook_errors
def add(
    ctx: click.Context,
    employee_id: str,
    amount: Money,
    advance_date: FinancialDate | None,
    advance_type: str,
    comments: str,
) -> None:
    """
    Record an advance or transfer of AMOUNT rupees to EMPLOYEE_ID.

    Examples:
      cashbook advance add 1712345678abc 2000 --type cash
      cashbook advance add 1712345678abc 5000 --date 2024-04-05 --comments "April rent"
    """
    if amount <= Money.zero():
        raise click.ClickException("Please enter a valid amount")

    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    if workspace.employees.get(store_id, employee_id) is None:
        raise click.ClickException(f"No employee with id {employee_id!r}")

    saved = workspace.advances.upsert(
        store_id,
        SalaryAdvance(
            id=new_record_id(),
            date=advance_date or FinancialDate.today(),
            amount=amount,
            employee_id=employee_id,
            comments=comments,
            type=AdvanceType(advance_type),
        ),
    )
    click.echo(f"✅ Saved {saved.type.value} advance of {saved.amount} on {saved.date}")


@advance.command("list")
@click.argument("employee_id")
@click.option("--month", help="Only this month (YYYY-MM)")
@click.pass_context
@cashbook_errors
def list_advances(ctx: click.Context, employee_id: str, month: str | None) -> None:
    """List an employee's advances, newest first."""
    workspace = get_workspace(ctx)
    df = advances_report(workspace.advances.list(workspace.active_store_id()), employee_id, month)

    if df.empty:
        click.echo("No advances found.")
        return

    click.echo(df.to_string(index=False))
    click.echo(f"\nTotal: ₹{df['amount'].sum():.2f} in {len(df)} payment(s)")
