#!/usr/bin/env python3
"""Employee CLI - staff of the active store."""

import click

from ..core.dates import FinancialDate
from ..core.ids import new_record_id
from ..employees.models import Employee
from .common import DATE, cashbook_errors, get_workspace


@click.group()
def employee() -> None:
    """Employee management commands."""
    pass


@employee.command("list")
@click.pass_context
@cashbook_errors
def list_employees(ctx: click.Context) -> None:
    """List employees of the active store."""
    workspace = get_workspace(ctx)
    employees = workspace.employees.list(workspace.active_store_id())

    if not employees:
        click.echo("No employees yet.")
        return

    for item in employees:
        click.echo(f"#{item.employee_number:<3} {item.name:<24} {item.mobile:<12} joined {item.joining_date}  [{item.id}]")


@employee.command()
@click.argument("name")
@click.option("--mobile", default="", help="Mobile number")
@click.option("--joining-date", type=DATE, help="Joining date (YYYY-MM-DD, default: today)")
@click.pass_context
@cashbook_errors
def add(ctx: click.Context, name: str, mobile: str, joining_date: FinancialDate | None) -> None:
    """Add an employee to the active store."""
    name = name.strip()
    if not name:
        raise click.ClickException("Employee name is required")

    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    saved = workspace.employees.upsert(
        store_id,
        Employee(
            id=new_record_id(),
            name=name,
            mobile=mobile.strip(),
            joining_date=joining_date or FinancialDate.today(),
            employee_number=workspace.employees.next_employee_number(store_id),
        ),
    )
    click.echo(f"✅ Added employee {saved.name} ({saved.id})")


@employee.command()
@click.argument("employee_id")
@click.pass_context
@cashbook_errors
def remove(ctx: click.Context, employee_id: str) -> None:
    """
    Remove an employee.

    Employees with advances or salary sheets cannot be removed.
    """
    workspace = get_workspace(ctx)
    if not workspace.employees.delete(workspace.active_store_id(), employee_id):
        raise click.ClickException(f"No employee with id {employee_id!r}")
    click.echo(f"Removed employee {employee_id}")
