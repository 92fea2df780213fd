#!/usr/bin/env python3
"""
Sales CLI - Daily Till Sheets

Record the day's figures and note count; the reconciliation (expected cash,
counted cash, difference) is computed on save.
"""

import click

from ..core.dates import FinancialDate
from ..core.money import Money
from ..reconciliation.denominations import denomination_breakdown
from ..reconciliation.engine import DifferenceStatus, difference_status
from ..reconciliation.models import ADVANCE_SLOTS, NOTE_VALUES, SalesRecord
from .common import AMOUNT, DATE, cashbook_errors, get_workspace

_STATUS_ICONS = {
    DifferenceStatus.SUCCESS: "✅",
    DifferenceStatus.WARNING: "⚠️ ",
    DifferenceStatus.ERROR: "❌",
}


def _parse_counts(values: tuple[str, ...]) -> dict[int, int]:
    counts: dict[int, int] = {}
    for value in values:
        note, sep, count = value.partition("=")
        try:
            note_value, note_count = int(note), int(count)
        except ValueError:
            note_value = note_count = -1
        if not sep or note_value not in NOTE_VALUES or note_count < 0:
            allowed = ", ".join(str(n) for n in NOTE_VALUES)
            raise click.BadParameter(f"expected NOTE=COUNT with NOTE one of {allowed}, got {value!r}", param_hint="--count")
        counts[note_value] = note_count
    return counts


def _parse_expense(value: str | None) -> tuple[str, Money] | None:
    if value is None:
        return None
    name, sep, amount = value.rpartition("=")
    if not sep:
        raise click.BadParameter(f"expected NAME=AMOUNT, got {value!r}", param_hint="--expense")
    return name.strip(), AMOUNT.convert(amount, None, None)


def _print_record(record: SalesRecord) -> None:
    status = difference_status(record.cash_difference)

    click.echo(f"Sales record for {record.date} (store {record.store_id})")
    click.echo("=" * 50)
    click.echo(f"  Opening Cash:        {record.opening_cash}")
    click.echo(f"  Total POS Sales:     {record.total_sales_pos}")
    click.echo(f"  Paytm Sales:         {record.paytm_sales}")
    click.echo(f"  Cash Sales:          {record.total_cash_sales}")
    click.echo(f"  Total Expenses:      {record.total_expenses}")
    click.echo()
    click.echo("  Denominations:")
    for note, count, subtotal in denomination_breakdown(record.denominations):
        if count:
            click.echo(f"    ₹{note:<4} x {count:<4} = {subtotal}")
    click.echo(f"  Counted Cash:        {record.total_from_denominations}")
    click.echo(f"  Cash Withdrawn:      {record.cash_withdrawn}")
    click.echo(f"  Closing Cash:        {record.closing_cash}")
    click.echo()
    click.echo(f"  Expected Cash:       {record.total_cash}")
    click.echo(f"  Cash Difference:     {record.cash_difference}  {_STATUS_ICONS[status]} {status.value}")


@click.group()
def sales() -> None:
    """Daily sales record commands."""
    pass


@sales.command()
@click.option("--date", "record_date", type=DATE, help="Day (YYYY-MM-DD, default: today)")
@click.option("--opening-cash", type=AMOUNT, help="Cash in the till at opening")
@click.option("--pos-sales", type=AMOUNT, help="Total sales reported by the POS")
@click.option("--paytm", type=AMOUNT, help="Part of POS sales paid by Paytm")
@click.option("--advance", "advances", type=AMOUNT, multiple=True, help="Cash advance to an employee (up to 4)")
@click.option("--cleaning", type=AMOUNT, help="Cleaning expenses")
@click.option("--expense", "expense1", help="First other expense as NAME=AMOUNT")
@click.option("--expense2", help="Second other expense as NAME=AMOUNT")
@click.option("--count", "counts", multiple=True, help="Note count as NOTE=COUNT, e.g. 500=4 (repeatable)")
@click.option("--withdrawn", type=AMOUNT, help="Cash withdrawn at close")
@click.pass_context
@cashbook_errors
def record(
    ctx: click.Context,
    record_date: FinancialDate | None,
    opening_cash: Money | None,
    pos_sales: Money | None,
    paytm: Money | None,
    advances: tuple[Money, ...],
    cleaning: Money | None,
    expense1: str | None,
    expense2: str | None,
    counts: tuple[str, ...],
    withdrawn: Money | None,
) -> None:
    """
    Save the till sheet for a day.

    If the day already has a sheet, only the given fields are changed.

    Example:
      cashbook sales record --date 2024-04-01 --opening-cash 5000 --pos-sales 15000 \\
          --paytm 3000 --advance 500 --cleaning 200 --expense Maintenance=300 \\
          --count 500=5 --count 200=10 --count 100=20 --withdrawn 1000
    """
    if len(advances) > len(ADVANCE_SLOTS):
        raise click.BadParameter(f"at most {len(ADVANCE_SLOTS)} advances", param_hint="--advance")
    note_counts = _parse_counts(counts)
    extra1 = _parse_expense(expense1)
    extra2 = _parse_expense(expense2)

    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    day = record_date or FinancialDate.today()
    sheet = workspace.sales.get_for_date(store_id, day) or SalesRecord.empty(day, store_id)

    if opening_cash is not None:
        sheet.opening_cash = opening_cash
    if pos_sales is not None:
        sheet.total_sales_pos = pos_sales
    if paytm is not None:
        sheet.paytm_sales = paytm
    for slot, amount in zip(ADVANCE_SLOTS, advances):
        setattr(sheet.employee_advances, slot, amount)
    if cleaning is not None:
        sheet.cleaning_expenses = cleaning
    if extra1 is not None:
        sheet.other_expenses.name1, sheet.other_expenses.amount1 = extra1
    if extra2 is not None:
        sheet.other_expenses.name2, sheet.other_expenses.amount2 = extra2
    for note, count in note_counts.items():
        setattr(sheet.denominations, f"d{note}", count)
    if withdrawn is not None:
        sheet.cash_withdrawn = withdrawn

    saved = workspace.sales.upsert(store_id, sheet)
    _print_record(saved)
    click.echo("\n✅ Sales record saved")


@sales.command()
@click.argument("day", type=DATE)
@click.pass_context
@cashbook_errors
def show(ctx: click.Context, day: FinancialDate) -> None:
    """Show the till sheet for DAY (YYYY-MM-DD)."""
    workspace = get_workspace(ctx)
    found = workspace.sales.get_for_date(workspace.active_store_id(), day)
    if found is None:
        raise click.ClickException(f"No sales record for {day}")
    _print_record(found)


@sales.command("list")
@click.option("--from", "start", type=DATE, help="First day (YYYY-MM-DD)")
@click.option("--to", "end", type=DATE, help="Last day (YYYY-MM-DD)")
@click.pass_context
@cashbook_errors
def list_sales(ctx: click.Context, start: FinancialDate | None, end: FinancialDate | None) -> None:
    """List till sheets, oldest first."""
    workspace = get_workspace(ctx)
    store_id = workspace.active_store_id()
    records = workspace.sales.list(store_id)
    if records:
        first = start or min(r.date for r in records)
        last = end or max(r.date for r in records)
        records = workspace.sales.between(store_id, first, last)

    if not records:
        click.echo("No sales records found.")
        return

    click.echo(f"{'Date':<12}{'POS Sales':>14}{'Cash Sales':>14}{'Expected':>14}{'Counted':>14}{'Difference':>14}")
    for item in records:
        status = difference_status(item.cash_difference)
        click.echo(
            f"{item.date.to_iso_string():<12}{str(item.total_sales_pos):>14}{str(item.total_cash_sales):>14}"
            f"{str(item.total_cash):>14}{str(item.total_from_denominations):>14}"
            f"{str(item.cash_difference):>14} {_STATUS_ICONS[status]}"
        )


@sales.command()
@click.pass_context
@cashbook_errors
def status(ctx: click.Context) -> None:
    """Show the reconciliation status of the latest till sheet."""
    workspace = get_workspace(ctx)
    latest = workspace.sales.latest(workspace.active_store_id())
    if latest is None:
        click.echo("No sales records yet.")
        return

    state = difference_status(latest.cash_difference)
    click.echo(f"Latest record: {latest.date}")
    click.echo(f"Cash difference: {latest.cash_difference} {_STATUS_ICONS[state]} {state.value}")
