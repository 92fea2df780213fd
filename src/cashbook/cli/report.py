#!/usr/bin/env python3
"""Report CLI - monthly totals and cash difference history."""

import click
import pandas as pd

from ..reports.summary import cash_difference_report, monthly_sales_summary
from .common import cashbook_errors, get_workspace


@click.group()
def report() -> None:
    """Sales report commands."""
    pass


@report.command()
@click.option("--month", help="Only this month (YYYY-MM)")
@click.pass_context
@cashbook_errors
def monthly(ctx: click.Context, month: str | None) -> None:
    """Monthly sales, expense and difference totals for the active store."""
    workspace = get_workspace(ctx)
    summary = monthly_sales_summary(workspace.sales.list(workspace.active_store_id()))
    if month is not None:
        summary = summary.loc[summary.index == month]

    if summary.empty:
        click.echo("No sales records found.")
        return

    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 120):
        click.echo(summary.to_string())


@report.command()
@click.option("--status", "only_status", type=click.Choice(["success", "warning", "error"]), help="Filter by status")
@click.pass_context
@cashbook_errors
def differences(ctx: click.Context, only_status: str | None) -> None:
    """Day-by-day cash difference with its status."""
    workspace = get_workspace(ctx)
    df = cash_difference_report(workspace.sales.list(workspace.active_store_id()))
    if only_status is not None:
        df = df[df["status"] == only_status]

    if df.empty:
        click.echo("No matching sales records.")
        return

    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 120):
        click.echo(df.to_string(index=False))

    counts = df["status"].value_counts()
    click.echo(
        f"\n{counts.get('success', 0)} ok, {counts.get('warning', 0)} warning(s), {counts.get('error', 0)} error(s)"
    )
