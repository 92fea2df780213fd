#!/usr/bin/env python3
"""
Data CLI - CSV Import, Export and Templates

Imports add records that are not already present and never overwrite
existing ones. Exports are written to the export directory as
{entity}_{YYYY-MM-DD}.csv.
"""

from pathlib import Path

import click

from ..csvio import transfer
from ..csvio.templates import TEMPLATE_FILENAMES, template_for
from .common import cashbook_errors, get_workspace

KINDS = ["employees", "sales", "stores", "salary", "salaries", "advances"]


def _report(result: transfer.ImportResult, verbose: bool) -> None:
    click.echo(f"✅ {result.summary()}")
    if result.errors and verbose:
        for error in result.errors:
            click.echo(f"   ⚠️  {error}")
    elif result.errors:
        click.echo("   Run with --verbose to see the skipped rows")


@click.group()
def data() -> None:
    """CSV import, export and template commands."""
    pass


@data.command("import")
@click.argument("kind", type=click.Choice(KINDS))
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--verbose", "-v", is_flag=True, help="List skipped rows")
@click.pass_context
@cashbook_errors
def import_csv(ctx: click.Context, kind: str, csv_file: Path, verbose: bool) -> None:
    """
    Import KIND records from CSV_FILE into the active store.

    Employees and sales accept either the template layout or the export
    layout. "salary" is the combined salary/advance file; "salaries" and
    "advances" read the salaries.csv and advances.csv layouts.

    Examples:
      cashbook data import employees employee_template.csv
      cashbook data import sales sales_records_2024-04-30.csv
    """
    verbose = verbose or ctx.obj.get("verbose", False)
    workspace = get_workspace(ctx)
    text = transfer.read_import_file(csv_file)

    if kind == "stores":
        _report(transfer.import_stores(workspace, text), verbose)
        return

    store_id = workspace.active_store_id()
    if kind == "employees":
        _report(transfer.import_employees(workspace, store_id, text), verbose)
    elif kind == "sales":
        _report(transfer.import_sales(workspace, store_id, text), verbose)
    elif kind == "salaries":
        _report(transfer.import_salaries(workspace, store_id, text), verbose)
    elif kind == "advances":
        _report(transfer.import_advances(workspace, store_id, text), verbose)
    else:
        result = transfer.import_salary_ledger(workspace, store_id, text)
        _report(result.salaries, False)
        _report(result.advances, False)
        if result.errors:
            click.echo(f"   {len(result.errors)} row(s) skipped")
            if verbose:
                for error in result.errors:
                    click.echo(f"   ⚠️  {error}")


@data.command("export")
@click.argument("kind", type=click.Choice(KINDS))
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override export directory")
@click.pass_context
@cashbook_errors
def export_csv(ctx: click.Context, kind: str, output_dir: Path | None) -> None:
    """Export KIND records of the active store to CSV."""
    workspace = get_workspace(ctx)
    directory = output_dir or ctx.obj["config"].storage.export_dir

    if kind == "stores":
        path = transfer.export_stores(workspace, directory)
    elif kind == "employees":
        path = transfer.export_employees(workspace, workspace.active_store_id(), directory)
    elif kind == "sales":
        path = transfer.export_sales(workspace, workspace.active_store_id(), directory)
    elif kind == "salaries":
        path = transfer.export_salaries(workspace, workspace.active_store_id(), directory)
    elif kind == "advances":
        path = transfer.export_advances(workspace, workspace.active_store_id(), directory)
    else:
        path = transfer.export_salary_ledger(workspace, workspace.active_store_id(), directory)

    click.echo(f"✅ Exported to {path}")


@data.command()
@click.argument("kind", type=click.Choice(sorted(TEMPLATE_FILENAMES)))
@click.option("--output", "output_file", type=click.Path(dir_okay=False, path_type=Path), help="Write to this file")
def template(kind: str, output_file: Path | None) -> None:
    """
    Print or save a starter CSV for KIND.

    Example:
      cashbook data template sales --output sales_template.csv
    """
    text = template_for(kind)
    if output_file is None:
        click.echo(text)
        return

    output_file.write_text(text + "\n", encoding="utf-8")
    click.echo(f"✅ Wrote {TEMPLATE_FILENAMES[kind]} template to {output_file}")
