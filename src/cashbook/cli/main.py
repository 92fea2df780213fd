#!/usr/bin/env python3
"""
Main CLI Entry Point for the Shop Cashbook

Provides the command-line interface for daily cash reconciliation, staff
and salary book-keeping, and CSV import/export.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config
from .common import get_workspace


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Shop Cashbook - Daily Cash Reconciliation

    Record each day's till sheet, count the notes at close, and see how far
    the counted cash is from what the sales say it should be.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["CASHBOOK_ENV"] = config_env
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = reload_config() if (config_env or debug) else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    if debug:
        logging.getLogger("cashbook").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from cashbook import __author__, __version__

    click.echo(f"Shop Cashbook v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    recon = config_obj.reconciliation

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Storage Directory: {config_obj.storage.storage_dir}")
    click.echo(f"  Export Directory: {config_obj.storage.export_dir}")
    click.echo(f"  CSV Snapshots: {config_obj.storage.snapshots_enabled}")
    click.echo(f"  Cash Offset: ₹{recon.cash_offset_paise // 100}")
    click.echo(f"  Difference Policy: {recon.difference_policy}")
    click.echo(f"  Validation: {recon.validation}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")

    errors = config_obj.validate()
    if errors:
        click.echo("\nConfiguration problems:")
        for error in errors:
            click.echo(f"  ❌ {error}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show what is stored and which store is active."""
    workspace = get_workspace(ctx)
    store = workspace.active_store()

    click.echo(f"Active store: {f'{store.name} ({store.id})' if store else 'none'}")
    click.echo()
    for repository in workspace.repositories():
        line = f"  {repository.summary_text()}"
        age = repository.age_days()
        if age is not None:
            line += f" (updated {age} day(s) ago)"
        click.echo(line)


from .advance import advance  # noqa: E402
from .data import data  # noqa: E402
from .employee import employee  # noqa: E402
from .report import report  # noqa: E402
from .salary import salary  # noqa: E402
from .sales import sales  # noqa: E402
from .store import store  # noqa: E402

main.add_command(store)
main.add_command(employee)
main.add_command(advance)
main.add_command(salary)
main.add_command(sales)
main.add_command(data)
main.add_command(report)


if __name__ == "__main__":
    main()
