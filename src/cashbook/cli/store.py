#!/usr/bin/env python3
"""
Store CLI - Store Management

Add and remove stores and choose the active one. All other commands work
on the active store.
"""

import click

from ..core.ids import new_record_id
from ..stores.models import Store, validate_store_id
from .common import cashbook_errors, get_workspace


@click.group()
def store() -> None:
    """Store management commands."""
    pass


@store.command("list")
@click.pass_context
def list_stores(ctx: click.Context) -> None:
    """List all stores; the active one is marked with '*'."""
    workspace = get_workspace(ctx)
    stores = workspace.stores.list()
    active_id = workspace.context.get_active_store_id()

    if not stores:
        click.echo("No stores. Add one with: cashbook store add NAME")
        return

    for item in stores:
        marker = "*" if item.id == active_id else " "
        status = "" if item.is_active else " (inactive)"
        click.echo(f"{marker} {item.id}  {item.name}{status}")
        if item.address:
            click.echo(f"    {item.address}")


@store.command()
@click.argument("name")
@click.option("--id", "store_id", help="Store id (default: generated)")
@click.option("--address", default="", help="Street address")
@click.option("--phone", help="Contact phone number")
@click.option("--email", help="Contact email")
@click.option("--activate", is_flag=True, help="Make the new store active")
@click.pass_context
@cashbook_errors
def add(
    ctx: click.Context,
    name: str,
    store_id: str | None,
    address: str,
    phone: str | None,
    email: str | None,
    activate: bool,
) -> None:
    """
    Add a store.

    Examples:
      cashbook store add "MG Road" --address "12 MG Road"
      cashbook store add "Station Kiosk" --id kiosk --activate
    """
    workspace = get_workspace(ctx)
    try:
        store_id = validate_store_id(store_id) if store_id is not None else new_record_id()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--id") from None
    if workspace.stores.get(store_id) is not None:
        raise click.ClickException(f"Store {store_id!r} already exists")

    saved = workspace.stores.upsert(Store(id=store_id, name=name, address=address, phone=phone, email=email))
    click.echo(f"✅ Added store {saved.name} ({saved.id})")

    if activate:
        workspace.context.set_active_store(saved.id)
        click.echo(f"Active store: {saved.name}")


@store.command()
@click.argument("store_id")
@click.pass_context
@cashbook_errors
def use(ctx: click.Context, store_id: str) -> None:
    """Make STORE_ID the active store."""
    workspace = get_workspace(ctx)
    selected = workspace.stores.get(store_id)
    if selected is None:
        raise click.ClickException(f"No store with id {store_id!r}")
    workspace.context.set_active_store(selected.id)
    click.echo(f"Active store: {selected.name} ({selected.id})")


@store.command()
@click.argument("store_id")
@click.confirmation_option(prompt="Remove this store? Its records are kept but hidden.")
@click.pass_context
@cashbook_errors
def remove(ctx: click.Context, store_id: str) -> None:
    """Remove a store from the store list."""
    workspace = get_workspace(ctx)
    if not workspace.stores.delete(store_id):
        raise click.ClickException(f"No store with id {store_id!r}")
    click.echo(f"Removed store {store_id}")
    if workspace.context.get_active_store_id() is None:
        click.echo("No store is active now; choose one with: cashbook store use ID")


@store.command()
@click.pass_context
@cashbook_errors
def init(ctx: click.Context) -> None:
    """Create the default store if no store has ever been set up."""
    workspace = get_workspace(ctx, bootstrap=False)
    created = workspace.bootstrap()
    if created is None:
        click.echo("Stores already set up; nothing to do.")
    else:
        click.echo(f"✅ Created {created.name} ({created.id}) and made it active")
