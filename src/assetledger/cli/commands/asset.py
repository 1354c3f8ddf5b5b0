"""Asset lifecycle commands."""

import click

from assetledger.cli.error_handling import handle_domain_error
from assetledger.cli.input_parsing import amount_or_exit, date_or_exit
from assetledger.domain.errors import DomainError, StorageError
from assetledger.domain.ledger import AssetLedger


@click.command("add")
@click.argument("name")
@click.option("--category", default="other", show_default=True, help="Asset category (e.g. vehicle, property, investment)")
@click.option("--value", "current_value", required=True, help="Current value (e.g. 18000 or $18,000.00)")
@click.option("--purchase-price", help="Purchase price")
@click.option("--purchase-date", help="Purchase date (YYYY-MM-DD or relative like '2 years ago')")
@click.option("--notes", help="Additional notes")
@click.pass_context
def add_asset(
    ctx,
    name: str,
    category: str,
    current_value: str,
    purchase_price: str | None,
    purchase_date: str | None,
    notes: str | None,
):
    """Add a new asset.

    Examples:
        asset-ledger add "2019 Honda Civic" --category vehicle --value 18000 --purchase-price 25000 --purchase-date 2019-06-15
        asset-ledger add "Main Residence" --category property --value 450000
    """
    if not name.strip():
        click.echo("Error: Asset name cannot be empty", err=True)
        ctx.exit(1)
    if not category.strip():
        click.echo("Error: Category cannot be empty", err=True)
        ctx.exit(1)

    value = amount_or_exit(ctx, current_value, "value")
    price = None
    if purchase_price is not None:
        price = amount_or_exit(ctx, purchase_price, "purchase price")
    bought_on = None
    if purchase_date is not None:
        bought_on = date_or_exit(ctx, purchase_date, "purchase date")

    ledger = AssetLedger(ctx.obj["db"])
    try:
        asset_id = ledger.create_asset(
            name=name.strip(),
            category=category.strip(),
            current_value=value,
            purchase_price=price,
            purchase_date=bought_on,
            notes=notes,
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Asset added successfully (ID: {asset_id})")


@click.command("update")
@click.argument("asset_id", type=int)
@click.argument("value")
@click.option("--notes", help="Reason for the new value (e.g. 'Post-accident valuation')")
@click.pass_context
def update_asset(ctx, asset_id: int, value: str, notes: str | None):
    """Record a new value for an asset.

    Examples:
        asset-ledger update 1 17500
        asset-ledger update 1 17500 --notes "Post-accident valuation"
    """
    new_value = amount_or_exit(ctx, value, "value")

    ledger = AssetLedger(ctx.obj["db"])
    try:
        asset = ledger.update_value(asset_id, new_value, notes=notes)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Asset {asset.id} updated successfully (value: {asset.current_value:,.2f})")


@click.command("backfill")
@click.argument("asset_id", type=int)
@click.argument("value")
@click.option("--date", "recorded_date", required=True, help="Date the value applies to (must precede existing history)")
@click.option("--notes", help="Notes")
@click.pass_context
def backfill_asset(ctx, asset_id: int, value: str, recorded_date: str, notes: str | None):
    """Record a historical value without changing the current value.

    Examples:
        asset-ledger backfill 1 21000 --date 2023-01-01 --notes "Dealer quote"
    """
    amount = amount_or_exit(ctx, value, "value")
    on_date = date_or_exit(ctx, recorded_date, "date")

    ledger = AssetLedger(ctx.obj["db"])
    try:
        entry = ledger.backfill_value(asset_id, amount, on_date, notes=notes)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded value {entry.value:,.2f} for asset {asset_id} on {entry.recorded_date.isoformat()}")


@click.command("remove")
@click.argument("asset_id", type=int)
@click.option("--date", "removal_date", help="Removal date (defaults to now)")
@click.pass_context
def remove_asset(ctx, asset_id: int, removal_date: str | None):
    """Remove an asset (soft delete). Its history is kept.

    Examples:
        asset-ledger remove 1
        asset-ledger remove 1 --date 2024-03-01
    """
    removed_on = None
    if removal_date is not None:
        removed_on = date_or_exit(ctx, removal_date, "date")

    ledger = AssetLedger(ctx.obj["db"])
    try:
        ledger.remove_asset(asset_id, removal_date=removed_on)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Asset {asset_id} removed successfully")


@click.command("restore")
@click.argument("asset_id", type=int)
@click.pass_context
def restore_asset(ctx, asset_id: int):
    """Restore a removed asset."""
    ledger = AssetLedger(ctx.obj["db"])
    try:
        ledger.restore_asset(asset_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Asset {asset_id} restored successfully")


def register_commands(cli):
    """Register asset lifecycle commands with main CLI."""
    cli.add_command(add_asset)
    cli.add_command(update_asset)
    cli.add_command(backfill_asset)
    cli.add_command(remove_asset)
    cli.add_command(restore_asset)
