"""Asset query commands."""

import io

import click

from assetledger.cli.error_handling import handle_domain_error
from assetledger.cli.output import (
    asset_to_dict,
    history_entry_to_dict,
    summary_to_dict,
    to_json,
    write_assets_csv,
)
from assetledger.domain.errors import DomainError, StorageError
from assetledger.domain.ledger import AssetLedger
from assetledger.domain.summary import SummaryService


@click.command("show")
@click.argument("asset_id", type=int)
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output")
@click.pass_context
def show_asset(ctx, asset_id: int, pretty: bool):
    """Show one asset as JSON."""
    ledger = AssetLedger(ctx.obj["db"])
    try:
        asset = ledger.get_asset(asset_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(to_json(asset_to_dict(asset), pretty))


@click.command("list")
@click.option("--all", "include_removed", is_flag=True, help="Include removed assets")
@click.option("--category", help="Only assets in this category")
@click.option(
    "--stale-days",
    type=click.IntRange(min=0),
    default=0,
    help="Warn about assets not updated in this many days (0 disables)",
)
@click.option("--csv", "as_csv", is_flag=True, help="Output as CSV instead of JSON")
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output")
@click.pass_context
def list_assets(
    ctx,
    include_removed: bool,
    category: str | None,
    stale_days: int,
    as_csv: bool,
    pretty: bool,
):
    """List assets, most recently updated first.

    Examples:
        asset-ledger list
        asset-ledger list --all --category vehicle
        asset-ledger list --stale-days 30
        asset-ledger list --csv > assets.csv
    """
    db = ctx.obj["db"]
    ledger = AssetLedger(db)
    summary_service = SummaryService(db)

    try:
        assets = ledger.list_assets(include_removed=include_removed, category=category)
        stale = summary_service.find_stale_assets(stale_days, category=category)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    if as_csv:
        buffer = io.StringIO()
        write_assets_csv(buffer, assets, stale)
        click.echo(buffer.getvalue(), nl=False)
        return

    result = {
        "total_count": len(assets),
        "assets": [asset_to_dict(asset) for asset in assets],
    }
    if stale:
        result["warnings"] = [item.warning for item in stale]
    click.echo(to_json(result, pretty))


@click.command("history")
@click.argument("asset_id", type=int)
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output")
@click.pass_context
def show_history(ctx, asset_id: int, pretty: bool):
    """Show an asset and its value history, newest first."""
    ledger = AssetLedger(ctx.obj["db"])
    try:
        asset = ledger.get_asset(asset_id)
        history = ledger.get_history(asset_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    result = {
        "asset": asset_to_dict(asset),
        "history": [history_entry_to_dict(entry) for entry in history],
    }
    click.echo(to_json(result, pretty))


@click.command("summary")
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output")
@click.pass_context
def show_summary(ctx, pretty: bool):
    """Show total value and per-category totals of active assets."""
    ledger = AssetLedger(ctx.obj["db"])
    try:
        summary = ledger.get_summary()
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(to_json(summary_to_dict(summary), pretty))


def register_commands(cli):
    """Register query commands with main CLI."""
    cli.add_command(show_asset)
    cli.add_command(list_assets)
    cli.add_command(show_history)
    cli.add_command(show_summary)
