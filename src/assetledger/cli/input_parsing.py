"""CLI helpers for parsing amounts and dates."""

from datetime import date
from decimal import Decimal

import click

from assetledger.cli.error_handling import ExitCode
from assetledger.utils.amount_parser import parse_amount
from assetledger.utils.date_parser import parse_date


def amount_or_exit(ctx: click.Context, value: str, label: str) -> Decimal:
    """Parse an amount option, or exit with an argument error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(ExitCode.ARGS_ERROR)


def date_or_exit(ctx: click.Context, value: str, label: str) -> date:
    """Parse a date option, or exit with an argument error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(ExitCode.ARGS_ERROR)
