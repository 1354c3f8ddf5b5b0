"""CLI error handling helpers."""

from enum import IntEnum

import click

from assetledger.domain.errors import (
    DomainError,
    InvalidStateError,
    NotFoundError,
    StorageError,
)


class ExitCode(IntEnum):
    """Process exit codes for asset-ledger commands."""

    SUCCESS = 0
    ARGS_ERROR = 1
    DB_ERROR = 2
    NOT_FOUND = 3
    INVALID_STATE = 4


def exit_code_for(error: Exception) -> ExitCode:
    """Map a ledger error to the process exit code."""
    if isinstance(error, NotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, InvalidStateError):
        return ExitCode.INVALID_STATE
    if isinstance(error, StorageError):
        return ExitCode.DB_ERROR
    return ExitCode.ARGS_ERROR


def handle_domain_error(ctx: click.Context, error: DomainError | StorageError | ValueError) -> None:
    """Render a ledger error and exit with its exit code."""
    if isinstance(error, StorageError):
        click.echo(f"Database error: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(exit_code_for(error))
