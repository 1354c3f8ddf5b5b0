"""Main CLI entry point."""

import logging

import click
from sqlalchemy.exc import SQLAlchemyError

from assetledger.cli.error_handling import ExitCode
from assetledger.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from assetledger.cli.commands import asset, query

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="ASSET_LEDGER_LOG_LEVEL",
    help="Logging verbosity (logs go to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Asset Ledger - track asset values with a full audit history.

    Every value change is recorded in the asset's history. Removing an asset
    keeps its history and last value; restore it to make changes again.

    \b
    Exit codes:
      0  success
      1  invalid arguments
      2  database error
      3  asset not found
      4  asset is removed
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
        except SQLAlchemyError as e:
            click.echo(f"Database error: {e}", err=True)
            ctx.exit(ExitCode.DB_ERROR)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
asset.register_commands(cli)
query.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
