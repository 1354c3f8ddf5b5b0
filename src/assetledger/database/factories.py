"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from assetledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "ASSET_LEDGER_DB_PATH"


def default_database_path() -> Path:
    """Return the default database location, creating its directory."""
    db_dir = Path.home() / ".local" / "share" / "asset-ledger"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / "assets.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            ASSET_LEDGER_DB_PATH environment variable, then defaults to
            ~/.local/share/asset-ledger/assets.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        database_path = str(default_database_path())

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
