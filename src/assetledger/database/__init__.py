"""Database layer for the asset ledger."""

from assetledger.database.base import Database
from assetledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
