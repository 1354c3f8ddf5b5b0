"""Shared pytest fixtures for asset ledger tests."""

import tempfile
import os
from datetime import datetime, timedelta, UTC
import pytest

from assetledger.database.factories import create_sqlite_database
from assetledger.domain.ledger import AssetLedger
from assetledger.domain.history import ValueHistoryService
from assetledger.domain.summary import SummaryService


class StepClock:
    """Deterministic clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock starting shortly before now, one minute per tick."""
    return StepClock(datetime.now(UTC) - timedelta(hours=2))


@pytest.fixture
def ledger(temp_db, clock):
    """Create an AssetLedger with a temporary database and stepping clock."""
    return AssetLedger(temp_db, clock=clock)


@pytest.fixture
def history_service(temp_db):
    """Create a ValueHistoryService with a temporary database."""
    return ValueHistoryService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_asset(ledger):
    """Create a sample vehicle asset for testing."""
    asset_id = ledger.create_asset(name="Car", category="Vehicle", current_value=20000.0)
    return ledger.get_asset(asset_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
