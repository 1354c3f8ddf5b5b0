"""Generic SQLAlchemy database implementation."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from assetledger.database.base import Database
from assetledger.database.models import (
    Asset,
    AssetValueHistory,
    create_session_factory,
)
from assetledger.database.mappers import asset_to_domain, value_history_to_domain
from assetledger.domain.entities import (
    Asset as DomainAsset,
    ValueHistoryEntry as DomainValueHistoryEntry,
)
from assetledger.domain.errors import (
    StorageError,
    ReferencedEntityMissingError,
    history_asset_missing,
)

logger = logging.getLogger(__name__)


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    return "FOREIGN KEY constraint failed" in str(error.orig)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None
        self._uow_depth = 0

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        """Scope a transaction: commit on success, roll back on any failure.

        Nested blocks join the outermost one.
        """
        if self._uow_depth > 0:
            self._uow_depth += 1
            try:
                yield
            finally:
                self._uow_depth -= 1
            return

        session = self._get_session()
        self._uow_depth = 1
        try:
            yield
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Rolled back transaction after database error: %s", e)
            raise StorageError(f"Database operation failed: {e}") from e
        except BaseException:
            session.rollback()
            logger.info("Rolled back transaction after failed operation")
            raise
        finally:
            self._uow_depth = 0

    @contextmanager
    def _reading(self) -> Iterator[Session]:
        """Yield the session for a read, surfacing driver errors as StorageError."""
        try:
            yield self._get_session()
        except SQLAlchemyError as e:
            raise StorageError(f"Database query failed: {e}") from e

    # Asset operations
    def insert_asset(
        self,
        name: str,
        category: str,
        current_value: Decimal,
        timestamp: datetime,
        purchase_price: Optional[Decimal] = None,
        purchase_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Insert an active asset. Returns asset ID."""
        with self.unit_of_work():
            session = self._get_session()
            asset = Asset(
                name=name,
                category=category,
                purchase_price=purchase_price,
                purchase_date=purchase_date,
                current_value=current_value,
                date_added=timestamp,
                last_updated=timestamp,
                removed=False,
                notes=notes,
            )
            session.add(asset)
            session.flush()
            asset_id = asset.id
        return asset_id

    def get_asset(self, asset_id: int) -> Optional[DomainAsset]:
        """Get asset by ID."""
        with self._reading() as session:
            asset = session.query(Asset).filter(Asset.id == asset_id).first()
            if asset is None:
                return None
            return asset_to_domain(asset)

    def list_assets(
        self, include_removed: bool = False, category: Optional[str] = None
    ) -> list[DomainAsset]:
        """List assets, most recently updated first."""
        with self._reading() as session:
            query = session.query(Asset)
            if not include_removed:
                query = query.filter(Asset.removed.is_(False))
            if category is not None:
                query = query.filter(Asset.category == category)
            assets = query.order_by(Asset.last_updated.desc(), Asset.id.desc()).all()
            return [asset_to_domain(asset) for asset in assets]

    def set_current_value(self, asset_id: int, value: Decimal, timestamp: datetime) -> bool:
        """Set an asset's current value and last-updated time."""
        with self.unit_of_work():
            session = self._get_session()
            asset = session.query(Asset).filter(Asset.id == asset_id).first()
            if asset is None:
                return False
            asset.current_value = value
            asset.last_updated = timestamp
            session.flush()
        return True

    def set_removed(self, asset_id: int, removed_at: Optional[datetime]) -> bool:
        """Mark an asset removed at removed_at, or active again when None."""
        with self.unit_of_work():
            session = self._get_session()
            asset = session.query(Asset).filter(Asset.id == asset_id).first()
            if asset is None:
                return False
            asset.removed = removed_at is not None
            asset.removed_at = removed_at
            session.flush()
        return True

    # Value history operations
    def append_value_history(
        self,
        asset_id: int,
        value: Decimal,
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Append a value history entry. Returns entry ID."""
        with self.unit_of_work():
            session = self._get_session()
            entry = AssetValueHistory(
                asset_id=asset_id,
                value=value,
                recorded_date=recorded_date,
                notes=notes,
            )
            session.add(entry)
            try:
                session.flush()
            except IntegrityError as e:
                if _is_foreign_key_violation(e):
                    raise ReferencedEntityMissingError(history_asset_missing(asset_id)) from e
                raise
            entry_id = entry.id
        return entry_id

    def list_value_history(self, asset_id: int) -> list[DomainValueHistoryEntry]:
        """List history for an asset, newest recorded date first."""
        with self._reading() as session:
            entries = (
                session.query(AssetValueHistory)
                .filter(AssetValueHistory.asset_id == asset_id)
                .order_by(AssetValueHistory.recorded_date.desc(), AssetValueHistory.id.desc())
                .all()
            )
            return [value_history_to_domain(entry) for entry in entries]
