"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from assetledger.domain.entities import Asset, ValueHistoryEntry


class Database(ABC):
    """Abstract database interface for the asset ledger.

    Write operations may be grouped with ``unit_of_work()``: everything done
    inside the block is committed together on success and rolled back
    together on any failure. A write issued outside a block is its own unit.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Return a context manager scoping one all-or-nothing transaction."""
        pass

    # Asset operations
    @abstractmethod
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
        pass

    @abstractmethod
    def get_asset(self, asset_id: int) -> Optional[Asset]:
        """Get asset by ID."""
        pass

    @abstractmethod
    def list_assets(
        self, include_removed: bool = False, category: Optional[str] = None
    ) -> list[Asset]:
        """List assets, most recently updated first.

        Args:
            include_removed: If False, only active assets are returned
            category: Optional exact category filter
        """
        pass

    @abstractmethod
    def set_current_value(self, asset_id: int, value: Decimal, timestamp: datetime) -> bool:
        """Set an asset's current value and last-updated time.

        Returns False if no asset row matched.
        """
        pass

    @abstractmethod
    def set_removed(self, asset_id: int, removed_at: Optional[datetime]) -> bool:
        """Mark an asset removed at removed_at, or active again when None.

        Returns False if no asset row matched.
        """
        pass

    # Value history operations
    @abstractmethod
    def append_value_history(
        self,
        asset_id: int,
        value: Decimal,
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Append a value history entry. Returns entry ID.

        Raises:
            ReferencedEntityMissingError: If asset_id does not exist
        """
        pass

    @abstractmethod
    def list_value_history(self, asset_id: int) -> list[ValueHistoryEntry]:
        """List history for an asset, newest recorded date first."""
        pass
