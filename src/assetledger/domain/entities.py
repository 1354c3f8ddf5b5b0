"""Domain model entities for the asset ledger.

These are pure data classes representing business concepts, independent of
database schema. The ledger and its callers only ever see these types; the
SQLAlchemy models stay behind the database layer.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

# Decimal places kept for every stored amount
AMOUNT_SCALE = 8


class AssetStatus(Enum):
    """Lifecycle state of an asset."""

    ACTIVE = "active"
    REMOVED = "removed"


@dataclass(frozen=True)
class Asset:
    """Tracked asset domain entity."""

    id: int
    name: str
    category: str
    purchase_price: Optional[Decimal]
    purchase_date: Optional[date]
    current_value: Decimal
    date_added: datetime
    last_updated: datetime
    status: AssetStatus
    removed_at: Optional[datetime]
    notes: Optional[str]

    @property
    def is_removed(self) -> bool:
        return self.status is AssetStatus.REMOVED


@dataclass(frozen=True)
class ValueHistoryEntry:
    """A single recorded observation of an asset's value."""

    id: int
    asset_id: int
    value: Decimal
    recorded_date: date
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CategoryBreakdown:
    """Aggregated totals for one category of active assets."""

    category: str
    count: int
    value: Decimal


@dataclass(frozen=True)
class LedgerSummary:
    """Aggregate view over active assets."""

    total_value: Decimal
    total_count: int
    categories: tuple[CategoryBreakdown, ...]


@dataclass(frozen=True)
class StaleAsset:
    """An active asset whose value has not been updated recently."""

    asset: Asset
    days_since_update: int

    @property
    def warning(self) -> str:
        return (
            f"Asset #{self.asset.id} '{self.asset.name}' "
            f"not updated in {self.days_since_update} days"
        )
