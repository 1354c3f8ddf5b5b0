"""Mapper functions to convert between domain models and SQLAlchemy models.

SQLite stores datetimes without a timezone. Everything written by this
package is UTC, so naive values read back are tagged as UTC here.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from assetledger.domain import entities as domain
from assetledger.database.models import (
    Asset as ORMAsset,
    AssetValueHistory as ORMAssetValueHistory,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return value as a timezone-aware UTC datetime."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _as_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def asset_to_domain(orm_asset: ORMAsset) -> domain.Asset:
    """Convert SQLAlchemy Asset model to domain Asset entity."""
    return domain.Asset(
        id=orm_asset.id,
        name=orm_asset.name,
        category=orm_asset.category,
        purchase_price=_as_decimal(orm_asset.purchase_price),
        purchase_date=orm_asset.purchase_date,
        current_value=_as_decimal(orm_asset.current_value),
        date_added=as_utc(orm_asset.date_added),
        last_updated=as_utc(orm_asset.last_updated),
        status=domain.AssetStatus.REMOVED if orm_asset.removed else domain.AssetStatus.ACTIVE,
        removed_at=as_utc(orm_asset.removed_at),
        notes=orm_asset.notes,
    )


def value_history_to_domain(orm_entry: ORMAssetValueHistory) -> domain.ValueHistoryEntry:
    """Convert SQLAlchemy AssetValueHistory model to domain ValueHistoryEntry."""
    return domain.ValueHistoryEntry(
        id=orm_entry.id,
        asset_id=orm_entry.asset_id,
        value=_as_decimal(orm_entry.value),
        recorded_date=orm_entry.recorded_date,
        notes=orm_entry.notes,
        created_at=as_utc(orm_entry.created_at),
    )
