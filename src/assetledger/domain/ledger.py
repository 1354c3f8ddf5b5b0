"""Asset ledger domain service."""

import logging
from datetime import date, datetime, time, UTC
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

from assetledger.database.base import Database
from assetledger.domain.entities import AMOUNT_SCALE, Asset, LedgerSummary, ValueHistoryEntry
from assetledger.domain.errors import (
    NotFoundError,
    InvalidStateError,
    ValidationError,
    asset_not_found,
    amount_too_precise,
    asset_removed,
    backfill_not_older,
    invalid_amount,
    removal_before_update,
)
from assetledger.domain.history import ValueHistoryService
from assetledger.domain.summary import SummaryService

logger = logging.getLogger(__name__)

INITIAL_VALUE_NOTE = "Initial value"

Amount = Union[Decimal, float, int, str]


def to_decimal(value: Amount) -> Decimal:
    """Convert an amount to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def checked_amount(value: Amount) -> Decimal:
    """Convert an amount to Decimal, rejecting values that cannot be stored exactly.

    Raises:
        ValidationError: If the amount is not a finite number or has more
            than AMOUNT_SCALE decimal places
    """
    try:
        amount = to_decimal(value)
    except InvalidOperation as e:
        raise ValidationError(invalid_amount(value)) from e
    if not amount.is_finite():
        raise ValidationError(invalid_amount(value))
    # Trailing zeros beyond the stored scale are harmless
    if amount.normalize().as_tuple().exponent < -AMOUNT_SCALE:
        raise ValidationError(amount_too_precise(amount, AMOUNT_SCALE))
    return amount


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AssetLedger:
    """Service owning asset lifecycle and its value history.

    Every operation that changes an asset's value appends exactly one history
    entry in the same database transaction, so ``current_value`` always matches
    the newest history entry. Removed assets keep their history and last value
    but reject value changes until restored.
    """

    def __init__(self, db: Database, clock: Callable[[], datetime] = _utcnow):
        """Initialize asset ledger.

        Args:
            db: Database instance
            clock: Returns the current UTC time; replaced in tests
        """
        self.db = db
        self.clock = clock
        self.history = ValueHistoryService(db)
        self.summaries = SummaryService(db)

    def _today(self, now: datetime) -> date:
        # Recorded dates are calendar dates in local time
        return now.astimezone().date()

    def _update_date(self, asset_id: int, now: datetime) -> date:
        # The new entry must sort first even if the local timezone moved west
        today = self._today(now)
        history = self.db.list_value_history(asset_id)
        if history and history[0].recorded_date > today:
            return history[0].recorded_date
        return today

    def _require_asset(self, asset_id: int) -> Asset:
        asset = self.db.get_asset(asset_id)
        if asset is None:
            raise NotFoundError(asset_not_found(asset_id))
        return asset

    def create_asset(
        self,
        name: str,
        category: str,
        current_value: Amount,
        purchase_price: Optional[Amount] = None,
        purchase_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an active asset and seed its value history.

        Args:
            name: Asset name
            category: Grouping category
            current_value: Starting value
            purchase_price: Optional purchase price
            purchase_date: Optional purchase date
            notes: Optional free-text note

        Returns:
            Asset ID
        """
        now = self.clock()
        value = checked_amount(current_value)
        price = checked_amount(purchase_price) if purchase_price is not None else None

        with self.db.unit_of_work():
            asset_id = self.db.insert_asset(
                name=name,
                category=category,
                current_value=value,
                timestamp=now,
                purchase_price=price,
                purchase_date=purchase_date,
                notes=notes,
            )
            self.db.append_value_history(
                asset_id=asset_id,
                value=value,
                recorded_date=self._today(now),
                notes=INITIAL_VALUE_NOTE,
            )

        logger.info("Created asset %s (%s, %s) with value %s", asset_id, name, category, value)
        return asset_id

    def update_value(self, asset_id: int, new_value: Amount, notes: Optional[str] = None) -> Asset:
        """Set an asset's current value and record it in history.

        Raises:
            NotFoundError: If the asset does not exist
            InvalidStateError: If the asset is removed
        """
        now = self.clock()
        value = checked_amount(new_value)

        with self.db.unit_of_work():
            asset = self._require_asset(asset_id)
            if asset.is_removed:
                raise InvalidStateError(asset_removed(asset_id))
            recorded_date = self._update_date(asset_id, now)
            self.db.set_current_value(asset_id, value, now)
            self.db.append_value_history(
                asset_id=asset_id,
                value=value,
                recorded_date=recorded_date,
                notes=notes,
            )

        logger.info("Updated asset %s value %s -> %s", asset_id, asset.current_value, value)
        return self._require_asset(asset_id)

    def backfill_value(
        self,
        asset_id: int,
        value: Amount,
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> ValueHistoryEntry:
        """Record a historical value observation without changing the current value.

        The recorded date must be strictly earlier than every existing entry so
        the newest entry keeps matching the asset's current value.

        Raises:
            NotFoundError: If the asset does not exist
            InvalidStateError: If the asset is removed
            ValidationError: If recorded_date is not older than the newest entry
        """
        amount = checked_amount(value)

        with self.db.unit_of_work():
            asset = self._require_asset(asset_id)
            if asset.is_removed:
                raise InvalidStateError(asset_removed(asset_id))
            history = self.db.list_value_history(asset_id)
            if history and recorded_date >= history[0].recorded_date:
                raise ValidationError(backfill_not_older(recorded_date, history[0].recorded_date))
            entry_id = self.db.append_value_history(
                asset_id=asset_id,
                value=amount,
                recorded_date=recorded_date,
                notes=notes,
            )

        logger.info("Backfilled asset %s value %s on %s", asset_id, amount, recorded_date)
        for entry in self.db.list_value_history(asset_id):
            if entry.id == entry_id:
                return entry
        raise NotFoundError(asset_not_found(asset_id))

    def remove_asset(self, asset_id: int, removal_date: Optional[date] = None) -> Asset:
        """Soft-delete an asset, freezing its last known value.

        Removing an already removed asset is a no-op that keeps the original
        removal time.

        Args:
            asset_id: Asset ID
            removal_date: Calendar date of removal (local time); defaults to now

        Raises:
            NotFoundError: If the asset does not exist
            ValidationError: If removal_date is earlier than the last update
        """
        with self.db.unit_of_work():
            asset = self._require_asset(asset_id)
            if asset.is_removed:
                logger.info("Asset %s already removed at %s", asset_id, asset.removed_at)
                return asset

            if removal_date is None:
                removed_at = self.clock()
            else:
                last_updated_day = asset.last_updated.astimezone().date()
                if removal_date < last_updated_day:
                    raise ValidationError(removal_before_update(removal_date, last_updated_day))
                start_of_day = datetime.combine(removal_date, time.min).astimezone(UTC)
                removed_at = max(start_of_day, asset.last_updated)

            self.db.set_removed(asset_id, removed_at)

        logger.info("Removed asset %s at %s", asset_id, removed_at)
        return self._require_asset(asset_id)

    def restore_asset(self, asset_id: int) -> Asset:
        """Return a removed asset to the active state.

        Restoring an active asset is a no-op.

        Raises:
            NotFoundError: If the asset does not exist
        """
        with self.db.unit_of_work():
            asset = self._require_asset(asset_id)
            if not asset.is_removed:
                logger.info("Asset %s is already active", asset_id)
                return asset
            self.db.set_removed(asset_id, None)

        logger.info("Restored asset %s", asset_id)
        return self._require_asset(asset_id)

    def get_asset(self, asset_id: int) -> Asset:
        """Get asset by ID.

        Raises:
            NotFoundError: If the asset does not exist
        """
        return self._require_asset(asset_id)

    def list_assets(
        self, include_removed: bool = False, category: Optional[str] = None
    ) -> list[Asset]:
        """List assets, most recently updated first."""
        return self.db.list_assets(include_removed=include_removed, category=category)

    def get_history(self, asset_id: int) -> list[ValueHistoryEntry]:
        """List an asset's value history, newest first."""
        return self.history.list_history(asset_id)

    def get_summary(self) -> LedgerSummary:
        """Aggregate totals over active assets."""
        return self.summaries.get_summary()
