"""Summary and staleness domain service."""

import logging
from collections import defaultdict
from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import Optional

from assetledger.database.base import Database
from assetledger.domain.entities import (
    CategoryBreakdown,
    LedgerSummary,
    StaleAsset,
)

logger = logging.getLogger(__name__)


class SummaryService:
    """Service for building aggregate views over active assets.

    Nothing is cached: every call reads the active asset set from the database.
    """

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_summary(self) -> LedgerSummary:
        """Build totals over active assets.

        Returns:
            LedgerSummary with the total value, the asset count and a
            per-category breakdown ordered by category name
        """
        assets = self.db.list_assets(include_removed=False)

        counts: dict[str, int] = defaultdict(int)
        values: dict[str, Decimal] = defaultdict(Decimal)
        for asset in assets:
            counts[asset.category] += 1
            values[asset.category] += asset.current_value

        categories = tuple(
            CategoryBreakdown(category=name, count=counts[name], value=values[name])
            for name in sorted(counts)
        )
        total_value = sum((item.value for item in categories), Decimal("0"))

        logger.debug("Summarized %d active assets in %d categories", len(assets), len(categories))
        return LedgerSummary(
            total_value=total_value,
            total_count=len(assets),
            categories=categories,
        )

    def find_stale_assets(
        self,
        stale_days: int,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[StaleAsset]:
        """Find active assets whose value was last updated over stale_days ago.

        Args:
            stale_days: Age threshold in days; 0 or less disables the check
            category: Optional category filter
            now: Reference time (defaults to current UTC time)

        Returns:
            Stale assets, most recently updated first
        """
        if stale_days <= 0:
            return []

        now = now or datetime.now(UTC)
        threshold = now - timedelta(days=stale_days)
        stale = []
        for asset in self.db.list_assets(include_removed=False, category=category):
            if asset.last_updated < threshold:
                days_since = (now - asset.last_updated).days
                stale.append(StaleAsset(asset=asset, days_since_update=days_since))
        return stale
