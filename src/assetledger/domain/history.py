"""Value history domain service."""

from assetledger.database.base import Database
from assetledger.domain.entities import ValueHistoryEntry
from assetledger.domain.errors import NotFoundError, asset_not_found


class ValueHistoryService:
    """Read access to the append-only value history.

    Entries are written only by ``AssetLedger`` so that every value change and
    its history row land in the same transaction.
    """

    def __init__(self, db: Database):
        """Initialize value history service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_history(self, asset_id: int) -> list[ValueHistoryEntry]:
        """List value history for an asset.

        Args:
            asset_id: Asset ID

        Returns:
            Entries ordered by recorded date, newest first; entries recorded
            on the same date are ordered newest insert first

        Raises:
            NotFoundError: If the asset does not exist
        """
        if self.db.get_asset(asset_id) is None:
            raise NotFoundError(asset_not_found(asset_id))
        return self.db.list_value_history(asset_id)
