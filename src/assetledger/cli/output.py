"""Serialization of ledger results for command output."""

import csv
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional, TextIO

from assetledger.domain.entities import (
    Asset,
    LedgerSummary,
    StaleAsset,
    ValueHistoryEntry,
)

CSV_COLUMNS = (
    "id",
    "name",
    "category",
    "purchase_price",
    "purchase_date",
    "current_value",
    "date_added",
    "last_updated",
    "is_removed",
    "removed_date",
    "notes",
    "stale_warning",
)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(data: Any, pretty: bool = False) -> str:
    """Encode data as JSON, indenting when pretty is set."""
    if pretty:
        return json.dumps(data, default=_json_default, indent=2)
    return json.dumps(data, default=_json_default)


def asset_to_dict(asset: Asset) -> dict[str, Any]:
    """Convert an asset to a JSON-ready dictionary, omitting empty optionals."""
    data: dict[str, Any] = {
        "id": asset.id,
        "name": asset.name,
        "category": asset.category,
        "current_value": asset.current_value,
        "date_added": asset.date_added,
        "last_updated": asset.last_updated,
        "is_removed": asset.is_removed,
    }
    if asset.purchase_price is not None:
        data["purchase_price"] = asset.purchase_price
    if asset.purchase_date is not None:
        data["purchase_date"] = asset.purchase_date
    if asset.removed_at is not None:
        data["removed_date"] = asset.removed_at
    if asset.notes:
        data["notes"] = asset.notes
    return data


def history_entry_to_dict(entry: ValueHistoryEntry) -> dict[str, Any]:
    """Convert a value history entry to a JSON-ready dictionary."""
    data: dict[str, Any] = {
        "id": entry.id,
        "asset_id": entry.asset_id,
        "value": entry.value,
        "recorded_date": entry.recorded_date,
        "created_at": entry.created_at,
    }
    if entry.notes:
        data["notes"] = entry.notes
    return data


def summary_to_dict(summary: LedgerSummary) -> dict[str, Any]:
    """Convert a ledger summary to a JSON-ready dictionary."""
    return {
        "total_value": summary.total_value,
        "total_count": summary.total_count,
        "categories": [
            {"category": item.category, "count": item.count, "value": item.value}
            for item in summary.categories
        ],
    }


def _money(value: Optional[Decimal]) -> str:
    return "" if value is None else f"{value:.2f}"


def _day(value: Optional[date]) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def write_assets_csv(
    stream: TextIO, assets: Iterable[Asset], stale: Iterable[StaleAsset] = ()
) -> None:
    """Write assets as CSV rows with a stale warning column."""
    stale_days = {item.asset.id: item.days_since_update for item in stale}
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for asset in assets:
        warning = ""
        if asset.id in stale_days:
            warning = f"Not updated in {stale_days[asset.id]} days"
        writer.writerow(
            [
                asset.id,
                asset.name,
                asset.category,
                _money(asset.purchase_price),
                _day(asset.purchase_date),
                _money(asset.current_value),
                _day(asset.date_added),
                _day(asset.last_updated),
                "true" if asset.is_removed else "false",
                _day(asset.removed_at),
                asset.notes or "",
                warning,
            ]
        )
