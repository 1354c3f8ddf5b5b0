"""Tests for summary domain service."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest

from assetledger.domain.entities import CategoryBreakdown, LedgerSummary
from assetledger.domain.summary import SummaryService


def _find_category(summary, name):
    for item in summary.categories:
        if item.category == name:
            return item
    return None


def test_summary_excludes_removed_assets(ledger):
    ledger.create_asset(name="Car", category="Vehicle", current_value=18000.0)
    ledger.create_asset(name="Scooter", category="Vehicle", current_value=5000.0)
    removed = ledger.create_asset(name="Old Bike", category="Vehicle", current_value=999.0)
    ledger.remove_asset(removed)

    summary = ledger.get_summary()

    assert summary.total_value == 23000.0
    assert summary.total_count == 2
    assert summary.categories == (
        CategoryBreakdown(category="Vehicle", count=2, value=Decimal("23000.00")),
    )


def test_summary_empty_ledger(summary_service):
    summary = summary_service.get_summary()

    assert summary == LedgerSummary(total_value=Decimal("0"), total_count=0, categories=())


def test_summary_categories_sorted_by_name(ledger, summary_service):
    ledger.create_asset(name="Fund", category="investment", current_value=100)
    ledger.create_asset(name="House", category="Property", current_value=300)
    ledger.create_asset(name="Car", category="Vehicle", current_value=200)
    ledger.create_asset(name="Bonds", category="investment", current_value=50)

    summary = summary_service.get_summary()

    # Plain string ordering, so uppercase names sort first
    assert [item.category for item in summary.categories] == ["Property", "Vehicle", "investment"]
    assert _find_category(summary, "investment").count == 2
    assert _find_category(summary, "investment").value == Decimal("150")
    assert summary.total_value == Decimal("650")


def test_summary_total_matches_active_values(ledger, summary_service):
    ids = [
        ledger.create_asset(name=f"Asset {i}", category="Other", current_value=Decimal("10.25") * i)
        for i in range(1, 6)
    ]
    ledger.update_value(ids[0], Decimal("99.99"), "appraisal")
    ledger.remove_asset(ids[1])
    ledger.remove_asset(ids[2])
    ledger.restore_asset(ids[2])

    active = ledger.list_assets()
    summary = summary_service.get_summary()

    assert summary.total_value == sum(asset.current_value for asset in active)
    assert summary.total_count == len(active) == 4
    assert sum(item.value for item in summary.categories) == summary.total_value


def test_summary_is_recomputed_each_call(ledger, summary_service):
    asset_id = ledger.create_asset(name="Car", category="Vehicle", current_value=100)
    before = summary_service.get_summary()

    ledger.update_value(asset_id, 250, "repaint")
    after = summary_service.get_summary()

    assert before.total_value == Decimal("100")
    assert after.total_value == Decimal("250")


class TestStaleAssets:
    """Tests for stale asset detection."""

    def test_stale_assets_beyond_threshold(self, ledger, summary_service):
        asset_id = ledger.create_asset(name="Car", category="Vehicle", current_value=100)
        asset = ledger.get_asset(asset_id)
        later = asset.last_updated + timedelta(days=45)

        stale = summary_service.find_stale_assets(30, now=later)

        assert len(stale) == 1
        assert stale[0].asset.id == asset_id
        assert stale[0].days_since_update == 45
        assert stale[0].warning == f"Asset #{asset_id} 'Car' not updated in 45 days"

    def test_recent_assets_not_stale(self, ledger, summary_service):
        ledger.create_asset(name="Car", category="Vehicle", current_value=100)

        assert summary_service.find_stale_assets(30) == []

    def test_removed_assets_never_stale(self, ledger, summary_service):
        asset_id = ledger.create_asset(name="Car", category="Vehicle", current_value=100)
        ledger.remove_asset(asset_id)
        later = datetime.now(UTC) + timedelta(days=400)

        assert summary_service.find_stale_assets(30, now=later) == []

    @pytest.mark.parametrize("stale_days", [0, -5])
    def test_disabled_threshold(self, ledger, summary_service, stale_days):
        ledger.create_asset(name="Car", category="Vehicle", current_value=100)
        later = datetime.now(UTC) + timedelta(days=400)

        assert summary_service.find_stale_assets(stale_days, now=later) == []

    def test_stale_category_filter(self, ledger, summary_service):
        ledger.create_asset(name="Car", category="Vehicle", current_value=100)
        house = ledger.create_asset(name="House", category="Property", current_value=100)
        later = datetime.now(UTC) + timedelta(days=60)

        stale = summary_service.find_stale_assets(30, category="Property", now=later)

        assert [item.asset.id for item in stale] == [house]


def test_service_reads_through_database(temp_db):
    service = SummaryService(temp_db)
    assert service.db is temp_db
