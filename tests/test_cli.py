"""Tests for asset ledger commands."""

import csv
import io
import json

import pytest
from assetledger.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def _add(cli_runner, temp_db, name, value, *extra):
    result = _invoke(cli_runner, temp_db, "add", name, "--value", value, *extra)
    assert result.exit_code == 0, result.output
    # Output looks like "Asset added successfully (ID: 1)"
    return int(result.output.split("ID:")[1].strip().rstrip(")"))


def test_add_asset(cli_runner, temp_db):
    """Test adding an asset with purchase details."""
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "2019 Honda Civic",
        "--category",
        "vehicle",
        "--value",
        "$18,000",
        "--purchase-price",
        "25000",
        "--purchase-date",
        "2019-06-15",
    )

    assert result.exit_code == 0
    assert "Asset added successfully (ID:" in result.output


def test_add_defaults_category_to_other(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Painting", "1200")

    result = _invoke(cli_runner, temp_db, "show", str(asset_id))

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["category"] == "other"
    assert data["current_value"] == 1200.0
    assert data["is_removed"] is False
    assert "removed_date" not in data


def test_add_requires_value(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "Car")

    assert result.exit_code != 0
    assert "--value" in result.output


@pytest.mark.parametrize(
    "extra",
    [
        ("--value", "lots"),
        ("--value", "100", "--purchase-date", "someday soon"),
        ("--value", "100", "--category", "  "),
    ],
)
def test_add_invalid_input(cli_runner, temp_db, extra):
    result = _invoke(cli_runner, temp_db, "add", "Car", *extra)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_update_asset(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000", "--category", "Vehicle")

    result = _invoke(cli_runner, temp_db, "update", str(asset_id), "18000", "--notes", "depreciation")

    assert result.exit_code == 0
    assert f"Asset {asset_id} updated successfully" in result.output
    assert "18,000.00" in result.output


def test_update_missing_asset_exit_code(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "update", "99", "100")

    assert result.exit_code == 3
    assert "Asset 99 not found" in result.output


def test_update_removed_asset_exit_code(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000")
    assert _invoke(cli_runner, temp_db, "remove", str(asset_id)).exit_code == 0

    result = _invoke(cli_runner, temp_db, "update", str(asset_id), "17000")

    assert result.exit_code == 4
    assert "removed" in result.output.lower()


def test_remove_and_restore(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000")

    result = _invoke(cli_runner, temp_db, "remove", str(asset_id))
    assert result.exit_code == 0
    assert f"Asset {asset_id} removed successfully" in result.output

    shown = json.loads(_invoke(cli_runner, temp_db, "show", str(asset_id)).output)
    assert shown["is_removed"] is True
    assert "removed_date" in shown

    result = _invoke(cli_runner, temp_db, "restore", str(asset_id))
    assert result.exit_code == 0
    assert f"Asset {asset_id} restored successfully" in result.output

    shown = json.loads(_invoke(cli_runner, temp_db, "show", str(asset_id)).output)
    assert shown["is_removed"] is False


def test_remove_invalid_date(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000")

    result = _invoke(cli_runner, temp_db, "remove", str(asset_id), "--date", "2000-01-01")

    assert result.exit_code == 1
    assert "earlier than the last update" in result.output


@pytest.mark.parametrize("command", ["remove", "restore", "show", "history"])
def test_missing_asset_commands(cli_runner, temp_db, command):
    result = _invoke(cli_runner, temp_db, command, "404")

    assert result.exit_code == 3
    assert "not found" in result.output


def test_list_json(cli_runner, temp_db):
    car = _add(cli_runner, temp_db, "Car", "20000", "--category", "Vehicle")
    house = _add(cli_runner, temp_db, "House", "450000", "--category", "Property")
    _invoke(cli_runner, temp_db, "remove", str(car))

    active = json.loads(_invoke(cli_runner, temp_db, "list").output)
    everything = json.loads(_invoke(cli_runner, temp_db, "list", "--all").output)
    vehicles = json.loads(_invoke(cli_runner, temp_db, "list", "--all", "--category", "Vehicle").output)

    assert active["total_count"] == 1
    assert [a["id"] for a in active["assets"]] == [house]
    assert everything["total_count"] == 2
    assert [a["id"] for a in vehicles["assets"]] == [car]
    assert "warnings" not in active


def test_list_pretty(cli_runner, temp_db):
    _add(cli_runner, temp_db, "Car", "20000")

    result = _invoke(cli_runner, temp_db, "list", "--pretty")

    assert result.exit_code == 0
    assert '\n  "total_count": 1' in result.output


def test_list_csv(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000", "--category", "Vehicle", "--notes", "Blue, metallic")

    result = _invoke(cli_runner, temp_db, "list", "--csv")

    assert result.exit_code == 0
    rows = list(csv.DictReader(io.StringIO(result.output)))
    assert len(rows) == 1
    assert rows[0]["id"] == str(asset_id)
    assert rows[0]["current_value"] == "20000.00"
    assert rows[0]["is_removed"] == "false"
    assert rows[0]["notes"] == "Blue, metallic"
    assert rows[0]["stale_warning"] == ""


def test_list_stale_days_validation(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "list", "--stale-days", "-1")

    assert result.exit_code == 2


def test_history_json(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000", "--category", "Vehicle")
    _invoke(cli_runner, temp_db, "update", str(asset_id), "18000", "--notes", "depreciation")

    result = _invoke(cli_runner, temp_db, "history", str(asset_id))

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["asset"]["id"] == asset_id
    assert [entry["value"] for entry in data["history"]] == [18000.0, 20000.0]
    assert data["history"][0]["notes"] == "depreciation"
    assert data["history"][1]["notes"] == "Initial value"


def test_backfill_command(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Car", "20000")

    result = _invoke(cli_runner, temp_db, "backfill", str(asset_id), "24000", "--date", "2020-01-01")
    assert result.exit_code == 0
    assert "2020-01-01" in result.output

    data = json.loads(_invoke(cli_runner, temp_db, "history", str(asset_id)).output)
    assert [entry["value"] for entry in data["history"]] == [20000.0, 24000.0]
    assert data["asset"]["current_value"] == 20000.0


def test_summary_json(cli_runner, temp_db):
    _add(cli_runner, temp_db, "Car", "18000", "--category", "Vehicle")
    _add(cli_runner, temp_db, "Scooter", "5000", "--category", "Vehicle")
    old = _add(cli_runner, temp_db, "Bike", "999", "--category", "Vehicle")
    _invoke(cli_runner, temp_db, "remove", str(old))

    result = _invoke(cli_runner, temp_db, "summary")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["total_value"] == 23000.0
    assert data["total_count"] == 2
    assert data["categories"] == [{"category": "Vehicle", "count": 2, "value": 23000.0}]


def test_summary_empty(cli_runner, temp_db):
    data = json.loads(_invoke(cli_runner, temp_db, "summary").output)

    assert data == {"total_value": 0.0, "total_count": 0, "categories": []}


def test_help_does_not_open_database(cli_runner, tmp_path):
    db_path = tmp_path / "never-created.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "Exit codes" in result.output
    assert not db_path.exists()


def test_db_path_from_environment(cli_runner, tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("ASSET_LEDGER_DB_PATH", str(db_path))

    result = cli_runner.invoke(cli, ["add", "Car", "--value", "1"])

    assert result.exit_code == 0
    assert db_path.exists()


def test_update_rejects_excess_precision(cli_runner, temp_db):
    asset_id = _add(cli_runner, temp_db, "Token", "0.5")

    result = _invoke(cli_runner, temp_db, "update", str(asset_id), "0.123456789")

    assert result.exit_code == 1
    assert "decimal places" in result.output


def test_package_exposes_main():
    import assetledger
    from assetledger.cli.main import main

    assert assetledger.main is main
    with pytest.raises(AttributeError):
        assetledger.not_a_command
