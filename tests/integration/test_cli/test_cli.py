"""Integration tests for the `wyo-alerts` CLI.

Database work is mocked; these tests cover argument handling and output.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from wyo_alerts.cli.app import app
from wyo_alerts.core.errors import LegislatorImportError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


class TestDistrictsLookup:
    """Tests for `wyo-alerts districts lookup`."""

    def test_zip_lookup_prints_json(self) -> None:
        result = runner.invoke(app, ["districts", "lookup", "--zip", "82001"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(d["chamber"], d["code"]) for d in data["exact"]] == [("house", "07"), ("senate", "04")]

    def test_address_lookup(self) -> None:
        result = runner.invoke(app, ["districts", "lookup", "--address", "9 Pine St, Gillette, WY"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["exact"] == []
        assert data["possible"]

    def test_invalid_zip_exits_1(self) -> None:
        result = runner.invoke(app, ["districts", "lookup", "--zip", "90210"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_input_exits_1(self) -> None:
        result = runner.invoke(app, ["districts", "lookup"])
        assert result.exit_code == 1
        assert "Address or ZIP required" in result.output


class TestLegislatorsImport:
    """Tests for `wyo-alerts legislators import`."""

    def test_import_reports_count(self) -> None:
        with patch(
            "wyo_alerts.services.legislator_service.import_legislators",
            new_callable=AsyncMock,
            return_value=92,
        ) as mock_import:
            result = runner.invoke(app, ["legislators", "import"])
        assert result.exit_code == 0, result.output
        assert "Imported 92 legislators" in result.output
        assert mock_import.await_args.args[1] is None

    def test_import_from_file(self, tmp_path) -> None:
        roster = [{"name": "Ann Senator", "district_code": "04", "chamber": "senate"}]
        path = tmp_path / "roster.json"
        path.write_text(json.dumps(roster))
        with patch(
            "wyo_alerts.services.legislator_service.import_legislators",
            new_callable=AsyncMock,
            return_value=1,
        ) as mock_import:
            result = runner.invoke(app, ["legislators", "import", "--file", str(path)])
        assert result.exit_code == 0, result.output
        assert mock_import.await_args.args[1] == roster

    def test_import_failure_exits_1(self) -> None:
        with patch(
            "wyo_alerts.services.legislator_service.import_legislators",
            new_callable=AsyncMock,
            side_effect=LegislatorImportError("Failed to import legislators"),
        ):
            result = runner.invoke(app, ["legislators", "import"])
        assert result.exit_code == 1


class TestDbCommands:
    """Tests for `wyo-alerts db`."""

    def test_upgrade_defaults_to_head(self) -> None:
        with patch("alembic.command.upgrade") as mock_upgrade:
            result = runner.invoke(app, ["db", "upgrade"])
        assert result.exit_code == 0, result.output
        assert mock_upgrade.call_args.args[1] == "head"

    def test_downgrade_defaults_to_previous(self) -> None:
        with patch("alembic.command.downgrade") as mock_downgrade:
            result = runner.invoke(app, ["db", "downgrade"])
        assert result.exit_code == 0, result.output
        assert mock_downgrade.call_args.args[1] == "-1"
