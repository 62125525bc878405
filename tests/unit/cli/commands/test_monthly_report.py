"""Unit tests for monthly-report command."""

import json

import pytest
from click.testing import CliRunner

from src.cli.commands.monthly_report import monthly_report


class TestMonthlyReportCommand:
    """Test suite for monthly-report command."""

    @pytest.fixture
    def runner(self):
        """Create a Click CLI test runner."""
        return CliRunner()

    def test_monthly_report_help(self, runner):
        """Test that help text is displayed."""
        result = runner.invoke(monthly_report, ["--help"])
        assert result.exit_code == 0
        assert "--month" in result.output

    def test_monthly_report_requires_month(self, runner, sample_data_file):
        """Test that month parameter is required."""
        result = runner.invoke(monthly_report, ["--data", str(sample_data_file)])
        assert result.exit_code != 0
        assert "--month" in result.output

    def test_monthly_report_invalid_month_format(self, runner, sample_data_file):
        """Test that invalid month format is rejected."""
        result = runner.invoke(
            monthly_report, ["--data", str(sample_data_file), "--month", "2024-13"]
        )
        assert result.exit_code == 2
        assert "Invalid month" in result.output

    def test_monthly_report_per_client(self, runner, sample_data_file):
        """Test hours, rate and amount per client."""
        result = runner.invoke(
            monthly_report, ["--data", str(sample_data_file), "--month", "2024-05"]
        )

        assert result.exit_code == 0
        assert "Client report for 2024-05" in result.output
        assert "| Acme   | 2.0h  | 350.00 | 700.00 |" in result.output
        assert "| Globex | 1.5h  | 300.00 | 450.00 |" in result.output
        assert "2 client(s), 3.5h, total 1,150.00" in result.output

    def test_monthly_report_clients_sorted(self, runner, sample_data_file):
        """Test clients are listed alphabetically."""
        result = runner.invoke(
            monthly_report, ["--data", str(sample_data_file), "--month", "2024-05"]
        )
        assert result.output.index("Acme") < result.output.index("Globex")

    def test_monthly_report_empty_month(self, runner, sample_data_file):
        """Test a month without bookings."""
        result = runner.invoke(
            monthly_report, ["--data", str(sample_data_file), "--month", "2024-06"]
        )

        assert result.exit_code == 0
        assert "No bookings in 2024-06." in result.output

    def test_monthly_report_mixed_rates(self, runner, tmp_path):
        """Test a client with projects on different tiers."""
        bookings = [
            {
                "id": "b-brand",
                "startTime": "2024-05-06T09:00:00",
                "endTime": "2024-05-06T19:00:00",
                "clientId": "c-acme",
                "projectId": "p-brand",
            },
            {
                "id": "b-web-april",
                "startTime": "2024-04-01T08:00:00",
                "endTime": "2024-04-02T19:00:00",
                "clientId": "c-acme",
                "projectId": "p-web",
            },
            {
                "id": "b-web-may",
                "startTime": "2024-05-07T09:00:00",
                "endTime": "2024-05-07T14:00:00",
                "clientId": "c-acme",
                "projectId": "p-web",
            },
        ]
        document = {
            "clients": [{"id": "c-acme", "name": "Acme"}],
            "projects": [
                {"id": "p-brand", "name": "Brand refresh", "billingType": "package"},
                {"id": "p-web", "name": "Website", "billingType": "package"},
            ],
            "bookings": bookings,
        }
        path = tmp_path / "export.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        result = runner.invoke(monthly_report, ["--data", str(path), "--month", "2024-05"])

        assert result.exit_code == 0
        assert "| Acme   | 15.0h | 226.67 | 3,400.00 |" in result.output

    def test_monthly_report_custom_rate_table(self, runner, sample_data_file, monkeypatch):
        """Test the package rate table comes from configuration."""
        monkeypatch.setenv("PACKAGE_RATE_TIERS", '[{"min_hours": 0, "rate": 100}]')

        result = runner.invoke(
            monthly_report, ["--data", str(sample_data_file), "--month", "2024-05"]
        )

        assert result.exit_code == 0
        assert "| Acme   | 2.0h  | 100.00 | 200.00 |" in result.output

    def test_monthly_report_missing_file(self, runner, tmp_path):
        """Test a missing data file is a usage error."""
        result = runner.invoke(
            monthly_report, ["--data", str(tmp_path / "missing.json"), "--month", "2024-05"]
        )
        assert result.exit_code == 2

    def test_monthly_report_month_boundary_in_calendar_zone(
        self, runner, tmp_path, monkeypatch
    ):
        """Test a late UTC booking on May 31st counts toward June in Berlin."""
        monkeypatch.setenv("CALENDAR_TIMEZONE", "Europe/Berlin")
        document = {
            "clients": [{"id": "c-acme", "name": "Acme"}],
            "projects": [{"id": "p-brand", "name": "Brand refresh"}],
            "bookings": [
                {
                    "id": "b-1",
                    "startTime": "2024-05-31T22:30:00Z",
                    "endTime": "2024-05-31T23:30:00Z",
                    "clientId": "c-acme",
                    "projectId": "p-brand",
                }
            ],
        }
        path = tmp_path / "export.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        may = runner.invoke(monthly_report, ["--data", str(path), "--month", "2024-05"])
        june = runner.invoke(monthly_report, ["--data", str(path), "--month", "2024-06"])

        assert may.exit_code == 0
        assert "No bookings in 2024-05." in may.output
        assert "| Acme   | 1.0h  | 350.00 | 350.00 |" in june.output
