"""Unit tests for show-week command."""

import json

import pytest
from click.testing import CliRunner

from src.cli.commands.week import show_week


class TestShowWeekCommand:
    """Test suite for show-week command."""

    @pytest.fixture
    def runner(self):
        """Create a Click CLI test runner."""
        return CliRunner()

    def test_show_week_help(self, runner):
        """Test that help text is displayed."""
        result = runner.invoke(show_week, ["--help"])
        assert result.exit_code == 0
        assert "--data" in result.output
        assert "--date" in result.output

    def test_show_week_requires_data(self, runner):
        """Test that the data file is required."""
        result = runner.invoke(show_week, [])
        assert result.exit_code != 0
        assert "--data" in result.output

    def test_show_week_with_bookings(self, runner, sample_data_file):
        """Test the matrix and bookings of a week with bookings."""
        result = runner.invoke(
            show_week, ["--data", str(sample_data_file), "--date", "2024-05-08"]
        )

        assert result.exit_code == 0
        assert "Week of 2024-05-06 to 2024-05-11" in result.output
        assert "Mon 2024-05-06" in result.output
        assert "Sat 2024-05-11" in result.output
        assert "Sun" not in result.output
        assert "booked" in result.output
        assert "buffer" in result.output
        assert "Acme / Brand refresh - Session for Brand re" in result.output
        assert "Found 2 booking(s)" in result.output

    def test_show_week_matrix_rows(self, runner, sample_data_file):
        """Test slot rows for the 14:00-16:00 booking on Monday."""
        result = runner.invoke(
            show_week, ["--data", str(sample_data_file), "--date", "2024-05-06"]
        )

        lines = matrix_rows(result.output)

        assert lines["13:00"][0] == "buffer"
        assert lines["14:00"][0] == "booked"
        assert lines["15:00"][0] == "booked"
        assert lines["16:00"][0] == "buffer"
        assert lines["17:00"][0] == "free"

    def test_show_week_without_bookings(self, runner, sample_data_file):
        """Test an empty week."""
        result = runner.invoke(
            show_week, ["--data", str(sample_data_file), "--date", "2024-06-12"]
        )

        assert result.exit_code == 0
        assert "No bookings this week." in result.output
        assert "booked" not in result.output

    def test_show_week_calendar_bounds_from_env(self, runner, sample_data_file, monkeypatch):
        """Test configured calendar hours change the displayed slots."""
        monkeypatch.setenv("CALENDAR_START_HOUR", "12")
        monkeypatch.setenv("CALENDAR_END_HOUR", "14")

        result = runner.invoke(
            show_week, ["--data", str(sample_data_file), "--date", "2024-05-06"]
        )

        assert result.exit_code == 0
        assert "12:00" in result.output
        assert "13:00" in result.output
        assert "09:00" not in result.output

    def test_show_week_invalid_date(self, runner, sample_data_file):
        """Test invalid date format is rejected."""
        result = runner.invoke(
            show_week, ["--data", str(sample_data_file), "--date", "08/05/2024"]
        )

        assert result.exit_code == 2
        assert "Invalid date" in result.output

    def test_show_week_invalid_json(self, runner, tmp_path):
        """Test unreadable data exits with the input error code."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        result = runner.invoke(show_week, ["--data", str(path)])

        assert result.exit_code == 2
        assert "Input Error" in result.output

    def test_show_week_invalid_config(self, runner, sample_data_file, monkeypatch):
        """Test invalid settings exit with the configuration error code."""
        monkeypatch.setenv("CALENDAR_END_HOUR", "30")

        result = runner.invoke(show_week, ["--data", str(sample_data_file)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_show_week_skips_records_without_times(self, runner, tmp_path, sample_data_document):
        """Test records without times do not break the calendar."""
        sample_data_document["bookings"].append({"id": "b-3", "clientId": "c-acme"})
        path = tmp_path / "export.json"
        path.write_text(json.dumps(sample_data_document), encoding="utf-8")

        result = runner.invoke(show_week, ["--data", str(path), "--date", "2024-05-08"])

        assert result.exit_code == 0
        assert "Found 2 booking(s)" in result.output

    def test_show_week_utc_export(self, runner, tmp_path, sample_data_document):
        """Test Z-suffixed timestamps render on the UTC calendar."""
        write_utc_export(tmp_path, sample_data_document)

        result = runner.invoke(
            show_week, ["--data", str(tmp_path / "export.json"), "--date", "2024-05-08"]
        )

        assert result.exit_code == 0
        assert "Found 2 booking(s)" in result.output
        rows = matrix_rows(result.output)
        assert rows["13:00"][0] == "buffer"
        assert rows["14:00"][0] == "booked"
        assert rows["15:00"][0] == "booked"
        assert rows["16:00"][0] == "buffer"

    def test_show_week_calendar_timezone(
        self, runner, tmp_path, sample_data_document, monkeypatch
    ):
        """Test UTC timestamps shift into CALENDAR_TIMEZONE."""
        monkeypatch.setenv("CALENDAR_TIMEZONE", "Europe/Berlin")
        write_utc_export(tmp_path, sample_data_document)

        result = runner.invoke(
            show_week, ["--data", str(tmp_path / "export.json"), "--date", "2024-05-06"]
        )

        assert result.exit_code == 0
        rows = matrix_rows(result.output)
        assert rows["14:00"][0] == "free"
        assert rows["15:00"][0] == "buffer"
        assert rows["16:00"][0] == "booked"
        assert rows["17:00"][0] == "booked"
        assert rows["18:00"][0] == "buffer"

    def test_show_week_unknown_timezone(self, runner, sample_data_file, monkeypatch):
        """Test an unknown CALENDAR_TIMEZONE is a configuration error."""
        monkeypatch.setenv("CALENDAR_TIMEZONE", "Mars/Olympus")

        result = runner.invoke(show_week, ["--data", str(sample_data_file)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output


def matrix_rows(output):
    """Map slot labels to the statuses of the days in that row.

    Matrix rows start with the slot label, e.g. "14:00  booked  free ...".
    """
    return {
        line.split()[0]: line.split()[1:]
        for line in output.splitlines()
        if line[:2].isdigit() and line[2:3] == ":"
    }


def write_utc_export(tmp_path, document):
    """Rewrite the booking times of an export with a Z suffix."""
    for booking in document["bookings"]:
        booking["startTime"] += "Z"
        booking["endTime"] += "Z"
    path = tmp_path / "export.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
