"""Unit tests for the validate command."""

import pytest
from click.testing import CliRunner

from fleet_billing.cli import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


def _write(tmp_path, text):
    path = tmp_path / "check.csv"
    path.write_text(text, encoding="utf-8")
    return path


class TestValidateCommand:
    """Test suite for validate command."""

    def test_clean_file(self, runner, tripsheet_csv):
        """Test the sample tripsheet passes."""
        result = runner.invoke(
            cli, ["validate", str(tripsheet_csv), "--month", "9", "--year", "2025"]
        )

        assert result.exit_code == 0, result.output
        assert "Validation Summary" in result.output
        assert "Rows checked:  4" in result.output
        assert "Validation passed! No issues found." in result.output

    def test_warnings_only(self, runner, tripsheet_csv):
        """Test that out-of-month entries are warnings."""
        result = runner.invoke(
            cli, ["validate", str(tripsheet_csv), "--month", "10", "--year", "2025"]
        )

        assert result.exit_code == 0
        assert "WARNINGS (4):" in result.output
        assert "Validation completed with 4 warning(s)" in result.output

    def test_errors_fail(self, runner, tmp_path):
        """Test that field errors give the data exit code."""
        path = _write(
            tmp_path,
            "Date,Starting KM,Closing KM,Starting Time\n"
            "2025-09-01,300,250,07:00\n"
            "2025-09-02,300,400,8.30\n",
        )

        result = runner.invoke(
            cli, ["validate", str(path), "--month", "9", "--year", "2025"]
        )

        assert result.exit_code == 3
        assert "ERRORS (2):" in result.output
        assert "closing_km" in result.output
        assert "starting_time" in result.output
        assert "Validation failed with 2 error(s)" in result.output

    def test_severity_filter(self, runner, tripsheet_csv):
        """Test that --severity error hides warnings."""
        result = runner.invoke(
            cli,
            [
                "validate",
                str(tripsheet_csv),
                "--month",
                "10",
                "--year",
                "2025",
                "--severity",
                "error",
            ],
        )

        assert result.exit_code == 0
        assert "WARNINGS (" not in result.output
        assert "Warnings:      4" in result.output

    def test_duplicate_dates(self, runner, tmp_path):
        """Test the duplicate date warning."""
        path = _write(tmp_path, "Date,Status\n2025-09-01,off\n01/09/2025,off\n")

        result = runner.invoke(
            cli, ["validate", str(path), "--month", "9", "--year", "2025"]
        )

        assert result.exit_code == 0
        assert "Date appears in 2 entries" in result.output
