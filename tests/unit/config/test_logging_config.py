"""Tests for centralized logging configuration."""

import datetime as dt
import json
import logging
from decimal import Decimal

import pytest

from fleet_billing.config.logging_config import (
    PACKAGE_LOGGER,
    ContextFormatter,
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    reset_logging,
)
from fleet_billing.utils.logging_utils import LogContext


def _record(message="Aggregating entries", context=None):
    record = logging.LogRecord(
        name="fleet_billing.aggregators",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=None,
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


def _flush():
    for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
        handler.flush()


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_configuration(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.log_level == "WARNING"
        assert config.log_format == "standard"
        assert config.log_file is None

    def test_level_normalized(self):
        """Test that levels are accepted in any case."""
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_level_rejected(self):
        """Test that unknown levels raise ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(log_level="LOUD")

    def test_invalid_format_rejected(self):
        """Test that unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(log_format="xml")

    @pytest.mark.parametrize(
        "log_format,formatter_type",
        [("standard", ContextFormatter), ("json", JSONFormatter)],
    )
    def test_formatter_for_format(self, log_format, formatter_type):
        """Test that each format selects its formatter."""
        formatter = LoggingConfig(log_format=log_format).formatter()
        assert isinstance(formatter, formatter_type)


class TestConfigureLogging:
    """Test package logger setup."""

    def test_package_logger_configured(self):
        """Test that one stderr handler is installed at the configured level."""
        configure_logging(LoggingConfig(log_level="DEBUG"))
        package_logger = logging.getLogger(PACKAGE_LOGGER)

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_root_logger_untouched(self):
        """Test that other libraries' logging is left alone."""
        root = logging.getLogger()
        handlers_before = list(root.handlers)

        configure_logging(LoggingConfig(log_level="DEBUG"))

        assert root.handlers == handlers_before

    def test_reconfigure_does_not_duplicate_handlers(self):
        """Test that configuring twice replaces handlers."""
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())

        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1

    def test_file_handler(self, tmp_path):
        """Test that records and their context reach the rotating log file."""
        log_file = tmp_path / "logs" / "fleet.log"
        configure_logging(LoggingConfig(log_file=log_file))

        with LogContext(vehicle_number="TN 11U 0474", month=9):
            logging.getLogger("fleet_billing.calculators").warning(
                "Default rate table applied"
            )
        _flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert "WARNING - fleet_billing.calculators - Default rate table" in line
        assert line.endswith("[vehicle_number=TN 11U 0474 month=9]")

    def test_records_below_level_dropped(self, tmp_path):
        """Test that DEBUG records are not written at WARNING."""
        log_file = tmp_path / "fleet.log"
        configure_logging(LoggingConfig(log_file=log_file))

        logging.getLogger("fleet_billing.aggregators").debug("Summing entries")
        _flush()

        assert log_file.read_text(encoding="utf-8") == ""

    def test_reset_logging(self):
        """Test that reset removes handlers and clears the level."""
        configure_logging(LoggingConfig(log_level="DEBUG"))

        reset_logging()

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert package_logger.handlers == []
        assert package_logger.level == logging.NOTSET


class TestContextFormatter:
    """Test the standard text format."""

    def test_without_context(self):
        """Test that records without context are left as they are."""
        text = ContextFormatter().format(_record())
        assert text.endswith(
            " - INFO - fleet_billing.aggregators - Aggregating entries"
        )

    def test_context_appended(self):
        """Test that context fields follow the message."""
        record = _record(context={"correlation_id": "3f9c0d2a71b4", "year": 2025})

        text = ContextFormatter().format(record)

        assert text.endswith(
            "Aggregating entries [correlation_id=3f9c0d2a71b4 year=2025]"
        )


class TestJSONFormatter:
    """Test structured JSON output."""

    def test_basic_fields(self):
        """Test that standard fields are present."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "fleet_billing.aggregators"
        assert data["message"] == "Aggregating entries"
        assert "timestamp" in data
        assert "context" not in data

    def test_context_values_serialized(self):
        """Test that Decimal and date context values are written as strings."""
        record = _record(
            context={
                "vehicle_number": "TN 11U 0474",
                "total_amount": Decimal("72300.00"),
                "period_start": dt.date(2025, 9, 1),
            }
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["context"] == {
            "vehicle_number": "TN 11U 0474",
            "total_amount": "72300.00",
            "period_start": "2025-09-01",
        }

    def test_context_reaches_json_log_file(self, tmp_path):
        """Test that LogContext fields appear in JSON log lines."""
        log_file = tmp_path / "fleet.json.log"
        configure_logging(
            LoggingConfig(log_level="INFO", log_format="json", log_file=log_file)
        )

        with LogContext(vehicle_number="KA 01 AB 1234", month=9):
            logging.getLogger("fleet_billing.test").info("Billing vehicle")
        _flush()

        data = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert data["message"] == "Billing vehicle"
        assert data["context"] == {"vehicle_number": "KA 01 AB 1234", "month": 9}
