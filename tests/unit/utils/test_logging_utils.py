"""Tests for structured logging utilities."""

import datetime as dt
import logging
from decimal import Decimal

import pytest

from fleet_billing.models import TripsheetSummary
from fleet_billing.utils.logging_utils import (
    ContextFilter,
    LogContext,
    current_log_context,
    generate_correlation_id,
    log_function_call,
)


def _filtered_record() -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
    ContextFilter().filter(record)
    return record


class TestCorrelationId:
    """Test run id generation."""

    def test_short_hex_id(self):
        """Test that ids are 12 hex characters."""
        run_id = generate_correlation_id()

        assert len(run_id) == 12
        int(run_id, 16)

    def test_ids_unique(self):
        """Test that ids are unique."""
        ids = {generate_correlation_id() for _ in range(50)}
        assert len(ids) == 50


class TestLogContext:
    """Test thread-local log context."""

    def test_fields_reach_records(self):
        """Test that the filter stores context fields on records."""
        with LogContext(vehicle_number="TN 11U 0474", month=9):
            record = _filtered_record()

        assert record.context == {"vehicle_number": "TN 11U 0474", "month": 9}

    def test_none_fields_skipped(self):
        """Test that an unset --vehicle filter adds no field."""
        with LogContext(vehicle_number=None, month=9):
            assert current_log_context() == {"month": 9}

    def test_nesting_restores_outer_fields(self):
        """Test that inner contexts add to and then restore outer fields."""
        with LogContext(correlation_id="run-1", month=9):
            with LogContext(month=10, vehicle_number="TN 11U 0474"):
                assert _filtered_record().context == {
                    "correlation_id": "run-1",
                    "month": 10,
                    "vehicle_number": "TN 11U 0474",
                }
            assert _filtered_record().context == {
                "correlation_id": "run-1",
                "month": 9,
            }

    def test_cleared_after_exception(self):
        """Test that fields are removed when the block raises."""
        with pytest.raises(RuntimeError):
            with LogContext(month=9):
                raise RuntimeError("boom")

        assert _filtered_record().context == {}


class TestLogFunctionCall:
    """Test the call tracing decorator."""

    def test_logs_entry_and_exit(self, caplog):
        """Test that entry and exit with elapsed time are logged at DEBUG."""

        @log_function_call
        def add(x, y):
            return x + y

        with caplog.at_level(logging.DEBUG):
            assert add(2, 3) == 5

        assert "Entering add(2, 3)" in caplog.text
        assert "Exiting add after" in caplog.text
        assert " ms" in caplog.text

    def test_arguments_summarized(self, caplog):
        """Test that models show by type and collections by size."""

        @log_function_call
        def bill(summary, entries, adjustments=None, start=None):
            return adjustments

        summary = TripsheetSummary(
            total_working_days=1,
            total_off_days=0,
            total_kms=100,
            total_hours=Decimal("12.0"),
            total_extra_hours=Decimal("2.0"),
            total_driver_extra_hours=Decimal("0"),
        )

        with caplog.at_level(logging.DEBUG):
            bill(
                summary,
                [1, 2, 3],
                adjustments=Decimal("500"),
                start=dt.date(2025, 9, 1),
            )

        assert (
            "Entering bill(TripsheetSummary, list[3], "
            "adjustments=Decimal('500'), start=datetime.date(2025, 9, 1))"
        ) in caplog.text

    def test_quiet_above_debug(self, caplog):
        """Test that nothing is logged when DEBUG is disabled."""

        @log_function_call
        def add(x, y):
            return x + y

        with caplog.at_level(logging.INFO):
            add(1, 1)

        assert caplog.records == []

    def test_exception_logged_and_reraised(self, caplog):
        """Test that exceptions propagate after being logged."""

        @log_function_call
        def fail():
            raise ValueError("negative total")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                fail()

        assert "Exception in fail: ValueError: negative total" in caplog.text

    def test_preserves_metadata(self):
        """Test that functools.wraps keeps the name and docstring."""

        @log_function_call
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
