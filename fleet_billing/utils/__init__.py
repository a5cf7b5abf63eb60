"""Shared utilities for logging context and Indian number formatting."""

from fleet_billing.utils.formatting import (
    format_indian_compact,
    format_indian_currency,
    format_indian_number,
    generate_serial_number,
    parse_indian_number,
)
from fleet_billing.utils.logging_utils import LogContext, log_function_call

__all__ = [
    "LogContext",
    "format_indian_compact",
    "format_indian_currency",
    "format_indian_number",
    "generate_serial_number",
    "log_function_call",
    "parse_indian_number",
]
