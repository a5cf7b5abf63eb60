"""CLI utility functions."""

from fleet_billing.cli.utils.formatters import (
    format_error,
    format_header,
    format_info,
    format_line_items,
    format_optional,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_error",
    "format_header",
    "format_info",
    "format_line_items",
    "format_optional",
    "format_success",
    "format_table",
    "format_warning",
]
