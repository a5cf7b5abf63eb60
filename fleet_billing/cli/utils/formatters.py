"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

import click

from fleet_billing.utils.formatting import format_indian_currency


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_header(title: str, width: int = 60) -> str:
    """Format a section title between two rules."""
    rule = "=" * width
    return f"{rule}\n{click.style(title, bold=True)}\n{rule}"


def format_optional(value: Optional[Union[int, Decimal, str]]) -> str:
    """Render a missing value as a dash."""
    return "-" if value is None else str(value)


def format_table(
    headers: List[str], rows: Sequence[Sequence[object]], max_width: int = 80
) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: Data rows (each row is a sequence of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))

    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def _format_row(cells: Sequence[object]) -> str:
        formatted = [
            f" {str(cell)[:width]:<{width}} " for cell, width in zip(cells, col_widths)
        ]
        return "|" + "|".join(formatted) + "|"

    table_lines = [separator, _format_row(headers), separator]
    if rows:
        table_lines.extend(_format_row(row) for row in rows)
        table_lines.append(separator)

    return "\n".join(table_lines)


def format_line_items(items: Sequence[Tuple[str, str, Decimal]]) -> str:
    """Format invoice or payslip line items as a three-column table.

    Args:
        items: (description, basis, amount) triples

    Returns:
        Table with amounts rendered as rupees
    """
    rows = [
        [description, basis, format_indian_currency(amount)]
        for description, basis, amount in items
    ]
    return format_table(["Item", "Basis", "Amount"], rows)
