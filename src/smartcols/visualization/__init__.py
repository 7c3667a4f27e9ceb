"""
Reference text output for tables.

Provides formatters that consume the entity model read-only:
- DEFAULT: aligned columns with tree branches (default)
- RAW: cells joined by the column separator

Example:
    from smartcols.visualization import format_table

    table.raw = True
    print(format_table(table))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..table import OutputFormat, Table


def format_table(table: Table, output_format: OutputFormat | None = None) -> str:
    """
    Format a table for display.

    Args:
        table: Table to format
        output_format: Output format; defaults to the table's own selector

    Returns:
        Formatted string ready for printing

    Raises:
        ValueError: If the format is JSON or EXPORT
    """
    from .factory import get_formatter

    formatter_instance = get_formatter(output_format or table.format)
    return formatter_instance.format(table)


def print_table(table: Table, output_format: OutputFormat | None = None) -> None:
    """Write the formatted table, followed by a newline, to the table's stream."""
    output = format_table(table, output_format)
    if output:
        table.stream.write(output + "\n")


__all__ = ["format_table", "print_table"]
