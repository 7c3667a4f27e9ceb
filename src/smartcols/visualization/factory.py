"""
Formatter factory for table output.

Provides factory function to create appropriate formatter instances
based on the table's output format selector.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..table import OutputFormat
from .formatters import RawFormatter, TableFormatter

if TYPE_CHECKING:
    from .formatters import BaseFormatter


def get_formatter(output_format: OutputFormat) -> BaseFormatter:
    """
    Get formatter instance for the requested output format.

    Args:
        output_format: Desired format (DEFAULT or RAW)

    Returns:
        Formatter instance matching the requested format

    Raises:
        ValueError: If the format has no formatter here (JSON and EXPORT
            are produced by dedicated emitters)
    """
    if output_format == OutputFormat.DEFAULT:
        return TableFormatter()

    if output_format == OutputFormat.RAW:
        return RawFormatter()

    raise ValueError(f"Unsupported output format: {output_format.value}")
