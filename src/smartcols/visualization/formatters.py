"""
Table formatters.

This module provides formatters that read a table's columns, line forest
and configuration and turn them into text. They never modify cell content
or tree links.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..table import TermForce
from .table import TableRenderer

if TYPE_CHECKING:
    from ..column import Column
    from ..line import Line
    from ..symbols import Symbols
    from ..table import Table

DEFAULT_COLUMN_SEPARATOR = " "
DEFAULT_LINE_SEPARATOR = "\n"


class BaseFormatter(Protocol):
    """Protocol for table formatters."""

    def format(self, table: Table) -> str:
        """
        Format a table into an output string.

        Args:
            table: Table to format

        Returns:
            Formatted string representation
        """
        ...


def _output_lines(table: Table) -> list[tuple[Line, int]]:
    """Lines in print order with their tree depth."""
    if table.is_tree:
        return list(table.iter_tree())
    return [(line, 0) for line in table.lines]


def _visible_columns(table: Table) -> list[Column]:
    return [column for column in table.columns if not column.hidden]


def _is_last_child(line: Line) -> bool:
    parent = line.parent
    return parent is None or parent.children[-1] is line


def tree_prefix(line: Line, symbols: Symbols) -> str:
    """
    Build the branch art drawn in front of a line's tree cell.

    Top-level lines get no prefix. Every ancestor below the top level
    contributes either a vertical connector (it has following siblings) or
    blank space of the same width.
    """
    if line.parent is None:
        return ""

    branch = symbols.branch or ""
    right = symbols.right or ""
    vertical = symbols.vertical or ""

    parts = [right if _is_last_child(line) else branch]
    node = line.parent
    while node is not None and node.parent is not None:
        parts.append(" " * len(vertical) if _is_last_child(node) else vertical)
        node = node.parent
    return "".join(reversed(parts))


def output_width(table: Table) -> int | None:
    """
    Width the aligned output has to fit into.

    The terminal width less the reserved reduction (ignored when it is not
    smaller than the width), or None when the output is never treated as a
    terminal.
    """
    if table.termforce is TermForce.NEVER:
        return None
    width = table.termwidth
    if 0 < table.termreduce < width:
        width -= table.termreduce
    return width


class TableFormatter:
    """Format a table as aligned columns, drawing branches in tree columns."""

    def format(self, table: Table) -> str:
        """
        Generate the header (unless disabled), the title and one row per line.

        Args:
            table: Table to format

        Returns:
            Table-formatted string
        """
        columns = _visible_columns(table)
        if not columns:
            return ""

        symbols = table.symbols
        if table.is_tree and symbols is None:
            symbols = table.set_default_symbols()

        rows: list[list[str]] = []
        for line, _depth in _output_lines(table):
            row: list[str] = []
            for column in columns:
                cell = line.get_column_cell(column)
                text = cell.data if cell is not None and cell.data is not None else ""
                if column.tree and symbols is not None:
                    text = tree_prefix(line, symbols) + text
                row.append(text)
            rows.append(row)

        separator = _column_separator(table)
        headers = None if table.noheadings else [column.name or "" for column in columns]
        renderer = TableRenderer(
            alignments=["r" if column.right else "l" for column in columns],
            separator=separator,
            min_widths=[
                int(column.whint) if column.strict_width and column.whint >= 1 else 0
                for column in columns
            ],
            maxout=table.maxout,
            max_width=output_width(table),
            truncatable=[column.trunc for column in columns],
            fill="." if table.padding_debug else " ",
        )
        output = renderer.render(headers, rows)

        title = table.title.data
        if title:
            widths = renderer.widths(headers, rows)
            width = sum(widths) + len(separator) * (len(widths) - 1)
            fill = (symbols.title_padding if symbols is not None else None) or " "
            output.insert(0, title.center(width, fill[0]).rstrip())

        return _join(table, output)


class RawFormatter:
    """Format a table as unaligned cells joined by the column separator."""

    def format(self, table: Table) -> str:
        """
        Generate one separator-joined row per line, header first.

        Args:
            table: Table to format

        Returns:
            Raw-formatted string
        """
        columns = _visible_columns(table)
        if not columns:
            return ""

        separator = _column_separator(table)
        output: list[str] = []
        if not table.noheadings:
            output.append(separator.join(column.name or "" for column in columns))
        for line, _depth in _output_lines(table):
            texts: list[str] = []
            for column in columns:
                cell = line.get_column_cell(column)
                texts.append(cell.data if cell is not None and cell.data is not None else "")
            output.append(separator.join(texts))
        return _join(table, output)


def _column_separator(table: Table) -> str:
    return table.column_separator or DEFAULT_COLUMN_SEPARATOR


def _join(table: Table, output: list[str]) -> str:
    if table.nolinesep:
        return "".join(output)
    return (table.line_separator or DEFAULT_LINE_SEPARATOR).join(output)
