"""
Column-aligned text renderer.

This module provides a TableRenderer class that lays out already-extracted
header and cell strings into aligned columns.
"""

from __future__ import annotations


class TableRenderer:
    """Render headers and rows as column-aligned text.

    Example output:
        NAME      SIZE
        item-1      10
        item-2       5
    """

    def __init__(
        self,
        alignments: list[str] | None = None,
        separator: str = " ",
        min_widths: list[int] | None = None,
        maxout: bool = False,
        max_width: int | None = None,
        truncatable: list[bool] | None = None,
        fill: str = " ",
    ) -> None:
        """Initialize the table renderer.

        Args:
            alignments: List of alignments per column ('l' or 'r').
                       Defaults to left-aligned for all columns.
            separator: String placed between adjacent columns
            min_widths: Per-column minimum widths; a column never shrinks
                       below its minimum
            maxout: Pad the last column too instead of trimming trailing space
            max_width: Total line width to fit into, or None for no limit
            truncatable: Per-column flags; flagged columns are shrunk first
            fill: Padding character
        """
        self._alignments = alignments
        self._separator = separator
        self._min_widths = min_widths
        self._maxout = maxout
        self._max_width = max_width
        self._truncatable = truncatable
        self._fill = fill

    def widths(self, headers: list[str] | None, rows: list[list[str]]) -> list[int]:
        """Calculate column widths, shrunk to ``max_width`` if one is set."""
        ncols = len(headers) if headers is not None else max((len(r) for r in rows), default=0)
        widths = [len(h) for h in headers] if headers is not None else [0] * ncols
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(cell))
        if self._min_widths:
            for i, minimum in enumerate(self._min_widths):
                if i < len(widths):
                    widths[i] = max(widths[i], minimum)
        if self._max_width is not None:
            self._fit(widths)
        return widths

    def _fit(self, widths: list[int]) -> None:
        assert self._max_width is not None
        total = sum(widths) + len(self._separator) * max(len(widths) - 1, 0)
        excess = total - self._max_width
        if excess <= 0:
            return

        minimums = [
            max(self._min_widths[i] if self._min_widths and i < len(self._min_widths) else 0, 1)
            for i in range(len(widths))
        ]
        truncatable = self._truncatable or []
        # truncatable columns first, widest first within each group
        order = sorted(
            range(len(widths)),
            key=lambda i: (not (i < len(truncatable) and truncatable[i]), -widths[i]),
        )
        for i in order:
            if excess <= 0:
                break
            cut = min(excess, widths[i] - minimums[i])
            if cut > 0:
                widths[i] -= cut
                excess -= cut

    def render(self, headers: list[str] | None, rows: list[list[str]]) -> list[str]:
        """Render headers and rows as aligned text lines.

        Cells wider than their column are cut, and lines still longer than
        ``max_width`` (columns at their minimum) are clipped.

        Args:
            headers: List of column header names, or None to omit the header
            rows: List of rows, each row is a list of cell values

        Returns:
            One string per output line, header first
        """
        widths = self.widths(headers, rows)
        if not widths:
            return []

        # Default to left alignment
        alignments = self._alignments if self._alignments else ["l"] * len(widths)

        lines: list[str] = []
        if headers is not None:
            lines.append(self._render_row(headers, widths, alignments))
        for row in rows:
            lines.append(self._render_row(row, widths, alignments))
        if self._max_width is not None:
            lines = [line[: self._max_width] for line in lines]
        return lines

    def _render_row(self, row: list[str], widths: list[int], alignments: list[str]) -> str:
        cells = []
        for i, cell in enumerate(row):
            w = widths[i] if i < len(widths) else len(cell)
            cell = cell[:w]
            align = alignments[i] if i < len(alignments) else "l"
            if align == "r":
                cells.append(cell.rjust(w, self._fill))
            else:
                cells.append(cell.ljust(w, self._fill))
        line = self._separator.join(cells)
        return line if self._maxout else line.rstrip(" ")
