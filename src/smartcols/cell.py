"""Cell slots and the stock cell comparators.

Cell content is opaque to the entity model: lines only guarantee that a slot
exists for every column. The comparators here are the ones columns usually
attach for sorting.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

CellComparator = Callable[["Cell", "Cell", Any], int]
"""Total order over two cells plus an opaque context value."""


@dataclass
class Cell:
    """
    One per-(line, column) content slot.

    Attributes:
        data: Cell text, or None for an empty cell
        color: Optional color name or escape sequence for the renderer
        userdata: Opaque caller value, never interpreted
        flags: Renderer-specific alignment bits
    """

    data: str | None = None
    color: str | None = None
    userdata: Any = None
    flags: int = 0

    def set_data(self, data: str | None) -> None:
        self.data = data

    def reset(self) -> None:
        """Clear content, color and user data."""
        self.data = None
        self.color = None
        self.userdata = None
        self.flags = 0

    def copy(self) -> Cell:
        """Return an independent copy of data, color and flags."""
        return Cell(data=self.data, color=self.color, userdata=self.userdata, flags=self.flags)

    def copy_content(self, other: Cell) -> None:
        """Overwrite this cell's data and color with ``other``'s."""
        self.data = other.data
        self.color = other.color
        self.userdata = other.userdata

    def __str__(self) -> str:
        return self.data or ""


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def cmpstr_cells(a: Cell, b: Cell, data: Any = None) -> int:
    """Compare cells as strings. Empty cells sort first."""
    if a.data is None and b.data is None:
        return 0
    if a.data is None:
        return -1
    if b.data is None:
        return 1
    return _cmp(a.data, b.data)


def cmpnum_cells(a: Cell, b: Cell, data: Any = None) -> int:
    """
    Compare cells numerically.

    Cells that do not parse as finite decimal numbers sort after numeric
    ones and are ordered among themselves as strings. Underscore digit
    separators, infinities and NaN count as non-numeric.
    """
    na = _to_number(a.data)
    nb = _to_number(b.data)
    if na is None and nb is None:
        return cmpstr_cells(a, b, data)
    if na is None:
        return 1
    if nb is None:
        return -1
    return _cmp(na, nb)


def _to_number(value: str | None) -> float | None:
    if value is None or "_" in value:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None
