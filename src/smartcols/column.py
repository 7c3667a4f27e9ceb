"""Columns: the vertical slots of a table."""

from __future__ import annotations

import logging
import weakref
from enum import IntFlag
from typing import TYPE_CHECKING, Any

from .cell import Cell, CellComparator
from .exceptions import InvalidArgumentError
from .refcount import RefCounted

if TYPE_CHECKING:
    from .table import Table

logger = logging.getLogger(__name__)


class ColumnFlags(IntFlag):
    """Column behaviour bits."""

    TRUNC = 1 << 0  # truncate when the column does not fit
    TREE = 1 << 1  # carries the tree branches
    RIGHT = 1 << 2  # right aligned
    STRICTWIDTH = 1 << 3  # never shrink below the width hint
    NOEXTREMES = 1 << 4  # ignore unusually long cells when sizing
    HIDDEN = 1 << 5  # not printed
    WRAP = 1 << 6  # wrap long cells onto continuation lines


class Column(RefCounted):
    """
    One vertical slot of a table.

    A column belongs to at most one table at a time. Once added, its
    ``seqnum`` is its 0-based position in the table and the index of its
    cell in every line of that table.

    The width hint is either a fraction of the available width
    (``0 <= whint < 1``) or an absolute number of characters
    (``whint >= 1``). Enforcing it is the renderer's business.

    Example:
        name = Column("NAME", 0.5, tree=True)
        size = Column("SIZE", 5, ColumnFlags.RIGHT)
        size.set_cmpfunc(cmpnum_cells)
    """

    def __init__(
        self,
        name: str | None = None,
        whint: float = 0,
        flags: ColumnFlags | int = 0,
        *,
        tree: bool = False,
        right: bool = False,
    ) -> None:
        super().__init__()
        self._header = Cell(data=name)
        self._whint = _checked_whint(whint)
        self._flags = ColumnFlags(flags)
        if tree:
            self._flags |= ColumnFlags.TREE
        if right:
            self._flags |= ColumnFlags.RIGHT
        self._seqnum = 0
        self._table: weakref.ReferenceType[Table] | None = None
        self._cmpfunc: CellComparator | None = None
        self._cmpfunc_data: Any = None
        self.color: str | None = None

    # -------------------------------------------------------------------------
    # Identity and ownership
    # -------------------------------------------------------------------------

    @property
    def seqnum(self) -> int:
        """Position within the owning table (0 when unbound)."""
        return self._seqnum

    @property
    def table(self) -> Table | None:
        """The owning table, or None."""
        return self._table() if self._table is not None else None

    def _bind(self, table: Table, seqnum: int) -> None:
        self._table = weakref.ref(table)
        self._seqnum = seqnum

    def _unbind(self) -> None:
        self._table = None
        self._seqnum = 0

    # -------------------------------------------------------------------------
    # Header and layout hints
    # -------------------------------------------------------------------------

    @property
    def header(self) -> Cell:
        """Header cell; its data is the column name."""
        return self._header

    @property
    def name(self) -> str | None:
        return self._header.data

    @name.setter
    def name(self, value: str | None) -> None:
        self._header.set_data(value)

    @property
    def whint(self) -> float:
        return self._whint

    @whint.setter
    def whint(self, value: float) -> None:
        self._whint = _checked_whint(value)

    @property
    def is_relative_width(self) -> bool:
        """True if the width hint is a fraction of the available width."""
        return self._whint < 1

    @property
    def flags(self) -> ColumnFlags:
        return self._flags

    @flags.setter
    def flags(self, value: ColumnFlags | int) -> None:
        self.set_flags(value)

    def set_flags(self, flags: ColumnFlags | int) -> None:
        """
        Replace the flag set.

        Toggling ``TREE`` on a column that is already part of a table keeps
        that table's tree-column count in sync.
        """
        flags = ColumnFlags(flags)
        table = self.table
        if table is not None:
            was_tree = ColumnFlags.TREE in self._flags
            is_tree = ColumnFlags.TREE in flags
            if is_tree and not was_tree:
                table._ntreecols += 1
            elif was_tree and not is_tree:
                table._ntreecols -= 1
        logger.debug("column %r: flags %r -> %r", self.name, self._flags, flags)
        self._flags = flags

    def _set_flag(self, flag: ColumnFlags, enable: bool) -> None:
        self.set_flags(self._flags | flag if enable else self._flags & ~flag)

    @property
    def tree(self) -> bool:
        return ColumnFlags.TREE in self._flags

    @tree.setter
    def tree(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.TREE, enable)

    @property
    def trunc(self) -> bool:
        return ColumnFlags.TRUNC in self._flags

    @trunc.setter
    def trunc(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.TRUNC, enable)

    @property
    def right(self) -> bool:
        return ColumnFlags.RIGHT in self._flags

    @right.setter
    def right(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.RIGHT, enable)

    @property
    def strict_width(self) -> bool:
        return ColumnFlags.STRICTWIDTH in self._flags

    @strict_width.setter
    def strict_width(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.STRICTWIDTH, enable)

    @property
    def noextremes(self) -> bool:
        return ColumnFlags.NOEXTREMES in self._flags

    @noextremes.setter
    def noextremes(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.NOEXTREMES, enable)

    @property
    def hidden(self) -> bool:
        return ColumnFlags.HIDDEN in self._flags

    @hidden.setter
    def hidden(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.HIDDEN, enable)

    @property
    def wrap(self) -> bool:
        return ColumnFlags.WRAP in self._flags

    @wrap.setter
    def wrap(self, enable: bool) -> None:
        self._set_flag(ColumnFlags.WRAP, enable)

    # -------------------------------------------------------------------------
    # Sorting
    # -------------------------------------------------------------------------

    @property
    def cmpfunc(self) -> CellComparator | None:
        return self._cmpfunc

    @property
    def cmpfunc_data(self) -> Any:
        return self._cmpfunc_data

    def set_cmpfunc(self, cmpfunc: CellComparator | None, data: Any = None) -> None:
        """
        Attach the comparator used when the table is sorted by this column.

        Args:
            cmpfunc: ``cmpfunc(a, b, data)`` returning <0, 0 or >0, or None
                to detach the current comparator
            data: Opaque context handed to every ``cmpfunc`` call
        """
        if cmpfunc is not None and not callable(cmpfunc):
            raise InvalidArgumentError("cmpfunc", "comparator must be callable")
        self._cmpfunc = cmpfunc
        self._cmpfunc_data = data

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def copy(self) -> Column:
        """Return an unbound copy with the same header, hints, flags and comparator."""
        new = Column(whint=self._whint, flags=self._flags)
        new._header = self._header.copy()
        new.color = self.color
        new._cmpfunc = self._cmpfunc
        new._cmpfunc_data = self._cmpfunc_data
        logger.debug("copy column %r", self.name)
        return new

    def _release(self) -> None:
        self._header.reset()
        self._cmpfunc = None
        self._cmpfunc_data = None

    def __repr__(self) -> str:
        return f"Column(name={self.name!r}, seqnum={self._seqnum}, flags={self._flags!r})"


def _checked_whint(whint: float) -> float:
    if isinstance(whint, bool) or not isinstance(whint, (int, float)):
        raise InvalidArgumentError("whint", f"expected a number, got {type(whint).__name__}")
    if whint < 0:
        raise InvalidArgumentError("whint", f"width hint must be >= 0, got {whint}")
    return float(whint)
