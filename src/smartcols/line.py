"""Lines: the rows of a table and the nodes of its tree."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from .cell import Cell
from .exceptions import InvalidArgumentError
from .iterator import Direction, Iter
from .refcount import RefCounted

if TYPE_CHECKING:
    from .column import Column
    from .table import Table

logger = logging.getLogger(__name__)


class Line(RefCounted):
    """
    One row of a table.

    A line holds one cell per column, addressed by the column's ``seqnum``.
    Cells are allocated lazily: when the line is added to a table, or
    explicitly through :meth:`alloc_cells`.

    In tree output a line may hang under a parent line. The parent keeps
    the ordered list of its children; the child keeps a weak link back to
    the parent. Neither link is counted, and removing a line from its table
    leaves both in place, so detach a line from its parent before removing
    it on its own.
    """

    def __init__(self, ncells: int = 0) -> None:
        super().__init__()
        self._cells: list[Cell] = []
        self._seqnum = 0
        self._table: weakref.ReferenceType[Table] | None = None
        self._parent: weakref.ReferenceType[Line] | None = None
        self._children: list[Line] = []
        self.userdata: Any = None
        self.color: str | None = None
        if ncells:
            self.alloc_cells(ncells)

    # -------------------------------------------------------------------------
    # Identity and ownership
    # -------------------------------------------------------------------------

    @property
    def seqnum(self) -> int:
        """Insertion stamp within the owning table."""
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

    # -------------------------------------------------------------------------
    # Cells
    # -------------------------------------------------------------------------

    @property
    def ncells(self) -> int:
        return len(self._cells)

    @property
    def cells(self) -> tuple[Cell, ...]:
        return tuple(self._cells)

    def alloc_cells(self, n: int) -> None:
        """
        Resize the cell array to ``n`` slots.

        Existing cells keep their content; ``n == 0`` frees every cell.
        """
        if n < 0:
            raise InvalidArgumentError("n", f"cell count must be >= 0, got {n}")
        if n == 0:
            self.free_cells()
            return
        if n < len(self._cells):
            for cell in self._cells[n:]:
                cell.reset()
            del self._cells[n:]
        else:
            self._cells.extend(Cell() for _ in range(n - len(self._cells)))
        logger.debug("line %d: %d cells", self._seqnum, n)

    def free_cells(self) -> None:
        for cell in self._cells:
            cell.reset()
        self._cells.clear()

    def get_cell(self, n: int) -> Cell | None:
        """Return the cell at column index ``n``, or None if out of range."""
        if 0 <= n < len(self._cells):
            return self._cells[n]
        return None

    def get_column_cell(self, column: Column) -> Cell | None:
        """Return the cell that belongs to ``column``."""
        return self.get_cell(column.seqnum)

    def set_data(self, n: int, data: str | None) -> None:
        """
        Set the text of the cell at column index ``n``.

        Raises:
            InvalidArgumentError: If the line has no cell ``n``
        """
        cell = self.get_cell(n)
        if cell is None:
            raise InvalidArgumentError("n", f"no cell {n} in a line with {len(self._cells)} cells")
        cell.set_data(data)

    def set_column_data(self, column: Column, data: str | None) -> None:
        self.set_data(column.seqnum, data)

    # -------------------------------------------------------------------------
    # Tree links
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> Line | None:
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple[Line, ...]:
        return tuple(self._children)

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    def add_child(self, child: Line) -> None:
        """
        Append ``child`` to this line's children.

        A child that already hangs under another parent is detached from it
        first. No counted reference is taken either way. Both lines must
        belong to the same table, or both to none.

        Raises:
            InvalidArgumentError: If ``child`` is this line or one of its
                ancestors, or the two lines belong to different tables
        """
        if child is None:
            raise InvalidArgumentError("child", "child line is required")
        if child.table is not self.table:
            raise InvalidArgumentError("child", "parent and child belong to different tables")
        if child is self or child.is_ancestor_of(self):
            raise InvalidArgumentError("child", "linking would create a cycle")

        old_parent = child.parent
        if old_parent is not None:
            old_parent.remove_child(child)

        logger.debug("line %d: add child %d", self._seqnum, child._seqnum)
        self._children.append(child)
        child._parent = weakref.ref(self)

    def remove_child(self, child: Line) -> None:
        """
        Unlink ``child`` from this line in both directions.

        Raises:
            InvalidArgumentError: If ``child`` is not a child of this line
        """
        if child is None or child.parent is not self:
            raise InvalidArgumentError("child", "line is not a child of this line")

        logger.debug("line %d: remove child %d", self._seqnum, child._seqnum)
        self._children.remove(child)
        child._parent = None

    def detach(self) -> None:
        """Unlink this line from its parent, if it has one."""
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)

    def is_ancestor_of(self, line: Line) -> bool:
        """True if this line is a (transitive) parent of ``line``."""
        node = line.parent
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def next_child(self, itr: Iter[Line]) -> Line | None:
        """Step ``itr`` over this line's children."""
        return itr.step(self._children)

    def iter_children(self, direction: Direction = Direction.FORWARD) -> Iterator[Line]:
        """Yield the children in list order (or reversed)."""
        itr: Iter[Line] = Iter(direction)
        while (child := itr.step(self._children)) is not None:
            yield child

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def copy(self) -> Line:
        """
        Return an unbound copy of the cells, color and user data.

        Tree links and table membership are not copied.
        """
        new = Line()
        new._cells = [cell.copy() for cell in self._cells]
        new.userdata = self.userdata
        new.color = self.color
        return new

    def _release(self) -> None:
        self.free_cells()
        self.userdata = None

    def __repr__(self) -> str:
        data = [cell.data for cell in self._cells]
        return f"Line(seqnum={self._seqnum}, cells={data!r})"
