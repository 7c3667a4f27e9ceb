"""Ordering a table's lines by a column."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .cell import Cell
from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .column import Column
    from .line import Line
    from .table import Table

logger = logging.getLogger(__name__)


def sort_table(table: Table, column: Column) -> None:
    """
    Order the lines of ``table`` by the cells of ``column``.

    The flat line list is stable-sorted with the column's comparator. For a
    tree table every children list, at every depth, is then stable-sorted
    independently with the same comparator. Only list order changes: tree
    links, sequence numbers and cell content are left untouched.

    Args:
        table: Table to reorder
        column: Column of ``table`` with a comparator attached

    Raises:
        InvalidArgumentError: If the column has no comparator or is not part
            of the table
    """
    if column is None or column.cmpfunc is None:
        raise InvalidArgumentError("column", "no comparator attached to the sort column")
    if column.table is not table:
        raise InvalidArgumentError("column", "sort column is not part of this table")

    logger.debug("sorting table by column %r", column.name)
    key = _line_key(column)
    table._lines.sort(key=key)

    if table.is_tree:
        _sort_children(table._lines, key)


def _line_key(column: Column) -> Callable[[Line], Any]:
    cmpfunc = column.cmpfunc
    assert cmpfunc is not None
    data = column.cmpfunc_data
    n = column.seqnum

    def compare(a: Line, b: Line) -> int:
        return cmpfunc(a.get_cell(n) or Cell(), b.get_cell(n) or Cell(), data)

    return functools.cmp_to_key(compare)


def _sort_children(lines: list[Line], key: Callable[[Line], Any]) -> None:
    # explicit stack, so deep trees cannot exhaust the interpreter stack
    seen: set[int] = set()
    stack = list(lines)
    while stack:
        line = stack.pop()
        if id(line) in seen:
            continue
        seen.add(id(line))
        if line._children:
            line._children.sort(key=key)
            stack.extend(line._children)
