"""Tables: the aggregate root of the entity model.

A table owns an ordered list of columns and an ordered list of lines. Every
line of the table is in that flat list, whether it is a top-level line or
hangs somewhere under a parent; the parent/child links on the lines turn the
flat list into a forest for tree output.

Example:
    table = Table()
    table.new_column("NAME", 0.5, ColumnFlags.TREE)
    table.new_column("SIZE", 5, ColumnFlags.RIGHT)

    root = table.new_line()
    root.set_data(0, "/")
    child = table.new_line(root)
    child.set_data(0, "usr")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from enum import Enum
from typing import TextIO

from .cell import Cell
from .column import Column, ColumnFlags
from .debug import DebugMask, get_debug_config
from .exceptions import AllocationError, InvalidArgumentError
from .iterator import Direction, Iter
from .line import Line
from .refcount import RefCounted
from .symbols import Symbols
from .ttyutils import get_terminal_width, is_utf8_locale

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Output format selector. The parsable formats are mutually exclusive."""

    DEFAULT = "default"
    RAW = "raw"
    EXPORT = "export"
    JSON = "json"


class TermForce(Enum):
    """Whether the output stream is treated as a terminal."""

    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"


class Table(RefCounted):
    """
    Container for columns and lines.

    Columns can only be added or removed while the table has no lines.
    A column or a line belongs to at most one table at a time; the table
    holds one counted reference to each of them.

    Column sequence numbers are dense 0-based positions. Line sequence
    numbers are insertion stamps that are never reused, so they stay stable
    across removals and sorting.
    """

    def __init__(self, name: str | None = None) -> None:
        super().__init__()
        config = get_debug_config()

        self._columns: list[Column] = []
        self._lines: list[Line] = []
        self._ntreecols = 0
        self._next_line_seqnum = 0
        self._symbols: Symbols | None = None

        self._name = _checked_str("name", name)
        self._title = Cell()
        self._colsep: str | None = None
        self._linesep: str | None = None
        self._format = OutputFormat.DEFAULT

        self._stream: TextIO = sys.stdout
        self._termwidth = get_terminal_width()
        self._termreduce = 0
        self._termforce = TermForce.AUTO

        self.ascii = False
        self.noheadings = False
        self.colors = False
        self.maxout = False
        self.nowrap = False
        self.nolinesep = False
        self.padding_debug = config.padding and config.traces(DebugMask.INIT)
        if self.padding_debug:
            logger.debug("padding debug: ENABLE")

        logger.debug("alloc table %r", name)

    # -------------------------------------------------------------------------
    # Columns
    # -------------------------------------------------------------------------

    @property
    def ncols(self) -> int:
        return len(self._columns)

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def ntreecols(self) -> int:
        """Number of columns flagged as tree columns."""
        return self._ntreecols

    def add_column(self, column: Column) -> None:
        """
        Append ``column`` and take a counted reference to it.

        Raises:
            InvalidArgumentError: If the table already has lines, or the
                column belongs to a table
        """
        if column is None:
            raise InvalidArgumentError("column", "column is required")
        if self._lines:
            raise InvalidArgumentError("column", "cannot add columns to a table with lines")
        if column.table is not None:
            raise InvalidArgumentError("column", "column already belongs to a table")

        logger.debug("add column %r", column.name)
        if column.tree:
            self._ntreecols += 1
        self._columns.append(column)
        column._bind(self, len(self._columns) - 1)
        column.ref()

    def remove_column(self, column: Column) -> None:
        """
        Remove ``column`` and drop the table's reference to it.

        The remaining columns are renumbered by position.

        Raises:
            InvalidArgumentError: If the table has lines, or the column is
                not part of this table
        """
        if self._lines:
            raise InvalidArgumentError("column", "cannot remove columns from a table with lines")
        if column is None or column.table is not self:
            raise InvalidArgumentError("column", "column is not part of this table")

        logger.debug("remove column %r", column.name)
        self._columns.remove(column)
        self._drop_column(column)
        for seqnum, remaining in enumerate(self._columns):
            remaining._seqnum = seqnum

    def remove_columns(self) -> None:
        """
        Remove every column.

        Raises:
            InvalidArgumentError: If the table has lines
        """
        if self._lines:
            raise InvalidArgumentError("column", "cannot remove columns from a table with lines")

        logger.debug("remove all columns")
        columns, self._columns = self._columns, []
        for column in columns:
            self._drop_column(column)

    def _drop_column(self, column: Column) -> None:
        if column.tree:
            self._ntreecols -= 1
        column._unbind()
        column.unref()

    def new_column(
        self,
        name: str | None = None,
        whint: float = 0,
        flags: ColumnFlags | int = 0,
    ) -> Column:
        """
        Create a column and append it.

        The returned column is owned by the table only; call ``ref()`` on it
        to keep it beyond the table's lifetime.

        Args:
            name: Header text
            whint: Width hint (fraction when < 1, characters when >= 1)
            flags: Column flags

        Returns:
            The new column
        """
        logger.debug("new column name=%r, whint=%g, flags=%r", name, whint, flags)
        column = Column(name, whint, flags)
        try:
            self.add_column(column)
        finally:
            column.unref()
        return column

    def get_column(self, n: int) -> Column | None:
        """Return the column at position ``n``, or None."""
        if 0 <= n < len(self._columns):
            return self._columns[n]
        return None

    def get_column_by_name(self, name: str) -> Column | None:
        for column in self._columns:
            if column.name == name:
                return column
        return None

    def next_column(self, itr: Iter[Column]) -> Column | None:
        """Step ``itr`` over the columns."""
        return itr.step(self._columns)

    def iter_columns(self, direction: Direction = Direction.FORWARD) -> Iterator[Column]:
        itr: Iter[Column] = Iter(direction)
        while (column := itr.step(self._columns)) is not None:
            yield column

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------

    @property
    def nlines(self) -> int:
        """Number of lines, nested ones included."""
        return len(self._lines)

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_line(self, line: Line) -> None:
        """
        Append ``line``, stamp its sequence number and take a counted reference.

        The line's cell array is grown to the number of columns if needed.

        Raises:
            InvalidArgumentError: If the table has no columns, or the line
                belongs to a table
        """
        if line is None:
            raise InvalidArgumentError("line", "line is required")
        if not self._columns:
            raise InvalidArgumentError("line", "cannot add lines to a table without columns")
        if line.table is not None:
            raise InvalidArgumentError("line", "line already belongs to a table")

        if line.ncells < len(self._columns):
            line.alloc_cells(len(self._columns))

        logger.debug("add line %d", self._next_line_seqnum)
        self._lines.append(line)
        line._bind(self, self._next_line_seqnum)
        self._next_line_seqnum += 1
        line.ref()

    def remove_line(self, line: Line) -> None:
        """
        Remove ``line`` and drop the table's reference to it.

        Parent/child links are left alone; detach the line from its family
        first (:meth:`Line.detach`, :meth:`Line.remove_child`).

        Raises:
            InvalidArgumentError: If the line is not part of this table
        """
        if line is None or line.table is not self:
            raise InvalidArgumentError("line", "line is not part of this table")

        logger.debug("remove line %d", line.seqnum)
        self._lines.remove(line)
        line._unbind()
        line.unref()

    def remove_lines(self) -> None:
        """Remove every line, severing all parent/child links first."""
        logger.debug("remove all lines")
        lines, self._lines = self._lines, []
        for line in lines:
            line.detach()
            for child in line.children:
                line.remove_child(child)
        for line in lines:
            line._unbind()
            line.unref()

    def new_line(self, parent: Line | None = None) -> Line:
        """
        Create a line, append it and optionally hang it under ``parent``.

        The returned line is owned by the table only.

        Raises:
            InvalidArgumentError: If the table has no columns, or ``parent``
                is not part of this table
        """
        if not self._columns:
            raise InvalidArgumentError("line", "cannot add lines to a table without columns")
        if parent is not None and parent.table is not self:
            raise InvalidArgumentError("parent", "parent line is not part of this table")

        line = Line()
        try:
            self.add_line(line)
            if parent is not None:
                parent.add_child(line)
        except Exception:
            if line.table is self:
                self.remove_line(line)
            raise
        finally:
            line.unref()
        return line

    def get_line(self, n: int) -> Line | None:
        """Return the line stamped with sequence number ``n``, or None."""
        if n < 0 or n >= self._next_line_seqnum:
            return None
        for line in self._lines:
            if line.seqnum == n:
                return line
        return None

    def next_line(self, itr: Iter[Line]) -> Line | None:
        """Step ``itr`` over the flat line list."""
        return itr.step(self._lines)

    def iter_lines(self, direction: Direction = Direction.FORWARD) -> Iterator[Line]:
        itr: Iter[Line] = Iter(direction)
        while (line := itr.step(self._lines)) is not None:
            yield line

    def roots(self) -> Iterator[Line]:
        """Yield the top-level lines (those without a parent) in table order."""
        for line in self._lines:
            if line.parent is None:
                yield line

    def iter_tree(self) -> Iterator[tuple[Line, int]]:
        """
        Walk the line forest depth-first, pre-order.

        Yields:
            ``(line, depth)`` pairs; top-level lines have depth 0
        """
        stack: list[tuple[Line, int]] = [(line, 0) for line in reversed(list(self.roots()))]
        while stack:
            line, depth = stack.pop()
            yield line, depth
            stack.extend((child, depth + 1) for child in reversed(line.children))

    # -------------------------------------------------------------------------
    # Sorting and copying
    # -------------------------------------------------------------------------

    @property
    def is_tree(self) -> bool:
        """True if at least one column is a tree column."""
        return self._ntreecols > 0

    def sort(self, column: Column) -> None:
        """Order the lines by ``column``; see :func:`smartcols.sort.sort_table`."""
        from .sort import sort_table

        sort_table(self, column)

    def copy(self) -> Table:
        """
        Create an independent copy of the table.

        Columns, lines and parent/child links are copied; the symbols are
        shared with the original. Nothing of a failed copy survives.

        Raises:
            AllocationError: If memory ran out while copying
        """
        logger.debug("copy table %r", self._name)
        new = Table(self._name)
        try:
            self._copy_into(new)
        except MemoryError as e:
            new.unref()
            raise AllocationError("copy table") from e
        except Exception:
            new.unref()
            raise
        return new

    def _copy_into(self, new: Table) -> None:
        if self._symbols is not None:
            new.set_symbols(self._symbols)

        for column in self._columns:
            new_column = column.copy()
            try:
                new.add_column(new_column)
            finally:
                new_column.unref()

        copies: dict[int, Line] = {}
        for line in self._lines:
            new_line = line.copy()
            try:
                new.add_line(new_line)
            finally:
                new_line.unref()
            copies[line.seqnum] = new_line

        # second pass, so children added before their parent keep their place
        for line in self._lines:
            for child in line.children:
                if child.table is self:
                    copies[line.seqnum].add_child(copies[child.seqnum])

        new._title = self._title.copy()
        new._colsep = self._colsep
        new._linesep = self._linesep
        new._format = self._format
        new._stream = self._stream
        new._termwidth = self._termwidth
        new._termreduce = self._termreduce
        new._termforce = self._termforce
        new.ascii = self.ascii
        new.noheadings = self.noheadings
        new.colors = self.colors
        new.maxout = self.maxout
        new.nowrap = self.nowrap
        new.nolinesep = self.nolinesep

    # -------------------------------------------------------------------------
    # Symbols
    # -------------------------------------------------------------------------

    @property
    def symbols(self) -> Symbols | None:
        return self._symbols

    def set_symbols(self, symbols: Symbols | None) -> None:
        """
        Replace the table's symbols.

        The reference to the current symbols is dropped and a counted
        reference to ``symbols`` is taken. None leaves the table without
        symbols.
        """
        if self._symbols is not None:
            logger.debug("remove symbols reference %r", self._symbols)
            old, self._symbols = self._symbols, None
            old.unref()
        if symbols is not None:
            logger.debug("set symbols %r", symbols)
            self._symbols = symbols.ref()

    def set_default_symbols(self, use_ascii: bool | None = None) -> Symbols:
        """
        Attach one of the canonical glyph sets.

        Args:
            use_ascii: Force ASCII (True) or UTF-8 (False) glyphs. By default
                ASCII is used if the table's ``ascii`` flag is set or the
                locale is not UTF-8.

        Returns:
            The attached symbols
        """
        if use_ascii is None:
            use_ascii = self.ascii or not is_utf8_locale()
        logger.debug("setting default symbols (ascii=%s)", use_ascii)
        symbols = Symbols.default(use_ascii)
        try:
            self.set_symbols(symbols)
        finally:
            symbols.unref()
        return symbols

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str | None:
        """Table name, e.g. the top-level object name of JSON output."""
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        self._name = _checked_str("name", value)

    @property
    def title(self) -> Cell:
        """Title cell; its data is None for a blank title."""
        return self._title

    @property
    def column_separator(self) -> str | None:
        return self._colsep

    @column_separator.setter
    def column_separator(self, value: str | None) -> None:
        self._colsep = _checked_str("column_separator", value)

    @property
    def line_separator(self) -> str | None:
        return self._linesep

    @line_separator.setter
    def line_separator(self, value: str | None) -> None:
        self._linesep = _checked_str("line_separator", value)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @format.setter
    def format(self, value: OutputFormat) -> None:
        if not isinstance(value, OutputFormat):
            raise InvalidArgumentError("format", f"expected OutputFormat, got {value!r}")
        logger.debug("format: %s", value.value)
        self._format = value

    def _enable_format(self, fmt: OutputFormat, enable: bool) -> None:
        if enable:
            self.format = fmt
        elif self._format is fmt:
            self.format = OutputFormat.DEFAULT

    @property
    def raw(self) -> bool:
        return self._format is OutputFormat.RAW

    @raw.setter
    def raw(self, enable: bool) -> None:
        self._enable_format(OutputFormat.RAW, enable)

    @property
    def json(self) -> bool:
        return self._format is OutputFormat.JSON

    @json.setter
    def json(self, enable: bool) -> None:
        self._enable_format(OutputFormat.JSON, enable)

    @property
    def export(self) -> bool:
        return self._format is OutputFormat.EXPORT

    @export.setter
    def export(self, enable: bool) -> None:
        self._enable_format(OutputFormat.EXPORT, enable)

    @property
    def stream(self) -> TextIO:
        return self._stream

    @stream.setter
    def stream(self, stream: TextIO) -> None:
        if stream is None:
            raise InvalidArgumentError("stream", "stream is required")
        logger.debug("setting alternative stream")
        self._stream = stream

    @property
    def termwidth(self) -> int:
        return self._termwidth

    @termwidth.setter
    def termwidth(self, width: int) -> None:
        if width <= 0:
            raise InvalidArgumentError("termwidth", f"width must be positive, got {width}")
        self._termwidth = width

    @property
    def termreduce(self) -> int:
        return self._termreduce

    def reduce_termwidth(self, reduce: int) -> None:
        """
        Reserve ``reduce`` characters of the terminal width (e.g. for borders).

        A reduction that is not smaller than the terminal width is ignored
        by the renderer.
        """
        if reduce < 0:
            raise InvalidArgumentError("reduce", f"reduction must be >= 0, got {reduce}")
        logger.debug("reduce terminal width: %d", reduce)
        self._termreduce = reduce

    @property
    def termforce(self) -> TermForce:
        return self._termforce

    @termforce.setter
    def termforce(self, force: TermForce) -> None:
        if not isinstance(force, TermForce):
            raise InvalidArgumentError("termforce", f"expected TermForce, got {force!r}")
        self._termforce = force

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _release(self) -> None:
        self.remove_lines()
        self.remove_columns()
        self.set_symbols(None)
        self._title.reset()
        self._linesep = None
        self._colsep = None
        self._name = None

    def __repr__(self) -> str:
        return f"Table(name={self._name!r}, ncols={len(self._columns)}, nlines={len(self._lines)})"


def _checked_str(name: str, value: str | None) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(name, f"expected a string, got {type(value).__name__}")
    return value
