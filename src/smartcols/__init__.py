"""
smartcols: in-memory table model for column-oriented CLI output.

This library provides the entity model behind a tabular renderer:
- Tables owning ordered columns and lines
- Parent/child line links for tree output
- Explicit reference counting of tables, columns, lines and symbols
- Stable sorting by a column comparator, per sibling group in trees
- Deep table copies that share their tree symbols

Example:
    from smartcols import ColumnFlags, Table, cmpnum_cells

    table = Table()
    table.new_column("NAME", 0.5, ColumnFlags.TREE)
    age = table.new_column("AGE", 3, ColumnFlags.RIGHT)
    age.set_cmpfunc(cmpnum_cells)

    dad = table.new_line()
    dad.set_data(0, "Father Adam")
    dad.set_data(1, "38")

    kid = table.new_line(dad)
    kid.set_data(0, "Baby Val")
    kid.set_data(1, "9")

    table.sort(age)
"""

from importlib.metadata import PackageNotFoundError, version

from .cell import Cell, CellComparator, cmpnum_cells, cmpstr_cells
from .column import Column, ColumnFlags
from .debug import DebugConfig, DebugMask, get_debug_config
from .exceptions import (
    AllocationError,
    InvalidArgumentError,
    ManifestError,
    SmartcolsError,
)
from .iterator import Direction, Iter
from .line import Line
from .manifest import ColumnDecl, TableManifest
from .refcount import RefCounted
from .sort import sort_table
from .symbols import Symbols
from .table import OutputFormat, Table, TermForce

try:
    __version__ = version("smartcols")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Entities
    "Table",
    "Column",
    "Line",
    "Cell",
    "Symbols",
    "RefCounted",
    # Enums and flags
    "ColumnFlags",
    "OutputFormat",
    "TermForce",
    "Direction",
    "DebugMask",
    # Traversal and ordering
    "Iter",
    "sort_table",
    "CellComparator",
    "cmpstr_cells",
    "cmpnum_cells",
    # Configuration
    "DebugConfig",
    "get_debug_config",
    "TableManifest",
    "ColumnDecl",
    # Exceptions
    "SmartcolsError",
    "InvalidArgumentError",
    "AllocationError",
    "ManifestError",
]
