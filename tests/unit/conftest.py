"""Unit test fixtures for smartcols."""

import pytest

from smartcols import ColumnFlags, Line, Table, cmpnum_cells, cmpstr_cells
from smartcols.debug import reset_debug_config


@pytest.fixture(autouse=True)
def clean_debug_config(monkeypatch):
    """Run every test with debugging off, an 80-column terminal and a fresh config cache."""
    monkeypatch.delenv("SMARTCOLS_DEBUG", raising=False)
    monkeypatch.delenv("SMARTCOLS_DEBUG_PADDING", raising=False)
    monkeypatch.setenv("COLUMNS", "80")
    reset_debug_config()
    yield
    reset_debug_config()


@pytest.fixture
def sizes_table() -> Table:
    """Flat table NAME/SIZE with SIZE cells "30", "10", "20"."""
    table = Table()
    name = table.new_column("NAME")
    name.set_cmpfunc(cmpstr_cells)
    size = table.new_column("SIZE", 5, ColumnFlags.RIGHT)
    size.set_cmpfunc(cmpnum_cells)

    for label, value in (("c", "30"), ("a", "10"), ("b", "20")):
        line = table.new_line()
        line.set_data(0, label)
        line.set_data(1, value)
    return table


@pytest.fixture
def family_table() -> Table:
    """
    Tree table NAME/AGE:

        Grandfather Bob   61
        |- Father Adam    38
        |  |- Baby Val     9
        |  `- Baby Dilbert 5
        `- Aunt Gaga      35
    """
    table = Table()
    name = table.new_column("NAME", 0.5, ColumnFlags.TREE)
    name.set_cmpfunc(cmpstr_cells)
    age = table.new_column("AGE", 3, ColumnFlags.RIGHT)
    age.set_cmpfunc(cmpnum_cells)

    def add(label: str, years: str, parent: Line | None = None) -> Line:
        line = table.new_line(parent)
        line.set_data(0, label)
        line.set_data(1, years)
        return line

    gdad = add("Grandfather Bob", "61")
    dad = add("Father Adam", "38", gdad)
    add("Baby Val", "9", dad)
    add("Baby Dilbert", "5", dad)
    add("Aunt Gaga", "35", gdad)
    return table

