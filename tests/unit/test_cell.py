"""Tests for cells and the stock comparators."""

import pytest

from smartcols.cell import Cell, cmpnum_cells, cmpstr_cells


class TestCell:
    """Tests for Cell."""

    def test_defaults(self) -> None:
        cell = Cell()
        assert cell.data is None
        assert str(cell) == ""

    def test_reset(self) -> None:
        cell = Cell(data="x", color="red", userdata=object(), flags=3)
        cell.reset()
        assert cell == Cell()

    def test_copy_is_independent(self) -> None:
        cell = Cell(data="x", color="red")
        other = cell.copy()
        other.set_data("y")
        assert cell.data == "x"
        assert other.color == "red"

    def test_copy_content(self) -> None:
        cell = Cell(flags=1)
        cell.copy_content(Cell(data="x", color="blue"))
        assert (cell.data, cell.color, cell.flags) == ("x", "blue", 1)


class TestCmpstrCells:
    """Tests for cmpstr_cells."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("a", "b", -1),
            ("b", "a", 1),
            ("a", "a", 0),
            (None, "a", -1),
            ("a", None, 1),
            (None, None, 0),
        ],
    )
    def test_order(self, a: str | None, b: str | None, expected: int) -> None:
        assert cmpstr_cells(Cell(data=a), Cell(data=b), None) == expected


class TestCmpnumCells:
    """Tests for cmpnum_cells."""

    def test_numeric_not_lexical(self) -> None:
        assert cmpnum_cells(Cell(data="9"), Cell(data="10"), None) < 0
        assert cmpstr_cells(Cell(data="9"), Cell(data="10"), None) > 0

    def test_floats_and_whitespace(self) -> None:
        assert cmpnum_cells(Cell(data=" 1.5"), Cell(data="1.25 "), None) > 0
        assert cmpnum_cells(Cell(data="2"), Cell(data="2.0"), None) == 0

    def test_non_numbers_sort_last(self) -> None:
        assert cmpnum_cells(Cell(data="abc"), Cell(data="1"), None) > 0
        assert cmpnum_cells(Cell(data="1"), Cell(data=None), None) < 0
        assert cmpnum_cells(Cell(data="nan"), Cell(data="5"), None) > 0

    def test_non_numbers_compare_as_strings(self) -> None:
        assert cmpnum_cells(Cell(data="abc"), Cell(data="abd"), None) < 0

    @pytest.mark.parametrize("token", ["1_000", "inf", "-Infinity", "nan"])
    def test_odd_tokens_are_not_numbers(self, token: str) -> None:
        """Underscore literals and non-finite values sort with the text cells."""
        assert cmpnum_cells(Cell(data=token), Cell(data="99999"), None) > 0
        assert cmpnum_cells(Cell(data="5"), Cell(data=token), None) < 0
