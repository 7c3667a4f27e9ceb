"""Tests for the visualization module."""

from __future__ import annotations

import io

import pytest

from smartcols import Line, OutputFormat, Symbols, Table, TermForce
from smartcols.visualization import format_table, print_table
from smartcols.visualization.factory import get_formatter
from smartcols.visualization.formatters import RawFormatter, TableFormatter, tree_prefix
from smartcols.visualization.table import TableRenderer


class TestTableRenderer:
    """Tests for TableRenderer."""

    def test_alignment(self) -> None:
        """Test left and right aligned columns."""
        renderer = TableRenderer(alignments=["l", "r"])
        lines = renderer.render(["NAME", "SIZE"], [["a", "1"], ["long-name", "100"]])
        assert lines == [
            "NAME      SIZE",
            "a            1",
            "long-name  100",
        ]

    def test_without_headers(self) -> None:
        renderer = TableRenderer()
        assert renderer.render(None, [["x", "yy"]]) == ["x yy"]
        assert renderer.widths(None, [["x", "yy"], ["xxx"]]) == [3, 2]

    def test_min_widths(self) -> None:
        renderer = TableRenderer(min_widths=[4, 0])
        assert renderer.widths(["A", "B"], [["x", "y"]]) == [4, 1]

    def test_maxout_keeps_trailing_padding(self) -> None:
        assert TableRenderer(maxout=True).render(["A"], [["xyz"]]) == ["A  ", "xyz"]
        assert TableRenderer().render(["A"], [["xyz"]]) == ["A", "xyz"]

    def test_nothing_to_render(self) -> None:
        assert TableRenderer().render(None, []) == []

    def test_max_width_shrinks_widest_column(self) -> None:
        renderer = TableRenderer(max_width=10)
        lines = renderer.render(["NAME", "DESCRIPTION"], [["a", "x" * 60]])
        assert lines == ["NAME DESCR", "a    xxxxx"]

    def test_truncatable_columns_shrink_first(self) -> None:
        renderer = TableRenderer(max_width=12, truncatable=[True, False])
        assert renderer.widths(["A", "B"], [["aaaaaaaa", "bbbbbbbb"]]) == [3, 8]

    def test_min_widths_are_kept_when_fitting(self) -> None:
        renderer = TableRenderer(max_width=5, min_widths=[0, 8])
        assert renderer.widths(["A", "B"], [["aaaa", "b"]]) == [1, 8]
        assert renderer.render(None, [["aaaa", "b"]]) == ["a b"]

    def test_fits_without_change(self) -> None:
        renderer = TableRenderer(max_width=80)
        assert renderer.widths(["NAME"], [["x" * 30]]) == [30]

    def test_fill(self) -> None:
        renderer = TableRenderer(alignments=["l", "r"], fill=".")
        assert renderer.render(["NAME", "N"], [["a", "1"]]) == ["NAME N", "a... 1"]


class TestTreePrefix:
    """Tests for tree_prefix."""

    def test_prefixes(self, family_table: Table) -> None:
        symbols = Symbols.default(use_ascii=True)
        prefixes = [tree_prefix(line, symbols) for line in family_table.lines]
        assert prefixes == ["", "|-", "| |-", "| `-", "`-"]

    def test_last_branch_leaves_blank_space(self) -> None:
        symbols = Symbols.default(use_ascii=True)
        root, last, leaf = Line(), Line(), Line()
        root.add_child(last)
        last.add_child(leaf)
        assert tree_prefix(leaf, symbols) == "  `-"


class TestTableFormatter:
    """Tests for TableFormatter."""

    def test_flat(self, sizes_table: Table) -> None:
        output = TableFormatter().format(sizes_table)
        assert output.split("\n") == [
            "NAME SIZE",
            "c      30",
            "a      10",
            "b      20",
        ]

    def test_tree(self, family_table: Table) -> None:
        """Test branch art in the tree column and right-aligned ages."""
        family_table.ascii = True
        output = TableFormatter().format(family_table)
        assert output.split("\n") == [
            "NAME" + " " * 13 + "AGE",
            "Grandfather Bob   61",
            "|-Father Adam     38",
            "| |-Baby Val       9",
            "| `-Baby Dilbert   5",
            "`-Aunt Gaga       35",
        ]

    def test_tree_attaches_default_symbols(self, family_table: Table) -> None:
        family_table.ascii = True
        TableFormatter().format(family_table)
        assert family_table.symbols is not None
        assert family_table.symbols.branch == "|-"

    def test_tree_uses_table_symbols(self, family_table: Table) -> None:
        family_table.set_symbols(Symbols(branch="+", vertical=":", right="\\"))
        output = TableFormatter().format(family_table).split("\n")
        assert output[3].startswith(":+Baby Val")
        assert output[5].startswith("\\Aunt Gaga")

    def test_noheadings(self, sizes_table: Table) -> None:
        sizes_table.noheadings = True
        assert TableFormatter().format(sizes_table).split("\n")[0] == "c 30"

    def test_hidden_column(self, sizes_table: Table) -> None:
        sizes_table.get_column(1).hidden = True
        assert TableFormatter().format(sizes_table) == "NAME\nc\na\nb"

    def test_strict_width(self, sizes_table: Table) -> None:
        sizes_table.get_column(1).strict_width = True
        output = TableFormatter().format(sizes_table).split("\n")
        assert output[0] == "NAME  SIZE"
        assert output[1] == "c" + " " * 7 + "30"

    def test_title(self, sizes_table: Table) -> None:
        sizes_table.title.set_data("Sizes")
        assert TableFormatter().format(sizes_table).split("\n")[0] == "  Sizes"

    def test_separators(self, sizes_table: Table) -> None:
        sizes_table.column_separator = "|"
        sizes_table.line_separator = ";"
        assert TableFormatter().format(sizes_table) == "NAME|SIZE;c   |  30;a   |  10;b   |  20"

    def test_no_columns(self) -> None:
        assert TableFormatter().format(Table()) == ""

    def test_fits_terminal_width(self, sizes_table: Table) -> None:
        """Test the widest columns shrink to fit the terminal width."""
        sizes_table.termwidth = 6
        assert TableFormatter().format(sizes_table).split("\n")[:2] == ["N SIZE", "c   30"]

    def test_truncatable_column_shrinks_first(self, sizes_table: Table) -> None:
        sizes_table.get_column(1).trunc = True
        sizes_table.termwidth = 7
        assert TableFormatter().format(sizes_table).split("\n")[:2] == ["NAME SI", "c    30"]

    def test_reduced_width(self, sizes_table: Table) -> None:
        sizes_table.termwidth = 9
        sizes_table.reduce_termwidth(3)
        assert TableFormatter().format(sizes_table).split("\n")[0] == "N SIZE"

        sizes_table.reduce_termwidth(9)
        assert TableFormatter().format(sizes_table).split("\n")[0] == "NAME SIZE"

    def test_width_ignored_when_not_a_terminal(self, sizes_table: Table) -> None:
        sizes_table.termwidth = 6
        sizes_table.termforce = TermForce.NEVER
        assert TableFormatter().format(sizes_table).split("\n")[0] == "NAME SIZE"

    def test_padding_debug(self, sizes_table: Table) -> None:
        """Test padding is drawn with dots when padding debug is on."""
        sizes_table.padding_debug = True
        assert TableFormatter().format(sizes_table).split("\n")[:2] == ["NAME SIZE", "c... ..30"]

    def test_does_not_modify_lines(self, family_table: Table) -> None:
        before = [(line.get_cell(0).data, line.parent) for line in family_table.lines]
        TableFormatter().format(family_table)
        assert [(line.get_cell(0).data, line.parent) for line in family_table.lines] == before


class TestRawFormatter:
    """Tests for RawFormatter."""

    def test_raw(self, sizes_table: Table) -> None:
        assert RawFormatter().format(sizes_table) == "NAME SIZE\nc 30\na 10\nb 20"

    def test_raw_tree_has_no_branches(self, family_table: Table) -> None:
        family_table.noheadings = True
        output = RawFormatter().format(family_table).split("\n")
        assert output[1] == "Father Adam 38"

    def test_nolinesep(self, sizes_table: Table) -> None:
        sizes_table.nolinesep = True
        sizes_table.noheadings = True
        sizes_table.column_separator = ","
        assert RawFormatter().format(sizes_table) == "c,30a,10b,20"


class TestGetFormatter:
    """Tests for the formatter factory."""

    def test_known_formats(self) -> None:
        assert isinstance(get_formatter(OutputFormat.DEFAULT), TableFormatter)
        assert isinstance(get_formatter(OutputFormat.RAW), RawFormatter)

    @pytest.mark.parametrize("output_format", [OutputFormat.JSON, OutputFormat.EXPORT])
    def test_unsupported(self, output_format: OutputFormat) -> None:
        with pytest.raises(ValueError, match="Unsupported output format"):
            get_formatter(output_format)


class TestFormatTable:
    """Tests for format_table and print_table."""

    def test_follows_table_format(self, sizes_table: Table) -> None:
        sizes_table.raw = True
        assert format_table(sizes_table).split("\n")[1] == "c 30"

    def test_explicit_format_wins(self, sizes_table: Table) -> None:
        sizes_table.raw = True
        assert format_table(sizes_table, OutputFormat.DEFAULT).split("\n")[1] == "c      30"

    def test_print_table(self, sizes_table: Table) -> None:
        stream = io.StringIO()
        sizes_table.stream = stream
        sizes_table.noheadings = True
        print_table(sizes_table, OutputFormat.RAW)
        assert stream.getvalue() == "c 30\na 10\nb 20\n"
