"""Tests for TableManifest YAML parsing and validation."""

import pytest

from smartcols import ColumnFlags, ManifestError, OutputFormat
from smartcols.cell import cmpnum_cells
from smartcols.manifest import ColumnDecl, TableManifest

PROCESSES = """
name: processes
title: Running processes
sort_by: PID
noheadings: true
columns:
  - name: COMMAND
    whint: 0.5
    flags: [tree, trunc]
  - name: PID
    whint: 6
    flags: right
    sort: numeric
    color: green
"""


class TestColumnDecl:
    """Tests for column declarations."""

    def test_minimal(self):
        decl = ColumnDecl.from_dict({"name": "NAME"})
        assert decl == ColumnDecl(name="NAME")
        assert decl.column_flags == ColumnFlags(0)

    def test_flags(self):
        """A single flag may be given as a plain string."""
        decl = ColumnDecl.from_dict({"name": "PID", "flags": "right"})
        assert decl.flags == ("right",)
        assert decl.column_flags == ColumnFlags.RIGHT

    @pytest.mark.parametrize(
        ("raw", "field"),
        [
            ("NAME", "columns[3]"),
            ({}, "columns[3].name"),
            ({"name": 7}, "columns[3].name"),
            ({"name": "A", "whint": -1}, "columns[3].whint"),
            ({"name": "A", "whint": "wide"}, "columns[3].whint"),
            ({"name": "A", "flags": ["bold"]}, "columns[3].flags"),
            ({"name": "A", "sort": "random"}, "columns[3].sort"),
        ],
    )
    def test_invalid(self, raw, field):
        with pytest.raises(ManifestError) as exc_info:
            ColumnDecl.from_dict(raw, 3)
        assert exc_info.value.field == field

    def test_to_dict_omits_defaults(self):
        assert ColumnDecl(name="A").to_dict() == {"name": "A", "whint": 0.0}


class TestTableManifestParsing:
    """Tests for YAML parsing into TableManifest."""

    def test_from_yaml(self):
        manifest = TableManifest.from_yaml(PROCESSES)
        assert manifest.name == "processes"
        assert manifest.title == "Running processes"
        assert manifest.sort_by == "PID"
        assert manifest.format is OutputFormat.DEFAULT
        assert manifest.options == {"noheadings": True}
        assert [c.name for c in manifest.columns] == ["COMMAND", "PID"]
        assert manifest.columns[1].color == "green"

    def test_round_trip_dict(self):
        manifest = TableManifest.from_yaml(PROCESSES)
        assert TableManifest.from_dict(manifest.to_dict()) == manifest

    def test_format(self):
        manifest = TableManifest.from_dict({"columns": [{"name": "A"}], "format": "raw"})
        assert manifest.format is OutputFormat.RAW
        assert manifest.to_dict()["format"] == "raw"

    def test_invalid_yaml(self):
        with pytest.raises(ManifestError, match="not valid YAML"):
            TableManifest.from_yaml("columns: [unclosed")

    @pytest.mark.parametrize(
        ("raw", "field"),
        [
            ([], "<root>"),
            ({}, "columns"),
            ({"columns": []}, "columns"),
            ({"columns": [{"name": "A"}, {"name": "A"}]}, "columns"),
            ({"columns": [{"name": "A"}], "format": "xml"}, "format"),
            ({"columns": [{"name": "A"}], "sort_by": "B"}, "sort_by"),
            ({"columns": [{"name": "A"}], "sort_by": "A"}, "sort_by"),
            ({"columns": [{"name": "A"}], "ascii": "yes"}, "ascii"),
        ],
    )
    def test_invalid(self, raw, field):
        with pytest.raises(ManifestError) as exc_info:
            TableManifest.from_dict(raw)
        assert exc_info.value.field == field


class TestBuildTable:
    """Tests for TableManifest.build_table."""

    def test_columns_and_options(self):
        table = TableManifest.from_yaml(PROCESSES).build_table()

        assert table.name == "processes"
        assert table.title.data == "Running processes"
        assert table.noheadings
        assert table.nlines == 0
        assert table.refcount == 1
        assert table.is_tree

        command, pid = table.columns
        assert command.whint == 0.5
        assert command.tree and command.trunc
        assert pid.right
        assert pid.color == "green"
        assert pid.cmpfunc is cmpnum_cells
        assert command.cmpfunc is None

    def test_separators_and_format(self):
        manifest = TableManifest.from_dict(
            {
                "columns": [{"name": "A"}],
                "format": "raw",
                "column_separator": ";",
                "line_separator": "|",
            }
        )
        table = manifest.build_table()
        assert table.raw
        assert table.column_separator == ";"
        assert table.line_separator == "|"
