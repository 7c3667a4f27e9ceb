"""YAML manifest parsing and validation for declarative table layouts.

A manifest declares the columns of a table and its output configuration:

    name: processes
    title: Running processes
    sort_by: PID
    columns:
      - name: COMMAND
        whint: 0.5
        flags: [tree, trunc]
      - name: PID
        whint: 6
        flags: [right]
        sort: numeric
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .cell import CellComparator, cmpnum_cells, cmpstr_cells
from .column import ColumnFlags
from .exceptions import ManifestError
from .table import OutputFormat, Table

FLAG_NAMES: dict[str, ColumnFlags] = {
    "trunc": ColumnFlags.TRUNC,
    "tree": ColumnFlags.TREE,
    "right": ColumnFlags.RIGHT,
    "strictwidth": ColumnFlags.STRICTWIDTH,
    "noextremes": ColumnFlags.NOEXTREMES,
    "hidden": ColumnFlags.HIDDEN,
    "wrap": ColumnFlags.WRAP,
}

COMPARATORS: dict[str, CellComparator] = {
    "string": cmpstr_cells,
    "numeric": cmpnum_cells,
}


@dataclass(frozen=True)
class ColumnDecl:
    """A single column declaration."""

    name: str
    whint: float = 0.0
    flags: tuple[str, ...] = ()
    sort: str | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any], index: int = 0) -> ColumnDecl:
        where = f"columns[{index}]"
        if not isinstance(d, dict):
            raise ManifestError(where, d, "column declaration must be a mapping")

        name = d.get("name")
        if not name or not isinstance(name, str):
            raise ManifestError(f"{where}.name", name, "column name is required")

        whint = d.get("whint", 0.0)
        if isinstance(whint, bool) or not isinstance(whint, (int, float)) or whint < 0:
            raise ManifestError(f"{where}.whint", whint, "must be a number >= 0")

        flags = d.get("flags", [])
        if isinstance(flags, str):
            flags = [flags]
        for flag in flags:
            if flag not in FLAG_NAMES:
                raise ManifestError(
                    f"{where}.flags", flag, f"unknown flag, expected one of {sorted(FLAG_NAMES)}"
                )

        sort = d.get("sort")
        if sort is not None and sort not in COMPARATORS:
            raise ManifestError(
                f"{where}.sort", sort, f"unknown comparator, expected one of {sorted(COMPARATORS)}"
            )

        return cls(
            name=name,
            whint=float(whint),
            flags=tuple(flags),
            sort=sort,
            color=d.get("color"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "whint": self.whint}
        if self.flags:
            result["flags"] = list(self.flags)
        if self.sort is not None:
            result["sort"] = self.sort
        if self.color is not None:
            result["color"] = self.color
        return result

    @property
    def column_flags(self) -> ColumnFlags:
        flags = ColumnFlags(0)
        for flag in self.flags:
            flags |= FLAG_NAMES[flag]
        return flags


@dataclass(frozen=True)
class TableManifest:
    """Parsed YAML manifest for a table layout."""

    columns: tuple[ColumnDecl, ...]
    name: str | None = None
    title: str | None = None
    format: OutputFormat = OutputFormat.DEFAULT
    column_separator: str | None = None
    line_separator: str | None = None
    sort_by: str | None = None
    options: dict[str, bool] = field(default_factory=dict)

    OPTION_NAMES = ("ascii", "noheadings", "colors", "maxout", "nowrap", "nolinesep")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TableManifest:
        if not isinstance(d, dict):
            raise ManifestError("<root>", d, "manifest must be a mapping")

        raw_columns = d.get("columns")
        if not raw_columns or not isinstance(raw_columns, list):
            raise ManifestError("columns", raw_columns, "at least one column is required")
        columns = tuple(ColumnDecl.from_dict(c, i) for i, c in enumerate(raw_columns))

        names = [c.name for c in columns]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ManifestError("columns", duplicates, "column names must be unique")

        fmt = d.get("format", OutputFormat.DEFAULT.value)
        try:
            output_format = OutputFormat(fmt)
        except ValueError as e:
            raise ManifestError("format", fmt, "unknown output format") from e

        sort_by = d.get("sort_by")
        if sort_by is not None:
            target = next((c for c in columns if c.name == sort_by), None)
            if target is None:
                raise ManifestError("sort_by", sort_by, "no such column")
            if target.sort is None:
                raise ManifestError("sort_by", sort_by, "column has no 'sort' comparator")

        options = {}
        for option in cls.OPTION_NAMES:
            if option in d:
                if not isinstance(d[option], bool):
                    raise ManifestError(option, d[option], "must be a boolean")
                options[option] = d[option]

        return cls(
            columns=columns,
            name=d.get("name"),
            title=d.get("title"),
            format=output_format,
            column_separator=d.get("column_separator"),
            line_separator=d.get("line_separator"),
            sort_by=sort_by,
            options=options,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> TableManifest:
        import yaml

        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ManifestError("<root>", None, f"not valid YAML: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"columns": [c.to_dict() for c in self.columns]}
        if self.name is not None:
            result["name"] = self.name
        if self.title is not None:
            result["title"] = self.title
        if self.format is not OutputFormat.DEFAULT:
            result["format"] = self.format.value
        if self.column_separator is not None:
            result["column_separator"] = self.column_separator
        if self.line_separator is not None:
            result["line_separator"] = self.line_separator
        if self.sort_by is not None:
            result["sort_by"] = self.sort_by
        result.update(self.options)
        return result

    def build_table(self) -> Table:
        """
        Create a table with the declared columns and configuration.

        Returns:
            A new table without lines; the caller owns its only reference
        """
        table = Table(self.name)
        try:
            if self.title is not None:
                table.title.set_data(self.title)
            table.format = self.format
            table.column_separator = self.column_separator
            table.line_separator = self.line_separator
            for option, enabled in self.options.items():
                setattr(table, option, enabled)
            for decl in self.columns:
                column = table.new_column(decl.name, decl.whint, decl.column_flags)
                column.color = decl.color
                if decl.sort is not None:
                    column.set_cmpfunc(COMPARATORS[decl.sort])
        except Exception:
            table.unref()
            raise
        return table
