"""Command-line interface for building and printing smartcols tables."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

import click

from .cell import cmpnum_cells, cmpstr_cells
from .column import ColumnFlags
from .exceptions import SmartcolsError
from .line import Line
from .manifest import TableManifest
from .table import Table
from .visualization import format_table


@click.group()
@click.version_option(package_name="smartcols")
def cli() -> None:
    """smartcols table formatting CLI."""
    pass


@cli.command()
@click.argument("input_file", type=click.File("r"), default="-")
@click.option(
    "--manifest",
    "-m",
    "manifest_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML table layout. Without it the first input row holds the headers.",
)
@click.option("--delimiter", "-d", default="\t", help="Input field delimiter (default: tab).")
@click.option(
    "--tree",
    is_flag=True,
    help="Make the first column the tree column.",
)
@click.option(
    "--indent",
    default=2,
    type=click.IntRange(1),
    help="Leading spaces per tree level in tree input (default: 2).",
)
@click.option("--sort", "sort_column", help="Sort lines by this column.")
@click.option("--numeric", is_flag=True, help="Compare the --sort column numerically.")
@click.option("--ascii", "use_ascii", is_flag=True, help="Draw the tree with ASCII characters.")
@click.option("--noheadings", "-n", is_flag=True, help="Do not print the header line.")
@click.option("--raw", "-r", is_flag=True, help="Print unaligned, separator-joined cells.")
@click.option("--separator", "-s", help="Output column separator.")
@click.option("--title", help="Table title.")
@click.option(
    "--width",
    "-w",
    type=click.IntRange(1),
    help="Terminal width the aligned output is fitted to.",
)
def render(
    input_file: TextIO,
    manifest_path: str | None,
    delimiter: str,
    tree: bool,
    indent: int,
    sort_column: str | None,
    numeric: bool,
    use_ascii: bool,
    noheadings: bool,
    raw: bool,
    separator: str | None,
    title: str | None,
    width: int | None,
) -> None:
    """Format delimited rows from INPUT_FILE (default: stdin) as a table.

    In tree mode the depth of every row is its leading indentation in the
    first field; a row hangs under the closest preceding row one level up.
    """
    rows = [row.rstrip("\r\n") for row in input_file]
    rows = [row for row in rows if row.strip()]

    manifest: TableManifest | None = None
    try:
        if manifest_path is not None:
            manifest = TableManifest.from_yaml(Path(manifest_path).read_text())
            table = manifest.build_table()
        else:
            if not rows:
                click.echo("✗ No input rows", err=True)
                sys.exit(1)
            table = Table()
            for header in rows.pop(0).split(delimiter):
                table.new_column(header.strip())
    except (SmartcolsError, OSError) as e:
        click.echo(f"✗ Failed to set up table: {e}", err=True)
        sys.exit(1)

    try:
        first = table.get_column(0)
        if tree and first is not None:
            first.tree = True

        _fill_table(table, rows, delimiter, indent)

        column_name = sort_column or (manifest.sort_by if manifest is not None else None)
        if column_name:
            _sort(table, column_name, numeric)

        if use_ascii:
            table.ascii = True
        if noheadings:
            table.noheadings = True
        if raw:
            table.raw = True
        if separator is not None:
            table.column_separator = separator
        if title is not None:
            table.title.set_data(title)
        if width is not None:
            table.termwidth = width

        output = format_table(table)
    except (SmartcolsError, ValueError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    finally:
        table.unref()

    if output:
        click.echo(output)


@cli.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False))
def check(manifest_path: str) -> None:
    """Validate a YAML table layout and list its columns."""
    try:
        manifest = TableManifest.from_yaml(Path(manifest_path).read_text())
        layout = manifest.build_table()
    except SmartcolsError as e:
        click.echo(f"✗ Invalid manifest: {e}", err=True)
        sys.exit(1)

    summary = Table()
    try:
        summary.new_column("COLUMN")
        summary.new_column("WHINT", flags=ColumnFlags.RIGHT)
        summary.new_column("FLAGS")
        summary.new_column("SORT")

        for decl in manifest.columns:
            line = summary.new_line()
            line.set_data(0, decl.name)
            line.set_data(1, f"{decl.whint:g}")
            line.set_data(2, ",".join(decl.flags) or "-")
            line.set_data(3, decl.sort or "-")

        click.echo(f"✓ {manifest_path}: {layout.ncols} column(s), tree={layout.is_tree}")
        click.echo(format_table(summary))
    finally:
        summary.unref()
        layout.unref()


def _fill_table(table: Table, rows: list[str], delimiter: str, indent: int) -> None:
    """Add one line per row; in tree mode indentation picks the parent."""
    stack: list[Line] = []
    for number, row in enumerate(rows, start=1):
        depth = 0
        if table.is_tree:
            stripped = row.lstrip(" ")
            depth = min((len(row) - len(stripped)) // indent, len(stack))
            row = stripped

        fields = row.split(delimiter)
        if len(fields) > table.ncols:
            raise ValueError(
                f"row {number} has {len(fields)} fields, the table has {table.ncols} columns"
            )

        parent = stack[depth - 1] if depth > 0 else None
        line = table.new_line(parent)
        for n, value in enumerate(fields):
            line.set_data(n, value.strip())
        stack[depth:] = [line]


def _sort(table: Table, column_name: str, numeric: bool) -> None:
    column = table.get_column_by_name(column_name)
    if column is None:
        raise ValueError(f"No such column: {column_name}")
    if numeric:
        column.set_cmpfunc(cmpnum_cells)
    elif column.cmpfunc is None:
        column.set_cmpfunc(cmpstr_cells)
    table.sort(column)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
