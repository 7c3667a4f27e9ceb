"""Terminal probing used when a table is created."""

from __future__ import annotations

import codecs
import locale
import os
import shutil

DEFAULT_TERMWIDTH = 80


def get_terminal_width(default: int = DEFAULT_TERMWIDTH) -> int:
    """
    Detect the terminal width.

    Resolution order: ``COLUMNS`` env var → size of the controlling
    terminal → ``default``.
    """
    columns = os.environ.get("COLUMNS", "")
    if columns.isdigit() and int(columns) > 0:
        return int(columns)
    size = shutil.get_terminal_size(fallback=(0, 0))
    return size.columns if size.columns > 0 else default


def is_utf8_locale() -> bool:
    """True if the current locale encodes text as UTF-8."""
    encoding = locale.getpreferredencoding(False)
    try:
        return codecs.lookup(encoding).name == "utf-8"
    except LookupError:
        return False
