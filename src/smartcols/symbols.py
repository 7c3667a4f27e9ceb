"""Glyphs used to draw tree branches and padding.

A :class:`Symbols` value is shared: any number of tables may hold a counted
reference to the same instance, and it lives as long as its longest holder.
"""

from __future__ import annotations

from .exceptions import InvalidArgumentError
from .refcount import RefCounted

# U+251C, U+2500, U+2502, U+2514
UTF8_BRANCH = "├─"
UTF8_VERTICAL = "│ "
UTF8_RIGHT = "└─"

ASCII_BRANCH = "|-"
ASCII_VERTICAL = "| "
ASCII_RIGHT = "`-"

DEFAULT_PADDING = " "


class Symbols(RefCounted):
    """
    Tree-drawing and padding glyphs.

    Attributes:
        branch: Marker for a child that has following siblings
        vertical: Connector drawn below a branch that continues
        right: Marker for the last child of a parent
        title_padding: Fill used around the table title
        cell_padding: Fill used inside cells
    """

    def __init__(
        self,
        branch: str | None = None,
        vertical: str | None = None,
        right: str | None = None,
        title_padding: str | None = None,
        cell_padding: str | None = None,
    ) -> None:
        super().__init__()
        self._branch = _checked("branch", branch)
        self._vertical = _checked("vertical", vertical)
        self._right = _checked("right", right)
        self._title_padding = _checked("title_padding", title_padding)
        self._cell_padding = _checked("cell_padding", cell_padding)

    @classmethod
    def default(cls, use_ascii: bool) -> Symbols:
        """Create one of the two canonical glyph sets."""
        if use_ascii:
            branch, vertical, right = ASCII_BRANCH, ASCII_VERTICAL, ASCII_RIGHT
        else:
            branch, vertical, right = UTF8_BRANCH, UTF8_VERTICAL, UTF8_RIGHT
        return cls(
            branch=branch,
            vertical=vertical,
            right=right,
            title_padding=DEFAULT_PADDING,
            cell_padding=DEFAULT_PADDING,
        )

    @property
    def branch(self) -> str | None:
        return self._branch

    @branch.setter
    def branch(self, value: str | None) -> None:
        self._branch = _checked("branch", value)

    @property
    def vertical(self) -> str | None:
        return self._vertical

    @vertical.setter
    def vertical(self, value: str | None) -> None:
        self._vertical = _checked("vertical", value)

    @property
    def right(self) -> str | None:
        return self._right

    @right.setter
    def right(self, value: str | None) -> None:
        self._right = _checked("right", value)

    @property
    def title_padding(self) -> str | None:
        return self._title_padding

    @title_padding.setter
    def title_padding(self, value: str | None) -> None:
        self._title_padding = _checked("title_padding", value)

    @property
    def cell_padding(self) -> str | None:
        return self._cell_padding

    @cell_padding.setter
    def cell_padding(self, value: str | None) -> None:
        self._cell_padding = _checked("cell_padding", value)

    def copy(self) -> Symbols:
        """Return a new, unshared instance with the same glyphs."""
        return Symbols(
            branch=self._branch,
            vertical=self._vertical,
            right=self._right,
            title_padding=self._title_padding,
            cell_padding=self._cell_padding,
        )

    def _release(self) -> None:
        self._branch = self._vertical = self._right = None
        self._title_padding = self._cell_padding = None

    def __repr__(self) -> str:
        return (
            f"Symbols(branch={self._branch!r}, vertical={self._vertical!r}, "
            f"right={self._right!r})"
        )


def _checked(name: str, value: str | None) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(name, f"expected a string, got {type(value).__name__}")
    return value
