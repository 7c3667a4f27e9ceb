"""Restartable cursors over the ordered sequences of a table."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Generic, TypeVar

_T = TypeVar("_T")


class Direction(Enum):
    """Traversal direction of an :class:`Iter`."""

    FORWARD = "forward"
    BACKWARD = "backward"


class Iter(Generic[_T]):
    """
    Forward or backward cursor over a table-owned sequence.

    A fresh (or reset) iterator is unbound. The first step binds it to the
    sequence it is asked to walk and positions it before the first element
    (forward) or after the last one (backward). Structural changes to the
    bound sequence during a traversal invalidate the cursor.

    Example:
        itr = Iter(Direction.BACKWARD)
        while (column := table.next_column(itr)) is not None:
            print(column.name)
    """

    def __init__(self, direction: Direction = Direction.FORWARD) -> None:
        self._direction = direction
        self._seq: Sequence[_T] | None = None
        self._pos = -1

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def is_bound(self) -> bool:
        """True once the iterator has been bound to a sequence."""
        return self._seq is not None

    def reset(self, direction: Direction | None = None) -> None:
        """Unbind the iterator, optionally switching its direction."""
        if direction is not None:
            self._direction = direction
        self._seq = None
        self._pos = -1

    def step(self, seq: Sequence[_T]) -> _T | None:
        """
        Advance over ``seq`` and return the next element.

        Args:
            seq: Sequence to walk; only used to bind an unbound iterator

        Returns:
            The next element in the chosen direction, or None when the
            traversal is exhausted
        """
        if self._seq is None:
            self._seq = seq
            self._pos = -1 if self._direction is Direction.FORWARD else len(seq)

        if self._direction is Direction.FORWARD:
            if self._pos + 1 >= len(self._seq):
                self._pos = len(self._seq)
                return None
            self._pos += 1
        else:
            if self._pos - 1 < 0:
                self._pos = -1
                return None
            self._pos -= 1
        return self._seq[self._pos]
