"""Explicit shared-ownership counting for table entities.

Tables, columns, lines and symbols follow the same lifecycle: an object is
born holding one counted reference, every owner calls :meth:`RefCounted.ref`
when it takes a share and :meth:`RefCounted.unref` when it lets go. The
object is torn down exactly once, when the last counted reference is
dropped. Structural back-links (column to table, child to parent) are never
counted.

The counters are not atomic. Callers serialize access to any object that
can be reached from more than one thread.
"""

from __future__ import annotations

import logging
from typing import TypeVar

logger = logging.getLogger(__name__)

_T = TypeVar("_T", bound="RefCounted")


class RefCounted:
    """Base class for reference-counted entities."""

    def __init__(self) -> None:
        self._refcount = 1
        self._released = False

    @property
    def refcount(self) -> int:
        """Number of counted holders."""
        return self._refcount

    @property
    def released(self) -> bool:
        """True once the last counted reference has been dropped."""
        return self._released

    def ref(self: _T) -> _T:
        """Take a counted reference and return the object."""
        self._refcount += 1
        return self

    def unref(self) -> None:
        """Drop a counted reference, tearing the object down at zero."""
        if self._released:
            return
        self._refcount -= 1
        if self._refcount <= 0:
            self._refcount = 0
            self._released = True
            logger.debug("dealloc %r", self)
            self._release()

    def _release(self) -> None:
        """Free owned resources. Called once, when the count reaches zero."""
