"""Exceptions for smartcols."""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class SmartcolsError(Exception):
    """
    Base exception for all smartcols errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Structural Exceptions
# ---------------------------------------------------------------------------


class InvalidArgumentError(SmartcolsError, ValueError):
    """
    Raised when an argument is absent or a structural precondition fails.

    Examples are adding a column to a table that already holds lines,
    adding a line to a table without columns, sorting by a column that has
    no comparator, or binding an object that already belongs to a table.

    Attributes:
        argument: Name of the offending argument
        reason: Human readable explanation
    """

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid {argument}: {reason}")


class AllocationError(SmartcolsError, MemoryError):
    """
    Raised when memory is exhausted while building an object or a copy.

    Attributes:
        operation: The operation that failed (e.g. "copy table")
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Allocation failed during {operation}")


# ---------------------------------------------------------------------------
# Manifest Exceptions
# ---------------------------------------------------------------------------


class ManifestError(SmartcolsError, ValueError):
    """
    Raised when a table layout manifest cannot be parsed or validated.

    Attributes:
        field: Dotted path of the offending manifest field
        value: The rejected value
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid manifest field '{field}' ({value!r}): {reason}")
