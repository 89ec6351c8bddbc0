"""
Error classes raised by utilkit.

**Conceptual**: The library has exactly one kind of error of its own: a caller
passed something the operation is not defined for (a non-positive chunk size,
a cyclic structure, a negative duration). Those conditions fail fast with
InvalidArgument instead of looping forever or overflowing the stack.

Errors raised by *caller-supplied* operations (for example the target wrapped
by a Debouncer) are never wrapped or translated; they propagate unchanged.
"""


class UtilkitError(Exception):
    """Base class for all errors raised by utilkit itself."""


class InvalidArgument(UtilkitError, ValueError):
    """
    Raised when an argument violates an operation's precondition.

    Subclasses ValueError so callers that already guard against bad values
    with `except ValueError` keep working.
    """
