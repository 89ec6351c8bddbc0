"""
Transforms over ordered sequences.

Every function takes any iterable-backed sequence (list, tuple, ...) and
returns a new list; inputs are never mutated. Membership tests in
difference/intersection/unique use deep_equal, so nested and unhashable
elements (dicts, lists) are compared by value rather than identity.
"""

import math
from typing import Any, Iterable, List, Optional, Sequence

from utilkit.structures.deep import SEQUENCE_TYPES, deep_equal
from utilkit.utils.errors import InvalidArgument


def chunk(seq: Sequence[Any], size: int) -> List[List[Any]]:
    """
    Partition a sequence left-to-right into groups of `size`.

    The final group holds the remainder and may be shorter.

    Args:
        seq: Ordered sequence to split.
        size: Positive group size.

    Returns:
        List of lists, e.g. chunk([1, 2, 3, 4, 5], 2) -> [[1, 2], [3, 4], [5]].

    Raises:
        InvalidArgument: If size is not a positive integer.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidArgument(f"chunk size must be a positive integer, got: {size!r}")
    items = list(seq)
    return [items[i:i + size] for i in range(0, len(items), size)]


def flatten(seq: Iterable[Any], depth: Optional[int] = 1) -> List[Any]:
    """
    Concatenate nested lists/tuples into one list, preserving order.

    Only list and tuple elements are descended into; strings, bytes and
    mappings are kept whole.

    Args:
        seq: Possibly nested sequence.
        depth: How many levels to flatten. 1 (default) removes one level of
               nesting, 0 returns a shallow copy, None flattens completely.

    Returns:
        Flattened list.

    Raises:
        InvalidArgument: If depth is negative.

    Example:
        >>> flatten([[1, [2, 3]], [4]])
        [1, [2, 3], 4]
        >>> flatten([[1, [2, 3]], [4]], depth=None)
        [1, 2, 3, 4]
    """
    if depth is not None and depth < 0:
        raise InvalidArgument(f"flatten depth must be non-negative or None, got: {depth}")

    result: List[Any] = []
    # Explicit stack of iterators so unbounded flattening never hits the recursion limit
    stack = [(iter(seq), 0)]
    while stack:
        iterator, level = stack[-1]
        for item in iterator:
            if isinstance(item, SEQUENCE_TYPES) and (depth is None or level < depth):
                stack.append((iter(item), level + 1))
                break
            result.append(item)
        else:
            stack.pop()
    return result


def flatten_deep(seq: Iterable[Any]) -> List[Any]:
    """Flatten every level of nesting: flatten_deep([[1, [2, 3]], [4]]) -> [1, 2, 3, 4]."""
    return flatten(seq, depth=None)


def _is_falsy(item: Any) -> bool:
    if isinstance(item, float) and math.isnan(item):
        return True
    return not item


def compact(seq: Iterable[Any]) -> List[Any]:
    """
    Drop falsy elements: None, False, zero, empty strings/containers, and NaN.

    Survivors keep their original order, so compact is idempotent.
    """
    return [item for item in seq if not _is_falsy(item)]


def _contains(haystack: Sequence[Any], needle: Any) -> bool:
    return any(deep_equal(needle, candidate) for candidate in haystack)


def difference(a: Iterable[Any], b: Iterable[Any]) -> List[Any]:
    """
    Elements of `a` that do not appear in `b` (by value).

    Order and duplicates come from `a`: difference([1, 2, 3], [2]) -> [1, 3].
    """
    excluded = list(b)
    return [item for item in a if not _contains(excluded, item)]


def intersection(a: Iterable[Any], b: Iterable[Any]) -> List[Any]:
    """
    Elements of `a` that also appear in `b` (by value).

    Order and duplicates come from `a`: intersection([1, 2, 3], [2, 3, 4]) -> [2, 3].
    """
    included = list(b)
    return [item for item in a if _contains(included, item)]


def unique(seq: Iterable[Any]) -> List[Any]:
    """Keep the first occurrence of each value, in order."""
    seen: List[Any] = []
    for item in seq:
        if not _contains(seen, item):
            seen.append(item)
    return seen
