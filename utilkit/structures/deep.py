"""
Recursive structural equality and cloning.

**Conceptual**: deep_equal and deep_clone walk a value as a tree over a closed
set of variants:

  - primitive: None, bool, int, float, complex, str, bytes, Decimal, and the
    datetime value types. Compared by value, returned as-is when cloning
    (they are immutable).
  - sequence: list and tuple. Compared element-wise in order.
  - mapping: any Mapping. Compared by key set and per-key values, ignoring
    insertion order.

Sets and frozensets are accepted as unordered collections of hashable values.

**Why an explicit traversal instead of a serialize/parse round trip?**
A round trip through a text format silently drops or rewrites values it
cannot represent. An explicit traversal makes the rules visible: equality of
`True` and `1` is rejected on purpose, unsupported values raise instead of
vanishing, and the cycle policy is checked explicitly. The traversal keeps its
own stack of containers, so arbitrarily deep nesting never reaches the
interpreter recursion limit.

**Edge cases**:
  - Cyclic input raises InvalidArgument (a container seen again on the
    current path).
  - An optional depth limit (max_depth argument or Settings.max_depth)
    raises InvalidArgument for deeper nesting; by default there is none.
  - The same object appearing twice in *separate* branches is fine; it is
    cloned twice.
"""

import datetime
import decimal
import math
from collections.abc import Mapping, Set as AbstractSet
from typing import Any, Iterator, List, Optional, Set, Tuple

from utilkit.config.settings import get_settings
from utilkit.utils.errors import InvalidArgument

PRIMITIVE_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)

SEQUENCE_TYPES = (list, tuple)

SET_TYPES = (set, frozenset)

CONTAINER_TYPES = (Mapping,) + SEQUENCE_TYPES + SET_TYPES


def _resolve_max_depth(max_depth: Optional[int]) -> Optional[int]:
    if max_depth is None:
        return get_settings().max_depth
    if max_depth < 1:
        raise InvalidArgument(f"max_depth must be at least 1, got: {max_depth}")
    return max_depth


def _enter(value: Any, path: Set[int], depth: int, max_depth: Optional[int]) -> None:
    """Guard a container before descending into it."""
    if id(value) in path:
        raise InvalidArgument("Cyclic structure detected; cyclic values are not supported")
    if max_depth is not None and depth >= max_depth:
        raise InvalidArgument(f"Structure nested deeper than max_depth={max_depth}")
    path.add(id(value))


def _primitive_equal(x: Any, y: Any) -> bool:
    # bool is a subclass of int; keep True distinct from 1
    if isinstance(x, bool) or isinstance(y, bool):
        return type(x) is type(y) and x == y
    if isinstance(x, float) and isinstance(y, float) and math.isnan(x) and math.isnan(y):
        return True
    return x == y


def deep_equal(x: Any, y: Any, max_depth: Optional[int] = None) -> bool:
    """
    Structural equality of two arbitrarily nested values.

    **Rules**:
      - Primitives compare by value; bools only equal bools; NaN equals NaN.
      - Sequences (list or tuple, interchangeably) compare element-wise in order.
      - Mappings compare by equal key sets and recursively equal values,
        ignoring key insertion order.
      - Sets (set or frozenset, interchangeably) are equal when their members
        pair up one-to-one under these same rules, so {True} != {1}.
      - A sequence never equals a mapping, a set, or a primitive.
      - Anything else falls back to ==.

    Args:
        x: First value.
        y: Second value.
        max_depth: Optional nesting limit (defaults to Settings.max_depth,
                   which is unlimited unless configured).

    Returns:
        True if the values are structurally equal.

    Raises:
        InvalidArgument: On cyclic input or nesting deeper than max_depth.

    Example:
        >>> deep_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})
        True
        >>> deep_equal({"a": 1}, {"a": 2})
        False
    """
    return _equal(x, y, _resolve_max_depth(max_depth))


# Returned by _compare when both values are containers whose children still
# have to be compared
_DESCEND = object()


def _compare(x: Any, y: Any, limit: Optional[int]) -> Any:
    """Compare everything that can be decided without looking at children."""
    if x is y and isinstance(x, PRIMITIVE_TYPES):
        return True

    if isinstance(x, Mapping) or isinstance(y, Mapping):
        if not (isinstance(x, Mapping) and isinstance(y, Mapping)):
            return False
        return _DESCEND if x.keys() == y.keys() else False

    if isinstance(x, SEQUENCE_TYPES) or isinstance(y, SEQUENCE_TYPES):
        if not (isinstance(x, SEQUENCE_TYPES) and isinstance(y, SEQUENCE_TYPES)):
            return False
        return _DESCEND if len(x) == len(y) else False

    if isinstance(x, SET_TYPES) or isinstance(y, SET_TYPES):
        if not (isinstance(x, SET_TYPES) and isinstance(y, SET_TYPES)):
            return False
        return _set_equal(x, y, limit)

    if isinstance(x, PRIMITIVE_TYPES) and isinstance(y, PRIMITIVE_TYPES):
        return _primitive_equal(x, y)

    return x == y


def _child_pairs(x: Any, y: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(x, Mapping):
        return ((x[key], y[key]) for key in x)
    return zip(x, y)


def _set_equal(x: AbstractSet, y: AbstractSet, limit: Optional[int]) -> bool:
    # Members are hashable, so they can never lead back to an enclosing container
    if len(x) != len(y):
        return False
    unmatched = list(y)
    for member in x:
        for index, candidate in enumerate(unmatched):
            if _equal(member, candidate, limit):
                del unmatched[index]
                break
        else:
            return False
    return True


def _equal(x: Any, y: Any, limit: Optional[int]) -> bool:
    outcome = _compare(x, y, limit)
    if outcome is not _DESCEND:
        return outcome

    path_x: Set[int] = set()
    path_y: Set[int] = set()
    _enter(x, path_x, 0, limit)
    _enter(y, path_y, 0, limit)

    # Explicit stack of child-pair iterators so nesting depth never hits the recursion limit
    stack = [(x, y, _child_pairs(x, y))]
    while stack:
        parent_x, parent_y, pairs = stack[-1]
        for a, b in pairs:
            outcome = _compare(a, b, limit)
            if outcome is _DESCEND:
                _enter(a, path_x, len(stack), limit)
                _enter(b, path_y, len(stack), limit)
                stack.append((a, b, _child_pairs(a, b)))
                break
            if not outcome:
                return False
        else:
            stack.pop()
            path_x.discard(id(parent_x))
            path_y.discard(id(parent_y))
    return True


def deep_clone(value: Any, max_depth: Optional[int] = None) -> Any:
    """
    Recursively duplicate every nested container of `value`.

    The result is deep_equal to `value` and shares no mutable storage with it:
    mutating any list, dict, or set inside the clone leaves the original
    untouched.

    Lists become new lists, tuples new tuples, any Mapping a new dict, and
    sets new sets (frozensets stay frozensets). Primitives are returned as-is.

    Args:
        value: Value built from primitives, sequences, mappings, and sets.
        max_depth: Optional nesting limit (defaults to Settings.max_depth,
                   which is unlimited unless configured).

    Returns:
        The cloned value.

    Raises:
        InvalidArgument: On cyclic input, nesting deeper than max_depth, or a
                         value outside the supported variants (functions,
                         arbitrary objects).
    """
    return _clone(value, _resolve_max_depth(max_depth))


class _CloneFrame:
    """One container being copied: its source, remaining entries, and copied entries."""

    def __init__(self, source: Any):
        self.source = source
        if isinstance(source, Mapping):
            self.entries = iter(source.items())
        else:
            self.entries = ((None, item) for item in source)
        self.key = None
        self.built: List[Tuple[Any, Any]] = []

    def finish(self) -> Any:
        source = self.source
        if isinstance(source, Mapping):
            return dict(self.built)
        items = [item for _, item in self.built]
        if isinstance(source, tuple):
            return tuple(items)
        if isinstance(source, frozenset):
            return frozenset(items)
        if isinstance(source, set):
            return set(items)
        return items


def _clone_leaf(value: Any) -> Any:
    if isinstance(value, PRIMITIVE_TYPES):
        return value
    raise InvalidArgument(
        f"Cannot clone value of type {type(value).__name__}; "
        "only primitives, lists, tuples, mappings, and sets are supported"
    )


def _clone(value: Any, limit: Optional[int]) -> Any:
    if not isinstance(value, CONTAINER_TYPES):
        return _clone_leaf(value)

    path: Set[int] = set()
    _enter(value, path, 0, limit)
    stack = [_CloneFrame(value)]
    while True:
        frame = stack[-1]
        for key, item in frame.entries:
            if isinstance(item, CONTAINER_TYPES):
                _enter(item, path, len(stack), limit)
                frame.key = key
                stack.append(_CloneFrame(item))
                break
            frame.built.append((key, _clone_leaf(item)))
        else:
            stack.pop()
            path.discard(id(frame.source))
            result = frame.finish()
            if not stack:
                return result
            parent = stack[-1]
            parent.built.append((parent.key, result))
