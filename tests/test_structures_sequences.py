"""
Tests for utilkit/structures/sequences.py

Small hand-written inputs where the expected output is obvious.
"""

import pytest

from utilkit.structures.sequences import (
    chunk,
    compact,
    difference,
    flatten,
    flatten_deep,
    intersection,
    unique,
)
from utilkit.utils.errors import InvalidArgument


def test_chunk_partitions_left_to_right():
    """The final chunk holds the remainder."""
    assert chunk([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunk([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]
    assert chunk([1, 2], 5) == [[1, 2]]
    assert chunk([], 3) == []


def test_chunk_accepts_any_sequence():
    """Tuples and strings are split into lists."""
    assert chunk((1, 2, 3), 2) == [[1, 2], [3]]
    assert chunk("abcde", 2) == [["a", "b"], ["c", "d"], ["e"]]


@pytest.mark.parametrize("size", [0, -1, 1.5, True, None])
def test_chunk_rejects_bad_sizes(size):
    """Size must be a positive integer."""
    with pytest.raises(InvalidArgument):
        chunk([1, 2, 3], size)


def test_chunk_does_not_mutate_input():
    """The input list is untouched and not aliased by the chunks."""
    data = [1, 2, 3]
    chunks = chunk(data, 3)
    chunks[0].append(4)

    assert data == [1, 2, 3]


def test_flatten_one_level_by_default():
    """Default depth removes exactly one level of nesting."""
    assert flatten([[1, [2, 3]], [4]]) == [1, [2, 3], 4]
    assert flatten([1, (2, 3), [4]]) == [1, 2, 3, 4]


def test_flatten_deep_removes_all_nesting():
    """flatten_deep recurses into every nested sequence."""
    assert flatten_deep([[1, [2, 3]], [4]]) == [1, 2, 3, 4]
    assert flatten_deep([[[[[]]]], 1, [[2], [[3, [4]]]]]) == [1, 2, 3, 4]


def test_flatten_explicit_depths():
    """depth=0 copies, depth=2 removes two levels."""
    nested = [1, [2, [3, [4]]]]

    assert flatten(nested, depth=0) == nested
    assert flatten(nested, depth=0) is not nested
    assert flatten(nested, depth=2) == [1, 2, 3, [4]]
    assert flatten(nested, depth=None) == [1, 2, 3, 4]


def test_flatten_keeps_strings_and_mappings_whole():
    """Only lists and tuples are descended into."""
    assert flatten_deep(["ab", ["cd", {"k": [1]}]]) == ["ab", "cd", {"k": [1]}]


def test_flatten_handles_very_deep_nesting():
    """Unbounded flattening does not depend on the recursion limit."""
    value = [1]
    for _ in range(5000):
        value = [value]

    assert flatten_deep(value) == [1]


def test_flatten_rejects_negative_depth():
    with pytest.raises(InvalidArgument):
        flatten([1], depth=-1)


def test_compact_removes_falsy_values():
    """None, False, zeros, empty strings/containers, and NaN are removed."""
    data = [0, 1, False, 2, "", 3, None, [], {}, 0.0, float("nan"), "a", [0]]

    assert compact(data) == [1, 2, 3, "a", [0]]


def test_compact_is_idempotent():
    """compact(compact(x)) == compact(x)."""
    data = [None, 1, "", "x", 0, [], [1]]

    once = compact(data)
    assert compact(once) == once


def test_difference_preserves_order_and_duplicates():
    """Elements of a not in b, in a's order."""
    assert difference([1, 2, 3], [2]) == [1, 3]
    assert difference([1, 1, 2, 3, 3], [2]) == [1, 1, 3, 3]
    assert difference([1, 2], []) == [1, 2]


def test_intersection_preserves_order_and_duplicates():
    """Elements of a that are in b, in a's order."""
    assert intersection([1, 2, 3], [2, 3, 4]) == [2, 3]
    assert intersection([3, 2, 3, 1], [3, 1]) == [3, 3, 1]
    assert intersection([1, 2], []) == []


def test_membership_is_by_value():
    """Unhashable and nested elements are compared structurally."""
    a = [{"id": 1}, {"id": 2}, [1, 2]]
    b = [{"id": 2}, [1, 2]]

    assert difference(a, b) == [{"id": 1}]
    assert intersection(a, b) == [{"id": 2}, [1, 2]]


def test_unique_keeps_first_occurrences():
    """Duplicates (by value) after the first are dropped."""
    assert unique([3, 1, 3, 2, 1]) == [3, 1, 2]
    assert unique([{"a": 1}, {"a": 1}, {"a": 2}]) == [{"a": 1}, {"a": 2}]
