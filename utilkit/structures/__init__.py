"""
Pure operations over ordered sequences and keyed mappings.

Nothing in this package mutates its inputs; every operation returns a new value.
"""

from utilkit.structures.deep import deep_clone, deep_equal
from utilkit.structures.mappings import omit, pick
from utilkit.structures.sequences import (
    chunk,
    compact,
    difference,
    flatten,
    flatten_deep,
    intersection,
    unique,
)

__all__ = [
    "chunk",
    "compact",
    "deep_clone",
    "deep_equal",
    "difference",
    "flatten",
    "flatten_deep",
    "intersection",
    "omit",
    "pick",
    "unique",
]
