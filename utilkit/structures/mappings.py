"""
Field selection over keyed mappings.
"""

from typing import Any, Dict, Iterable, Mapping


def pick(mapping: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """
    Keep only the listed keys that exist in `mapping`.

    Result keys follow the order of `keys`; keys missing from `mapping` are
    skipped and repeated keys appear once. Values are not copied.

    Example:
        >>> pick({"a": 1, "b": 2, "c": 3}, ["a", "c"])
        {'a': 1, 'c': 3}
    """
    result: Dict[str, Any] = {}
    for key in keys:
        if key in mapping and key not in result:
            result[key] = mapping[key]
    return result


def omit(mapping: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """
    Copy `mapping` without the listed keys, preserving its key order.

    Example:
        >>> omit({"a": 1, "b": 2, "c": 3}, ["a", "c"])
        {'b': 2}
    """
    excluded = set(keys)
    return {key: value for key, value in mapping.items() if key not in excluded}
