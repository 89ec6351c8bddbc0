"""
Numeric helpers: rounding, clamping, sequence generation, averages.

These are thin wrappers over numpy that return plain Python values, so
callers never have to deal with numpy scalar or array types.
"""

from typing import Iterable, List, Optional

import numpy as np

from utilkit.utils.errors import InvalidArgument


def round_to(value: float, decimals: int = 0) -> float:
    """
    Round to `decimals` places, with halves rounded away from zero.

    **Conceptual**: Python's round() and np.round() use banker's rounding
    (round(2.5) == 2). For display values people expect 2.5 -> 3 and
    -2.5 -> -3, which is what this function does.

    **Mathematical**:
        round_to(x, d) = sign(x) * floor(|x| * 10^d + 0.5) / 10^d

    **Edge cases**:
    - Negative `decimals` rounds to tens, hundreds, ...: round_to(1250, -2) -> 1300.0
    - Float representation still applies: 1.005 is stored as 1.00499..., so
      round_to(1.005, 2) gives 1.0.

    Args:
        value: Number to round.
        decimals: Number of decimal places (may be negative).

    Returns:
        Rounded value as a Python float.
    """
    factor = 10.0 ** decimals
    return float(np.sign(value) * np.floor(np.abs(value) * factor + 0.5) / factor)


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Limit `value` to the closed interval [lower, upper].

    Raises:
        InvalidArgument: If lower > upper.
    """
    if lower > upper:
        raise InvalidArgument(f"clamp lower bound {lower} is greater than upper bound {upper}")
    return np.clip(value, lower, upper).item()


def range_sequence(start: float, stop: Optional[float] = None, step: float = 1) -> List[float]:
    """
    Generate an arithmetic sequence, half-open like range() but allowing floats.

    **Functionally**:
    - range_sequence(5) -> [0, 1, 2, 3, 4]
    - range_sequence(1, 3, 0.5) -> [1.0, 1.5, 2.0, 2.5]
    - range_sequence(5, 0, -2) -> [5, 3, 1]
    - An empty list when the step points away from stop.

    Args:
        start: First value (or the stop value when stop is omitted).
        stop: Exclusive end.
        step: Increment; must not be zero.

    Returns:
        List of Python numbers (ints when all inputs are ints).

    Raises:
        InvalidArgument: If step is zero.
    """
    if step == 0:
        raise InvalidArgument("range_sequence step must not be zero")
    if stop is None:
        start, stop = 0, start
    return np.arange(start, stop, step).tolist()


def linspace_sequence(start: float, stop: float, count: int) -> List[float]:
    """
    `count` evenly spaced values from start to stop, both ends included.

    Raises:
        InvalidArgument: If count is negative.
    """
    if count < 0:
        raise InvalidArgument(f"linspace_sequence count must be non-negative, got: {count}")
    return np.linspace(start, stop, count).tolist()


def average(values: Iterable[float]) -> float:
    """
    Arithmetic mean of the values.

    Raises:
        InvalidArgument: If there are no values.
    """
    data = list(values)
    if not data:
        raise InvalidArgument("average of an empty sequence is undefined")
    return float(np.mean(data))
