"""Statistical indicators over a window of series history."""

from __future__ import annotations

import math
import sys
from typing import Any

from ..values import NA, PineTypeError, as_number


def _window(length: Any) -> int:
    number = as_number(length)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return sys.maxsize
    return min(int(number), sys.maxsize)


def _history(interp: Any, source: Any, length: Any) -> list:
    window = _window(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    return interp.get_series_values(source, window)


def _mean(values: list) -> float:
    return sum(values) / len(values)


def _population_variance(values: list) -> float:
    mean = _mean(values)
    return sum((value - mean) * (value - mean) for value in values) / len(values)


def stdev(interp: Any, source: Any, length: Any) -> Any:
    """Population standard deviation over the last ``length`` bars."""
    values = _history(interp, source, length)
    if not values:
        return NA
    if len(values) == 1:
        return 0.0
    return math.sqrt(_population_variance(values))


def variance(interp: Any, source: Any, length: Any) -> Any:
    """Population variance over the last ``length`` bars."""
    values = _history(interp, source, length)
    if not values:
        return NA
    if len(values) == 1:
        return 0.0
    return _population_variance(values)


def median(interp: Any, source: Any, length: Any) -> Any:
    """Median over the last ``length`` bars."""
    values = sorted(_history(interp, source, length))
    if not values:
        return NA
    mid = len(values) // 2
    if len(values) % 2 == 0:
        return (values[mid - 1] + values[mid]) / 2.0
    return values[mid]


def dev(interp: Any, source: Any, length: Any) -> Any:
    """Mean absolute deviation over the last ``length`` bars."""
    values = _history(interp, source, length)
    if not values:
        return NA
    mean = _mean(values)
    return sum(abs(value - mean) for value in values) / len(values)