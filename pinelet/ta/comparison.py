"""Comparison and signal indicators: change, extremes, crosses and trends."""

from __future__ import annotations

import math
import sys
from typing import Any

from ..values import NA, PineTypeError, Series, as_number

_MAX_WINDOW = sys.maxsize - 1


def _to_count(length: Any) -> int:
    """Convert a length to a non-negative count, saturating like an unsigned cast."""
    number = as_number(length)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return _MAX_WINDOW
    return min(int(number), _MAX_WINDOW)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_window(length: Any) -> int:
    window = _to_count(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    return window


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a <= b else b


def change(interp: Any, source: Any, length: Any = 1.0) -> Any:
    """Difference between the current value and the value ``length`` bars ago."""
    count = _to_count(length)
    if isinstance(source, Series):
        if not _is_number(source.current):
            raise PineTypeError("Series must contain numbers")
        current = float(source.current)
        if count == 0:
            return 0.0
        provider = getattr(interp, "historical_provider", None)
        if provider is not None:
            previous = provider.get_historical(source.id, count)
            if _is_number(previous):
                return current - float(previous)
        return NA
    if _is_number(source):
        return 0.0
    raise PineTypeError("source must be a number or series")


def highest(interp: Any, source: Any, length: Any) -> Any:
    """Highest value over the last ``length`` bars."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    result = -math.inf
    for value in values:
        result = _fmax(result, value)
    return result


def lowest(interp: Any, source: Any, length: Any) -> Any:
    """Lowest value over the last ``length`` bars."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    result = math.inf
    for value in values:
        result = _fmin(result, value)
    return result


def _last_two(interp: Any, source1: Any, source2: Any):
    first = interp.get_series_values(source1, 2)
    second = interp.get_series_values(source2, 2)
    if len(first) < 2 or len(second) < 2:
        return None
    return first, second


def cross(interp: Any, source1: Any, source2: Any) -> bool:
    """True when the two series crossed each other on this bar."""
    pair = _last_two(interp, source1, source2)
    if pair is None:
        return False
    (cur1, prev1), (cur2, prev2) = pair[0][:2], pair[1][:2]
    return (prev1 < prev2 and cur1 > cur2) or (prev1 > prev2 and cur1 < cur2)


def crossover(interp: Any, source1: Any, source2: Any) -> bool:
    """True when ``source1`` crossed above ``source2`` on this bar."""
    pair = _last_two(interp, source1, source2)
    if pair is None:
        return False
    (cur1, prev1), (cur2, prev2) = pair[0][:2], pair[1][:2]
    return prev1 <= prev2 and cur1 > cur2


def crossunder(interp: Any, source1: Any, source2: Any) -> bool:
    """True when ``source1`` crossed below ``source2`` on this bar."""
    pair = _last_two(interp, source1, source2)
    if pair is None:
        return False
    (cur1, prev1), (cur2, prev2) = pair[0][:2], pair[1][:2]
    return prev1 >= prev2 and cur1 < cur2


def _trend(interp: Any, source: Any, length: Any, rising_: bool) -> bool:
    count = _to_count(length)
    if count == 0:
        return False
    values = interp.get_series_values(source, count + 1)
    if len(values) <= count:
        return False
    current, previous = values[0], values[1 : count + 1]
    if rising_:
        return all(current > value for value in previous)
    return all(current < value for value in previous)


def rising(interp: Any, source: Any, length: Any) -> bool:
    """True when the current value exceeds each of the previous ``length`` values."""
    return _trend(interp, source, length, True)


def falling(interp: Any, source: Any, length: Any) -> bool:
    """True when the current value is below each of the previous ``length`` values."""
    return _trend(interp, source, length, False)


def highestbars(interp: Any, source: Any, length: Any) -> Any:
    """Offset (0 or negative) to the highest value over ``length`` bars."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    best_index, best = 0, values[0]
    for index, value in enumerate(values):
        if value > best:
            best_index, best = index, value
    return -float(best_index)


def lowestbars(interp: Any, source: Any, length: Any) -> Any:
    """Offset (0 or negative) to the lowest value over ``length`` bars."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    best_index, best = 0, values[0]
    for index, value in enumerate(values):
        if value < best:
            best_index, best = index, value
    return -float(best_index)