"""Moving averages over a window of series history."""

from __future__ import annotations

import math
import sys
from typing import Any, Callable

from ..values import NA, PineTypeError, Series, UndefinedVariableError, as_number


def _window(length: Any) -> int:
    """Convert a length to a count, saturating like an unsigned cast."""
    number = as_number(length)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return sys.maxsize
    return min(int(number), sys.maxsize)


def _positive_window(length: Any) -> int:
    window = _window(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    return window


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _series_history(interp: Any, series: Series, limit: int) -> list:
    """Current value followed by up to ``limit - 1`` earlier values."""
    if not _is_number(series.current):
        raise PineTypeError("Series must contain numbers")
    values = [float(series.current)]
    provider = getattr(interp, "historical_provider", None)
    if provider is not None:
        for offset in range(1, limit):
            previous = provider.get_historical(series.id, offset)
            if not _is_number(previous):
                break
            values.append(float(previous))
    return values


def _smooth(values: list, length: int, step: Callable[[float, float], float]) -> float:
    """Seed with the mean of the newest values, then fold the rest oldest first."""
    seed_count = min(length, len(values))
    result = sum(values[:seed_count]) / seed_count
    for value in reversed(values[: len(values) - seed_count]):
        result = step(result, value)
    return step(result, values[0])


def _weighted(values: list) -> float:
    """Linearly weighted mean with the newest value weighted most."""
    count = len(values)
    weighted_sum = 0.0
    weight_sum = 0.0
    for index, value in enumerate(values):
        weight = float(count - index)
        weighted_sum += value * weight
        weight_sum += weight
    if weight_sum == 0.0:
        return 0.0
    return weighted_sum / weight_sum


def _numeric_source(source: Any) -> float:
    if _is_number(source):
        return float(source)
    raise PineTypeError("source must be a number or series")


def sma(interp: Any, source: Any, length: Any) -> Any:
    """Simple moving average over the last ``length`` bars."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    return sum(values) / len(values)


def ema(interp: Any, source: Any, length: Any) -> Any:
    """Exponential moving average with multiplier ``2 / (length + 1)``."""
    window = _positive_window(length)
    multiplier = 2.0 / (float(window) + 1.0)
    if isinstance(source, Series):
        values = _series_history(interp, source, window * 2)
        return _smooth(
            values, window, lambda prev, value: (value - prev) * multiplier + prev
        )
    return _numeric_source(source)


def rma(interp: Any, source: Any, length: Any) -> Any:
    """Wilder's rolling moving average with ``alpha = 1 / length``."""
    window = _positive_window(length)
    if isinstance(source, Series):
        values = _series_history(interp, source, window * 2)
        alpha = 1.0 / float(window)
        return _smooth(
            values, window, lambda prev, value: alpha * value + (1.0 - alpha) * prev
        )
    return _numeric_source(source)


def wma(interp: Any, source: Any, length: Any) -> Any:
    """Weighted moving average; the newest value carries the largest weight."""
    window = _positive_window(length)
    if isinstance(source, Series):
        return _weighted(_series_history(interp, source, window))
    return _numeric_source(source)


def vwma(interp: Any, source: Any, length: Any) -> Any:
    """Volume weighted moving average using the ``volume`` variable."""
    window = _positive_window(length)
    prices = interp.get_series_values(source, window)
    if not prices:
        return NA
    volume = interp.get_variable("volume")
    if volume is None:
        raise UndefinedVariableError("volume")
    volumes = interp.get_series_values(volume, window)
    if len(volumes) != len(prices):
        return NA
    weighted_sum = sum(price * vol for price, vol in zip(prices, volumes))
    volume_sum = sum(volumes)
    if volume_sum == 0.0:
        return NA
    return weighted_sum / volume_sum


def hma(interp: Any, source: Any, length: Any) -> Any:
    """Hull moving average, without the final square-root smoothing pass."""
    window = _positive_window(length)
    half = int(math.floor(window / 2.0))
    root = int(math.floor(math.sqrt(window)))
    values = interp.get_series_values(source, window)
    if not values or len(values) < root:
        return NA
    half_average = _weighted(values[: min(half, len(values))])
    full_average = _weighted(values)
    return 2.0 * half_average - full_average


def swma(interp: Any, source: Any) -> Any:
    """Symmetrically weighted average over four bars with weights 1, 2, 2, 1."""
    values = interp.get_series_values(source, 4)
    if len(values) < 4:
        return NA
    return (values[0] * 1.0 + values[1] * 2.0 + values[2] * 2.0 + values[3] * 1.0) / 6.0