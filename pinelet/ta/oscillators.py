"""Oscillators and momentum indicators over a window of series history."""

from __future__ import annotations

import math
import sys
from typing import Any

from ..values import NA, PineTypeError, as_number

_MAX_WINDOW = sys.maxsize - 1


def _count(length: Any) -> int:
    """Convert a length to a non-negative count, saturating like an unsigned cast."""
    number = as_number(length)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return _MAX_WINDOW
    return min(int(number), _MAX_WINDOW)


def _positive_window(length: Any) -> int:
    window = _count(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    return window


def _changes(values: list) -> list:
    """Bar-to-bar changes, newest first."""
    return [newer - older for newer, older in zip(values, values[1:])]


def rsi(interp: Any, source: Any, length: Any) -> Any:
    """Relative strength index from average gains and losses."""
    window = _positive_window(length)
    values = interp.get_series_values(source, window + 1)
    if len(values) < 2:
        return NA
    changes = _changes(values)
    count = min(window, len(changes))
    gains = [change if change > 0.0 else 0.0 for change in changes[:count]]
    losses = [0.0 if change > 0.0 else -change for change in changes[:count]]
    avg_gain = sum(gains) / count
    avg_loss = sum(losses) / count
    if avg_loss == 0.0:
        return 100.0
    strength = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + strength)


def cci(interp: Any, source: Any, length: Any) -> Any:
    """Commodity channel index of the source itself."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    mean = sum(values) / len(values)
    deviation = sum(abs(value - mean) for value in values) / len(values)
    if deviation == 0.0:
        return NA
    return (values[0] - mean) / (0.015 * deviation)


def mom(interp: Any, source: Any, length: Any) -> Any:
    """Momentum: current value minus the value ``length`` bars ago."""
    count = _count(length)
    values = interp.get_series_values(source, count + 1)
    if len(values) <= count:
        return NA
    return values[0] - values[count]


def roc(interp: Any, source: Any, length: Any) -> Any:
    """Rate of change in percent against the value ``length`` bars ago."""
    count = _count(length)
    values = interp.get_series_values(source, count + 1)
    if len(values) <= count:
        return NA
    previous = values[count]
    if previous == 0.0:
        return NA
    return (values[0] - previous) / previous * 100.0


def cmo(interp: Any, source: Any, length: Any) -> Any:
    """Chande momentum oscillator."""
    window = _positive_window(length)
    values = interp.get_series_values(source, window + 1)
    if len(values) < 2:
        return NA
    changes = _changes(values)
    gains = sum(change for change in changes if change > 0.0)
    losses = sum(-change for change in changes if change <= 0.0)
    total = gains + losses
    if total == 0.0:
        return 0.0
    return 100.0 * (gains - losses) / total


def linreg(interp: Any, source: Any, length: Any, offset: Any = 0.0) -> Any:
    """Least-squares line through the window, evaluated ``offset`` bars back."""
    values = interp.get_series_values(source, _positive_window(length))
    if not values:
        return NA
    count = len(values)
    mean_x = (count - 1) / 2.0
    mean_y = sum(values) / count
    numerator = 0.0
    denominator = 0.0
    for position, value in enumerate(values):
        x_dev = position - mean_x
        numerator += x_dev * (value - mean_y)
        denominator += x_dev * x_dev
    if denominator == 0.0:
        return mean_y
    slope = numerator / denominator
    intercept = mean_y - slope * mean_x
    return intercept + slope * as_number(offset)