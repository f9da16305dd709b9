"""Volatility indicators: true range, average true range, Bollinger Bands."""

from __future__ import annotations

import math
import sys
from typing import Any, Optional

from ..values import NA, PineTypeError, Series, UndefinedVariableError, as_bool, as_number


def _window(length: Any) -> int:
    number = as_number(length)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return sys.maxsize
    return min(int(number), sys.maxsize)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


def _require(interp: Any, name: str) -> Any:
    value = interp.get_variable(name)
    if value is None:
        raise UndefinedVariableError(name)
    return value


def _price(value: Any, name: str, series_detail: str) -> float:
    if isinstance(value, Series):
        if _is_number(value.current):
            return float(value.current)
        raise PineTypeError(f"{name} {series_detail}")
    if _is_number(value):
        return float(value)
    raise PineTypeError(f"{name} must be a number or series")


def _historical_number(interp: Any, series_id: str, offset: int) -> Optional[float]:
    provider = getattr(interp, "historical_provider", None)
    if provider is None:
        return None
    value = provider.get_historical(series_id, offset)
    return float(value) if _is_number(value) else None


def _previous_close(interp: Any, close: Any) -> Optional[float]:
    if isinstance(close, Series):
        return _historical_number(interp, close.id, 1)
    return None


def _true_range(high: float, low: float, prev_close: float) -> float:
    return _fmax(_fmax(high - low, abs(high - prev_close)), abs(low - prev_close))


def tr(interp: Any, handle_na: Any = False) -> Any:
    """True range of the current bar; ``na`` without a previous close unless handled."""
    high = _require(interp, "high")
    low = _require(interp, "low")
    close = _require(interp, "close")
    high_value = _price(high, "high", "must be a number")
    low_value = _price(low, "low", "must be a number")
    prev_close = _previous_close(interp, close)
    if prev_close is not None:
        return _true_range(high_value, low_value, prev_close)
    if as_bool(handle_na):
        return high_value - low_value
    return NA


def atr(interp: Any, length: Any) -> Any:
    """Average true range: Wilder smoothing of the true range over ``length`` bars."""
    window = _window(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    high = _require(interp, "high")
    low = _require(interp, "low")
    close = _require(interp, "close")

    high_value = _price(high, "high", "must contain numbers")
    low_value = _price(low, "low", "must contain numbers")
    prev_close = _previous_close(interp, close)
    if prev_close is not None:
        ranges = [_true_range(high_value, low_value, prev_close)]
    else:
        ranges = [high_value - low_value]

    provider = getattr(interp, "historical_provider", None)
    if (
        provider is not None
        and isinstance(high, Series)
        and isinstance(low, Series)
        and isinstance(close, Series)
    ):
        for offset in range(1, window * 2):
            past_high = _historical_number(interp, high.id, offset)
            if past_high is None:
                break
            past_low = _historical_number(interp, low.id, offset)
            if past_low is None:
                break
            past_close = _historical_number(interp, close.id, offset + 1)
            if past_close is None:
                ranges.append(past_high - past_low)
            else:
                ranges.append(_true_range(past_high, past_low, past_close))

    seed_count = min(window, len(ranges))
    smoothed = sum(ranges[:seed_count]) / seed_count
    alpha = 1.0 / float(window)
    for value in reversed(ranges[: len(ranges) - seed_count]):
        smoothed = alpha * value + (1.0 - alpha) * smoothed
    return alpha * ranges[0] + (1.0 - alpha) * smoothed


def bb(interp: Any, series: Any, length: Any, mult: Any) -> list:
    """Bollinger Bands as ``[middle, upper, lower]``."""
    window = _window(length)
    if window == 0:
        raise PineTypeError("length must be greater than 0")
    values = interp.get_series_values(series, window)
    if not values:
        return [NA, NA, NA]
    basis = sum(values) / len(values)
    if len(values) == 1:
        spread = 0.0
    else:
        spread = sum((value - basis) * (value - basis) for value in values) / len(values)
    deviation = as_number(mult) * math.sqrt(spread)
    return [basis, basis + deviation, basis - deviation]