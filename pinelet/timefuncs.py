"""Calendar and clock functions over UNIX times given in milliseconds.

The calendar parts are simple approximations: years of 365 days and
months of 30 days, all in UTC.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from .values import CallArgs, as_number

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_SECONDS_PER_DAY = 24 * 60 * 60
_SECONDS_PER_YEAR = 365 * _SECONDS_PER_DAY


def _to_int(number: float) -> int:
    """Truncate toward zero, saturating at the 64-bit range; NaN becomes 0."""
    if math.isnan(number):
        return 0
    if number >= 2.0**63:
        return _I64_MAX
    if number < -(2.0**63):
        return _I64_MIN
    return int(number)


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _rem(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - b * _div(a, b)


def _seconds(time: float) -> int:
    return _to_int(float(time) / 1000.0)


def _days(time: float) -> int:
    return _div(_seconds(time), _SECONDS_PER_DAY)


def year(time: float) -> float:
    """Year of the given time."""
    return float(1970 + _div(_seconds(time), _SECONDS_PER_YEAR))


def month(time: float) -> float:
    """Month (1-12) of the given time."""
    return float(min(_div(_rem(_days(time), 365), 30) + 1, 12))


def dayofmonth(time: float) -> float:
    """Day of the month (1-30) of the given time."""
    return float(_rem(_days(time), 30) + 1)


def dayofweek(time: float) -> float:
    """Day of the week, 1 for Sunday through 7 for Saturday."""
    return float(_rem(_days(time) + 4, 7) + 1)


def hour(time: float) -> float:
    """Hour (0-23) of the given time."""
    return float(_rem(_div(_seconds(time), 3600), 24))


def minute(time: float) -> float:
    """Minute (0-59) of the given time."""
    return float(_rem(_div(_seconds(time), 60), 60))


def second(time: float) -> float:
    """Second (0-59) of the given time."""
    return float(_rem(_seconds(time), 60))


def _builtin(name: str, function: Callable[[float], float]) -> Callable[[Any, CallArgs], float]:
    def call(interp: Any, call_args: CallArgs) -> float:
        bound = call_args.bind(name, ["time"])
        return function(as_number(bound["time"]))

    call.__name__ = name
    return call


def register_time_functions() -> list:
    """Return ``(name, builtin)`` pairs for the time functions."""
    functions = [
        ("year", year),
        ("month", month),
        ("dayofmonth", dayofmonth),
        ("dayofweek", dayofweek),
        ("hour", hour),
        ("minute", minute),
        ("second", second),
    ]
    return [(name, _builtin(name, function)) for name, function in functions]