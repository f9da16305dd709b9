"""Runtime values of the Pine interpreter and the operations defined on them."""

from __future__ import annotations

import json
import math
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping

_EPSILON = sys.float_info.epsilon


class PineError(Exception):
    """Base class for errors raised while running a script."""


class UndefinedVariableError(PineError):
    """A name was looked up that is not bound."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Variable '{name}' not found")
        self.name = name


class PineTypeError(PineError):
    """A value had the wrong type for an operation."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Type error: {detail}")
        self.detail = detail


class DivisionByZeroError(PineError):
    """A division or modulo by zero."""

    def __init__(self) -> None:
        super().__init__("Division by zero")


class IndexOutOfBoundsError(PineError):
    """An index fell outside an array or the available history."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Index out of bounds: {index}")
        self.index = index


class InvalidForLoopError(PineError):
    """A counted loop whose start lies after its end."""

    def __init__(self, start: float, end: float) -> None:
        super().__init__(
            f"Cannot iterate: from={_format_number(start)}, to={_format_number(end)}"
        )
        self.start = start
        self.end = end


class BreakOutsideLoopError(PineError):
    """A break statement outside of any loop."""

    def __init__(self) -> None:
        super().__init__("Break statement outside of loop")


class ContinueOutsideLoopError(PineError):
    """A continue statement outside of any loop."""

    def __init__(self) -> None:
        super().__init__("Continue statement outside of loop")


class LibraryError(PineError):
    """A library could not be imported."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Library error: {detail}")
        self.detail = detail


class ConstReassignmentError(PineError):
    """An attempt to assign to a const variable or one of its members."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot reassign const variable '{name}'")
        self.name = name


class Na:
    """The single "not available" value."""

    _instance: "Na | None" = None

    def __new__(cls) -> "Na":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "na"


NA = Na()


@dataclass(frozen=True)
class Color:
    """An RGB colour with a transparency from 0 to 100."""

    r: int
    g: int
    b: int
    t: int = 0


@dataclass
class Bar:
    """One bar of market data."""

    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0


@dataclass
class Series:
    """A time series: its identifier and the value on the current bar."""

    id: str
    current: Any


@dataclass(eq=False)
class PineObject:
    """An object with named fields; compared by identity."""

    type_name: str
    fields: dict = field(default_factory=dict)


@dataclass(eq=False)
class UserFunction:
    """A function defined in a script."""

    params: list
    body: list


@dataclass
class PineType:
    """A user-defined type; types compare by name."""

    name: str
    fields: list = field(default_factory=list, compare=False)


@dataclass(frozen=True)
class EnumMember:
    """One member of a user-defined enum; the title takes no part in equality."""

    enum_name: str
    field_name: str
    title: str = field(default="", compare=False)


@dataclass(eq=False)
class Matrix:
    """A two-dimensional matrix of values; compared by identity."""

    element_type: str
    data: list = field(default_factory=list)


@dataclass
class NamedArg:
    """An argument passed by name."""

    name: str
    value: Any


@dataclass
class CallArgs:
    """The evaluated arguments of a call together with its type arguments."""

    args: list = field(default_factory=list)
    type_args: list = field(default_factory=list)

    def bind(
        self,
        function_name: str,
        names: Iterable[str],
        defaults: Mapping[str, Any] | None = None,
    ) -> dict:
        """Match the arguments to parameter names, filling in defaults."""
        names = list(names)
        defaults = dict(defaults or {})
        bound: dict = {}
        remaining = iter(names)
        for arg in self.args:
            if isinstance(arg, NamedArg):
                if arg.name not in names:
                    raise PineTypeError(
                        f"{function_name}() has no parameter '{arg.name}'"
                    )
                if arg.name in bound:
                    raise PineTypeError(
                        f"{function_name}() got multiple values for '{arg.name}'"
                    )
                bound[arg.name] = arg.value
                continue
            name = next(remaining, None)
            if name is None:
                raise PineTypeError(
                    f"{function_name}() takes at most {len(names)} arguments"
                )
            if name in bound:
                raise PineTypeError(
                    f"{function_name}() got multiple values for '{name}'"
                )
            bound[name] = arg
        for name in names:
            if name in bound:
                continue
            if name not in defaults:
                raise PineTypeError(
                    f"{function_name}() missing required argument '{name}'"
                )
            bound[name] = defaults[name]
        return bound


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(number: float) -> str:
    """Format a number the way script output shows it: no exponent, no '.0'."""
    number = float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def _debug_number(number: float) -> str:
    number = float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer() and abs(number) < 1e16:
        return f"{number:.1f}"
    return repr(number).replace("e+", "e")


def describe(value: Any) -> str:
    """Return a diagnostic description of a value, as used in error messages."""
    if value is NA:
        return "Na"
    if isinstance(value, bool):
        return f"Bool({'true' if value else 'false'})"
    if _is_number(value):
        return f"Number({_debug_number(value)})"
    if isinstance(value, str):
        return f"String({json.dumps(value, ensure_ascii=False)})"
    if isinstance(value, list):
        return "Array([" + ", ".join(describe(item) for item in value) + "])"
    if isinstance(value, Series):
        return f"Series({value.id}: {describe(value.current)})"
    if isinstance(value, PineObject):
        inner = ", ".join(
            f"{json.dumps(key, ensure_ascii=False)}: {describe(item)}"
            for key, item in value.fields.items()
        )
        return f"Object({value.type_name}:{{{inner}}})"
    if isinstance(value, UserFunction):
        return f"Function({len(value.params)} params)"
    if isinstance(value, PineType):
        return f"Type({value.name})"
    if isinstance(value, EnumMember):
        return f"Enum({value.enum_name}::{value.field_name})"
    if isinstance(value, Color):
        return f"Color(rgba({value.r}, {value.g}, {value.b}, {value.t}))"
    if isinstance(value, Matrix):
        rows = ", ".join(
            "[" + ", ".join(describe(item) for item in row) + "]" for row in value.data
        )
        return f"Matrix<{value.element_type}>([{rows}])"
    if callable(value):
        return "BuiltinFunction"
    return repr(value)


def as_number(value: Any) -> float:
    """Convert a value to a number; booleans count as 1 and 0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if _is_number(value):
        return float(value)
    if isinstance(value, Series):
        return as_number(value.current)
    raise PineTypeError(f"Expected number, got {describe(value)}")


def as_bool(value: Any) -> bool:
    """Convert a value to a boolean; numbers are true when non-zero."""
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return float(value) != 0.0
    raise PineTypeError(f"Expected bool, got {describe(value)}")


def as_string(value: Any) -> str:
    """Convert a scalar value to its string form."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return _format_number(value)
    if value is NA:
        return "na"
    raise PineTypeError(f"Cannot convert {describe(value)} to string")


def as_array(value: Any) -> list:
    """Return the list behind an array value."""
    if isinstance(value, list):
        return value
    raise PineTypeError(f"Expected array, got {describe(value)}")


def as_color(value: Any) -> Color:
    """Return the colour behind a colour value."""
    if isinstance(value, Color):
        return value
    raise PineTypeError(f"Expected color, got {describe(value)}")


def values_equal(left: Any, right: Any) -> bool:
    """Equality as the '==' operator sees it."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return abs(float(left) - float(right)) < _EPSILON
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if left is NA and right is NA:
        return True
    if isinstance(left, EnumMember) and isinstance(right, EnumMember):
        return left == right
    return False


def _op_key(op: Any) -> Any:
    return op.value if isinstance(op, Enum) else op


def _divisor(value: Any) -> float:
    divisor = as_number(value)
    if divisor == 0.0:
        raise DivisionByZeroError()
    return divisor


def binary_op(left: Any, op: Any, right: Any) -> Any:
    """Apply a binary operator ('+', '-', '*', '/', '%', comparisons, 'and', 'or')."""
    key = _op_key(op)
    if key == "+":
        if isinstance(left, str) or isinstance(right, str):
            return as_string(left) + as_string(right)
        return as_number(left) + as_number(right)
    if key == "-":
        return as_number(left) - as_number(right)
    if key == "*":
        return as_number(left) * as_number(right)
    if key == "/":
        divisor = _divisor(right)
        return as_number(left) / divisor
    if key == "%":
        divisor = _divisor(right)
        return math.fmod(as_number(left), divisor)
    if key == "==":
        return values_equal(left, right)
    if key == "!=":
        return not values_equal(left, right)
    if key == "<":
        return as_number(left) < as_number(right)
    if key == ">":
        return as_number(left) > as_number(right)
    if key == "<=":
        return as_number(left) <= as_number(right)
    if key == ">=":
        return as_number(left) >= as_number(right)
    if key == "and":
        lhs = as_bool(left)
        rhs = as_bool(right)
        return lhs and rhs
    if key == "or":
        lhs = as_bool(left)
        rhs = as_bool(right)
        return lhs or rhs
    raise PineTypeError(f"Unknown binary operator {key!r}")


def unary_op(op: Any, value: Any) -> Any:
    """Apply a unary operator ('-' or 'not')."""
    key = _op_key(op)
    if key == "-":
        return -as_number(value)
    if key == "not":
        return not as_bool(value)
    raise PineTypeError(f"Unknown unary operator {key!r}")