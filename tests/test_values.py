import math

import pytest

from pinelet.values import (
    NA,
    CallArgs,
    Color,
    DivisionByZeroError,
    EnumMember,
    IndexOutOfBoundsError,
    InvalidForLoopError,
    Na,
    NamedArg,
    PineError,
    PineObject,
    PineType,
    PineTypeError,
    Series,
    UndefinedVariableError,
    as_array,
    as_bool,
    as_color,
    as_number,
    as_string,
    binary_op,
    describe,
    unary_op,
    values_equal,
)


def test_na_is_a_singleton():
    assert Na() is NA


def test_as_number_of_numbers_and_bools():
    assert as_number(3.5) == 3.5
    assert as_number(True) == 1.0
    assert as_number(False) == 0.0


def test_as_number_unwraps_series():
    assert as_number(Series("close", 7.25)) == 7.25


def test_as_number_rejects_strings():
    with pytest.raises(PineTypeError):
        as_number("abc")


def test_as_bool():
    assert as_bool(0.0) is False
    assert as_bool(2.0) is True
    assert as_bool(True) is True
    with pytest.raises(PineTypeError):
        as_bool(NA)


def test_as_string_scalars():
    assert as_string("abc") == "abc"
    assert as_string(NA) == "na"
    assert as_string(True) == "true"


def test_as_string_integral_number_has_no_fraction():
    text = as_string(2.0)
    assert "." not in text
    assert float(text) == 2.0


@pytest.mark.parametrize("number", [0.5, -3.25, 1e-7, 1e20, 123456.789])
def test_as_string_round_trips_without_exponent(number):
    text = as_string(number)
    assert "e" not in text.lower()
    assert float(text) == number


def test_as_string_rejects_arrays():
    with pytest.raises(PineTypeError):
        as_string([1.0])


def test_as_array_returns_same_list():
    items = [1.0, 2.0]
    assert as_array(items) is items
    with pytest.raises(PineTypeError):
        as_array(1.0)


def test_as_color():
    color = Color(1, 2, 3, 4)
    assert as_color(color) == color
    with pytest.raises(PineTypeError):
        as_color("red")


def test_values_equal_numbers_within_epsilon():
    assert values_equal(0.1 + 0.2, 0.3)
    assert not values_equal(1.0, 1.5)


def test_values_equal_does_not_mix_types():
    assert not values_equal(True, 1.0)
    assert not values_equal("1", 1.0)
    assert values_equal(NA, NA)


def test_values_equal_arrays_never_equal():
    items = [1.0]
    assert not values_equal(items, items)


def test_values_equal_enums_ignore_title():
    a = EnumMember("Signal", "buy", "Buy now")
    b = EnumMember("Signal", "buy", "other")
    c = EnumMember("Signal", "sell", "Buy now")
    assert values_equal(a, b)
    assert not values_equal(a, c)


def test_objects_compare_by_identity():
    first = PineObject("Point", {"x": 1.0})
    second = PineObject("Point", {"x": 1.0})
    assert first == first
    assert not first == second


def test_types_compare_by_name():
    assert PineType("Point", ["a"]) == PineType("Point", [])
    assert not PineType("Point") == PineType("Line")


def test_add_is_commutative_and_sub_inverts():
    assert binary_op(2.5, "+", 4.0) == binary_op(4.0, "+", 2.5)
    assert binary_op(binary_op(2.5, "+", 4.0), "-", 4.0) == 2.5


def test_add_concatenates_strings():
    assert binary_op("a", "+", "b") == "ab"
    assert binary_op("a", "+", 1.5) == "a1.5"


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        binary_op(1.0, "/", 0.0)
    with pytest.raises(DivisionByZeroError):
        binary_op(1.0, "%", 0.0)


def test_division_undoes_multiplication():
    assert binary_op(binary_op(6.0, "*", 4.0), "/", 4.0) == 6.0


def test_modulo_keeps_sign_of_dividend():
    assert binary_op(-7.0, "%", 3.0) < 0
    assert binary_op(7.0, "%", -3.0) > 0


def test_comparisons_and_logic():
    assert binary_op(1.0, "<", 2.0) is True
    assert binary_op(1.0, ">=", 2.0) is False
    assert binary_op(True, "and", 0.0) is False
    assert binary_op(False, "or", 1.0) is True
    assert binary_op("x", "==", "x") is True
    assert binary_op("x", "!=", "x") is False


def test_unknown_operator():
    with pytest.raises(PineTypeError):
        binary_op(1.0, "**", 2.0)


def test_unary_ops():
    assert unary_op("-", unary_op("-", 3.5)) == 3.5
    assert unary_op("not", True) is False
    with pytest.raises(PineTypeError):
        unary_op("-", "abc")


def test_error_messages():
    assert str(UndefinedVariableError("x")) == "Variable 'x' not found"
    assert str(DivisionByZeroError()) == "Division by zero"
    assert str(IndexOutOfBoundsError(3)) == "Index out of bounds: 3"
    error = InvalidForLoopError(5.0, 1.0)
    assert isinstance(error, PineError)
    assert "from=" in str(error) and error.start == 5.0


def test_describe_enum_and_color():
    assert describe(EnumMember("Signal", "buy", "Buy")) == "Enum(Signal::buy)"
    assert describe(Color(1, 2, 3, 4)) == "Color(rgba(1, 2, 3, 4))"
    assert describe(NA) == "Na"


def test_bind_positional_named_and_defaults():
    args = CallArgs([Series("close", 1.0), NamedArg("length", 5.0)])
    bound = args.bind("ta.change", ["source", "length", "extra"], {"extra": 0.0})
    assert bound["length"] == 5.0
    assert bound["extra"] == 0.0
    assert bound["source"].id == "close"


def test_bind_errors():
    with pytest.raises(PineTypeError):
        CallArgs([1.0, 2.0]).bind("f", ["a"])
    with pytest.raises(PineTypeError):
        CallArgs([NamedArg("b", 1.0)]).bind("f", ["a"])
    with pytest.raises(PineTypeError):
        CallArgs([]).bind("f", ["a"])
    with pytest.raises(PineTypeError):
        CallArgs([1.0, NamedArg("a", 2.0)]).bind("f", ["a", "b"])


def test_nan_is_not_equal_to_itself():
    assert not values_equal(math.nan, math.nan)