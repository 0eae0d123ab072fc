from decimal import Decimal
from fractions import Fraction

import time

import pytest

from suite_money.domain.monetary.exceptions import DivisionByZeroError, InvalidAmountError, RoundingRequiredError
from suite_money.utils.decimal_tools import (
    RoundingMode,
    add,
    as_decimal,
    as_exact,
    compare,
    divide,
    get_scale,
    multiply,
    negate,
    shorten_for_rounding,
    strip_trailing_zeros,
    subtract,
    to_float_approximation,
    to_plain_string,
    to_scale,
)


# region Parsing


def test_as_exact_converts_float_via_shortest_repr():
    assert as_exact(9.995) == Decimal("9.995")
    assert as_exact(0.1) == Decimal("0.1")


def test_as_exact_accepts_strings_and_ints():
    assert as_exact(" 1_234.50 ") == Decimal("1234.50")
    assert as_exact("-3") == Decimal("-3")
    assert as_exact("1e3") == Decimal("1000")
    assert as_exact(42) == Decimal(42)


def test_as_exact_keeps_terminating_rationals_as_decimal():
    assert as_exact("1/4") == Decimal("0.25")
    assert isinstance(as_exact("1/4"), Decimal)
    assert as_exact(Fraction(3, 8)) == Decimal("0.375")


def test_as_exact_keeps_non_terminating_rationals_as_fraction():
    assert as_exact("1/3") == Fraction(1, 3)
    assert isinstance(as_exact(Fraction(2, 7)), Fraction)


@pytest.mark.parametrize("value", ["", "abc", "1.2.3", "NaN", "Infinity", float("inf"), float("nan"), True, None, [1], "1/x"])
def test_as_exact_rejects_invalid_amounts(value):
    with pytest.raises(InvalidAmountError):
        as_exact(value)


def test_as_exact_rejects_zero_denominator():
    with pytest.raises(DivisionByZeroError):
        as_exact("1/0")


def test_as_exact_drops_sign_of_negative_zero():
    assert str(as_exact("-0.00")) == "0.00"


def test_as_decimal_refuses_non_terminating_rational():
    with pytest.raises(RoundingRequiredError):
        as_decimal("1/3")


# endregion

# region Arithmetic


def test_add_and_subtract_are_exact_beyond_default_precision():
    big = Decimal("1E+40")
    tiny = Decimal("1E-40")
    expected = Decimal("1" + "0" * 40 + "." + "0" * 39 + "1")

    assert add(big, tiny) == expected
    assert subtract(expected, tiny) == big


def test_multiply_is_exact():
    assert multiply(Decimal("0.1"), 3) == Decimal("0.3")
    assert multiply("123456789012345678901234567890", "0.000000001") == Decimal("123456789012345678901.234567890")


def test_divide_returns_exact_terminating_quotient():
    assert divide(10, 4) == Decimal("2.5")
    assert divide(Decimal("1"), 8) == Decimal("0.125")


def test_divide_requires_rounding_mode_for_non_terminating_quotient():
    with pytest.raises(RoundingRequiredError):
        divide(10, 3)


def test_divide_rounds_to_dividend_scale_when_mode_given():
    assert divide(Decimal("10.00"), 3, rounding_mode=RoundingMode.HALF_UP) == Decimal("3.33")
    assert divide(Decimal("10"), 3, rounding_mode=RoundingMode.HALF_UP) == Decimal("3")


def test_divide_with_explicit_scale():
    assert str(divide(2, 3, 2, RoundingMode.UP)) == "0.67"
    assert str(divide(1, 4, 4)) == "0.2500"


def test_divide_by_zero():
    with pytest.raises(DivisionByZeroError):
        divide(1, 0)
    with pytest.raises(ZeroDivisionError):
        divide(Decimal("5.00"), "0.000")


def test_compare_and_negate():
    assert compare("1.50", "1.5") == 0
    assert compare(1, 2) == -1
    assert compare("2", "1.999") == 1
    assert negate(Decimal("1.25")) == Decimal("-1.25")
    assert str(negate(Decimal("0.00"))) == "0.00"


# endregion

# region Rounding


@pytest.mark.parametrize(
    "mode, positive_expected, negative_expected",
    [
        (RoundingMode.UP, "3", "-3"),
        (RoundingMode.DOWN, "2", "-2"),
        (RoundingMode.CEILING, "3", "-2"),
        (RoundingMode.FLOOR, "2", "-3"),
        (RoundingMode.HALF_UP, "3", "-3"),
        (RoundingMode.HALF_DOWN, "2", "-2"),
        (RoundingMode.HALF_CEILING, "3", "-2"),
        (RoundingMode.HALF_FLOOR, "2", "-3"),
        (RoundingMode.HALF_EVEN, "2", "-2"),
    ],
)
def test_to_scale_resolves_ties_per_mode(mode, positive_expected, negative_expected):
    assert to_scale(Decimal("2.5"), 0, mode) == Decimal(positive_expected)
    assert to_scale(Decimal("-2.5"), 0, mode) == Decimal(negative_expected)


@pytest.mark.parametrize(
    "value, mode, expected",
    [
        ("2.6", RoundingMode.HALF_DOWN, "3"),
        ("2.4", RoundingMode.HALF_UP, "2"),
        ("-2.4", RoundingMode.HALF_UP, "-2"),
        ("3.5", RoundingMode.HALF_EVEN, "4"),
        ("2.01", RoundingMode.UP, "3"),
        ("-2.01", RoundingMode.DOWN, "-2"),
    ],
)
def test_to_scale_non_ties(value, mode, expected):
    assert to_scale(Decimal(value), 0, mode) == Decimal(expected)


def test_to_scale_pins_half_tie_of_9_995():
    assert str(to_scale(Decimal("9.995"), 2, RoundingMode.HALF_UP)) == "10.00"
    assert str(to_scale(Decimal("9.995"), 2, RoundingMode.HALF_EVEN)) == "10.00"
    assert str(to_scale(Decimal("9.995"), 2, RoundingMode.HALF_DOWN)) == "9.99"
    assert str(to_scale(Decimal("-9.995"), 2, RoundingMode.HALF_UP)) == "-10.00"


def test_to_scale_pads_exact_values():
    assert str(to_scale(Decimal("1.5"), 3)) == "1.500"
    assert str(to_scale(Decimal("0"), 2)) == "0.00"
    assert str(to_scale(Decimal("1E+2"), 2)) == "100.00"


def test_to_scale_refuses_inexact_value_without_rounding_mode():
    with pytest.raises(RoundingRequiredError):
        to_scale(Decimal("1.005"), 2)


def test_to_scale_rejects_negative_scale():
    with pytest.raises(ValueError):
        to_scale(Decimal("1"), -1, RoundingMode.HALF_UP)


def test_to_scale_rounds_fractions():
    assert to_scale(Fraction(1, 3), 4, RoundingMode.HALF_UP) == Decimal("0.3333")
    assert to_scale(Fraction(2, 3), 4, RoundingMode.HALF_UP) == Decimal("0.6667")
    assert to_scale(Fraction(-2, 3), 2, RoundingMode.DOWN) == Decimal("-0.66")


@pytest.mark.parametrize("mode", [m for m in RoundingMode if m is not RoundingMode.UNNECESSARY])
def test_to_scale_is_idempotent(mode):
    once = to_scale(Decimal("-1234.56789"), 2, mode)
    assert to_scale(once, 2, mode) == once


@pytest.mark.parametrize("mode", list(RoundingMode))
@pytest.mark.parametrize("value", ["2.5", "-2.5", "0.125", "-0.125", "9.995", "-0.005", "1234.5678", "7"])
def test_to_scale_gives_same_result_for_decimal_and_fraction(value, mode):
    try:
        expected = to_scale(Fraction(value), 2, mode)
    except RoundingRequiredError:
        with pytest.raises(RoundingRequiredError):
            to_scale(Decimal(value), 2, mode)
    else:
        assert to_scale(Decimal(value), 2, mode) == expected


def test_to_scale_drops_sign_of_zero_result():
    assert str(to_scale(Decimal("-0.001"), 2, RoundingMode.DOWN)) == "0.00"
    assert str(to_scale(Decimal("-0.004"), 2, RoundingMode.HALF_EVEN)) == "0.00"


def test_to_scale_of_tiny_exponent_is_fast():
    tiny = Decimal("1E-30000000")

    start = time.perf_counter()
    assert str(to_scale(tiny, 2, RoundingMode.HALF_UP)) == "0.00"
    assert str(to_scale(tiny, 2, RoundingMode.UP)) == "0.01"
    with pytest.raises(RoundingRequiredError):
        to_scale(tiny, 2)
    assert time.perf_counter() - start < 1.0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1.2345", "1.234"),
        ("1.2350", "1.235"),
        ("1.2501", "1.251"),
        ("-1.2001", "-1.201"),
        ("1.5", "1.500"),
        ("1E-30000000", "0.001"),
    ],
)
def test_shorten_for_rounding_keeps_value_off_half_steps(value, expected):
    assert str(shorten_for_rounding(Decimal(value), 2)) == expected


# endregion

# region Representation


def test_strip_trailing_zeros():
    assert str(strip_trailing_zeros(Decimal("1.500"))) == "1.5"
    assert str(strip_trailing_zeros(Decimal("1E+2"))) == "100"
    assert str(strip_trailing_zeros(Decimal("0.000"))) == "0"
    assert str(strip_trailing_zeros(Decimal("-20.0"))) == "-20"


def test_to_plain_string_never_uses_scientific_notation():
    assert to_plain_string(Decimal("1E-7")) == "0.0000001"
    assert to_plain_string(Decimal("1E+3")) == "1000"
    assert to_plain_string(Decimal("12.50")) == "12.50"


def test_get_scale():
    assert get_scale(Decimal("1.250")) == 3
    assert get_scale(Decimal("7")) == 0
    assert get_scale(Decimal("1E+2")) == 0


def test_to_float_approximation():
    assert to_float_approximation(Decimal("1.25")) == 1.25


# endregion
