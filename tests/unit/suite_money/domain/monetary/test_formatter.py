from decimal import Decimal

import pytest

from suite_money.domain.monetary.currency_position import CurrencyPosition
from suite_money.domain.monetary.formatter import apply_symbol_position, format_number, group_digits


@pytest.mark.parametrize(
    "digits, expected",
    [
        ("0", "0"),
        ("12", "12"),
        ("123", "123"),
        ("1234", "1,234"),
        ("123456", "123,456"),
        ("1234567", "1,234,567"),
    ],
)
def test_group_digits(digits, expected):
    assert group_digits(digits, ",") == expected


def test_group_digits_with_multi_character_separator():
    assert group_digits("1234567", " . ") == "1 . 234 . 567"


def test_format_number_keeps_fixed_number_of_decimals():
    assert format_number(Decimal("1234.5"), 2) == "1,234.50"
    assert format_number(Decimal("1200"), 2) == "1,200.00"
    assert format_number(Decimal("0.05"), 2) == "0.05"


def test_format_number_rounds_half_up_for_display():
    assert format_number(Decimal("0.125"), 2) == "0.13"
    assert format_number(Decimal("-0.125"), 2) == "-0.13"
    assert format_number(Decimal("1234.5"), 0) == "1,235"


def test_format_number_with_custom_separators():
    assert format_number("1234567.891", 2, ",", ".") == "1.234.567,89"
    assert format_number("1234567", 0, ",", "") == "1234567"


def test_format_number_negative_values():
    assert format_number(Decimal("-1234.5"), 2) == "-1,234.50"


def test_format_number_does_not_sign_values_rounding_to_zero():
    assert format_number(Decimal("-0.001"), 2) == "0.00"


def test_format_number_stays_exact_for_large_values():
    assert format_number(Decimal("12345678901234567890.12"), 2) == "12,345,678,901,234,567,890.12"


@pytest.mark.parametrize(
    "position, expected",
    [
        (CurrencyPosition.LEFT, "$1.00"),
        (CurrencyPosition.LEFT_WITH_SPACE, "$ 1.00"),
        (CurrencyPosition.RIGHT, "1.00$"),
        (CurrencyPosition.RIGHT_WITH_SPACE, "1.00 $"),
        (CurrencyPosition.HIDDEN, "1.00"),
    ],
)
def test_apply_symbol_position(position, expected):
    assert apply_symbol_position("1.00", "$", position) == expected
