from __future__ import annotations

from suite_money.domain.monetary.currency_position import CurrencyPosition
from suite_money.utils.decimal_tools import DecimalLike, RoundingMode, as_exact, to_plain_string, to_scale

# Number of integer digits between two group separators
GROUP_SIZE = 3


def format_number(amount: DecimalLike, decimal_places: int, decimal_separator: str = ".", group_separator: str = ",") -> str:
    """Render $amount with fixed $decimal_places and grouped integer digits.

    The amount is rounded half-up for display only; the fractional part always has exactly
    $decimal_places digits (no trailing zeros are trimmed).

    Args:
        amount: Exact amount to render.
        decimal_places: Number of fractional digits to show.
        decimal_separator: String placed between integer and fractional digits.
        group_separator: String placed between groups of three integer digits.

    Returns:
        Formatted number, e.g. "-1,234.50".

    Examples:
        >>> format_number("1234.5", 2)
        '1,234.50'
        >>> format_number("1234567.891", 2, ",", ".")
        '1.234.567,89'
    """
    rounded = to_scale(as_exact(amount), decimal_places, RoundingMode.HALF_UP)
    negative = rounded < 0
    digits = to_plain_string(rounded.copy_abs())

    if decimal_places > 0:
        integer_part, fraction_part = digits.split(".")
    else:
        integer_part, fraction_part = digits, ""

    result = group_digits(integer_part, group_separator)
    if fraction_part:
        result = f"{result}{decimal_separator}{fraction_part}"

    return f"-{result}" if negative else result


def group_digits(integer_digits: str, group_separator: str) -> str:
    """Insert $group_separator between every three digits, counting from the right."""
    head_length = len(integer_digits) % GROUP_SIZE or GROUP_SIZE
    groups = [integer_digits[:head_length]]
    for start in range(head_length, len(integer_digits), GROUP_SIZE):
        groups.append(integer_digits[start : start + GROUP_SIZE])
    return group_separator.join(groups)


def apply_symbol_position(number: str, symbol: str, position: CurrencyPosition) -> str:
    """Attach $symbol to an already formatted $number according to $position."""
    if position is CurrencyPosition.LEFT:
        return f"{symbol}{number}"
    if position is CurrencyPosition.LEFT_WITH_SPACE:
        return f"{symbol} {number}"
    if position is CurrencyPosition.RIGHT:
        return f"{number}{symbol}"
    if position is CurrencyPosition.RIGHT_WITH_SPACE:
        return f"{number} {symbol}"
    if position is CurrencyPosition.HIDDEN:
        return number

    raise ValueError(f"Cannot call `apply_symbol_position` because $position ({position}) is not supported")
