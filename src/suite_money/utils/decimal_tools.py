from __future__ import annotations

from decimal import Decimal, Context, InvalidOperation, Inexact, Overflow, DivisionByZero, MAX_PREC, MAX_EMAX, MIN_EMIN
from decimal import ROUND_05UP, ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_DOWN, ROUND_HALF_EVEN, ROUND_HALF_UP, ROUND_UP
from enum import Enum
from fractions import Fraction
from typing import TypeAlias

from suite_money.domain.monetary.exceptions import DivisionByZeroError, InvalidAmountError, RoundingRequiredError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float | Fraction

# Result of parsing a `DecimalLike`: a `Fraction` only when the value has no finite decimal expansion
ExactNumber: TypeAlias = Decimal | Fraction

# Private context that can hold any finite result without rounding. Any inexact
# operation performed in it raises instead of being rounded silently.
_EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[InvalidOperation, Inexact, Overflow, DivisionByZero])

# Same limits, but `quantize` may drop digits according to its `rounding` argument
_ROUNDING_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[InvalidOperation, Overflow, DivisionByZero])


class RoundingMode(Enum):
    """Policies for resolving a value that does not fit the requested scale.

    `HALF_*` modes differ only for exact ties; `UNNECESSARY` forbids rounding altogether.
    """

    UNNECESSARY = "UNNECESSARY"  # raise `RoundingRequiredError` if rounding would be needed
    UP = "UP"  # away from zero
    DOWN = "DOWN"  # towards zero
    CEILING = "CEILING"  # towards positive infinity
    FLOOR = "FLOOR"  # towards negative infinity
    HALF_UP = "HALF_UP"  # nearest neighbour, ties away from zero
    HALF_DOWN = "HALF_DOWN"  # nearest neighbour, ties towards zero
    HALF_CEILING = "HALF_CEILING"  # nearest neighbour, ties towards positive infinity
    HALF_FLOOR = "HALF_FLOOR"  # nearest neighbour, ties towards negative infinity
    HALF_EVEN = "HALF_EVEN"  # nearest neighbour, ties towards the even neighbour


# `decimal` rounding constants for modes that do not depend on the sign of the value
_DECIMAL_ROUNDINGS = {
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}


def as_exact(value: DecimalLike) -> ExactNumber:
    """Parse $value into an exact number.

    Floats are converted via `str` so that `9.995` becomes `Decimal("9.995")` and not its
    binary expansion. Strings may hold a decimal (`"1_234.50"`, `"-3"`, `"1e3"`) or a
    rational (`"1/3"`).

    Args:
        value: Input value as Decimal, Fraction, string, int or float.

    Returns:
        `Decimal` when the value has a finite decimal expansion, otherwise `Fraction`.

    Raises:
        InvalidAmountError: If $value is not a finite number.
        DivisionByZeroError: If $value is a rational string with zero denominator.
    """
    # Raise: `bool` is a subclass of `int`, but True/False are never amounts
    if isinstance(value, bool):
        raise InvalidAmountError(f"Cannot parse amount because $value ({value!r}) is a bool")

    if isinstance(value, Fraction):
        return _fraction_to_exact(value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if "/" in text:
            return _fraction_to_exact(_parse_rational(text))
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(f"Cannot parse amount because $value ('{value}') is not a number") from e
    else:
        raise InvalidAmountError(f"Cannot parse amount because $value has unsupported type '{type(value).__name__}'")

    # Raise: NaN and infinities have no place in monetary math
    if not result.is_finite():
        raise InvalidAmountError(f"Cannot parse amount because $value ({value!r}) is not finite")

    # Normalize negative zero
    if result.is_zero() and result.is_signed():
        result = result.copy_abs()

    return result


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert supported scalar types into Decimal without losing information.

    Args:
        value: Input value as Decimal, Fraction, string, int or float.

    Returns:
        Value converted to Decimal.

    Raises:
        InvalidAmountError: If $value is not a finite number.
        RoundingRequiredError: If $value is a rational without a finite decimal expansion (e.g. 1/3).
    """
    exact = as_exact(value)
    if isinstance(exact, Fraction):
        raise RoundingRequiredError(f"Cannot convert $value ({value}) to Decimal because its decimal expansion does not terminate")
    return exact


def add(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Exact sum of $a and $b."""
    return _EXACT_CONTEXT.add(as_decimal(a), as_decimal(b))


def subtract(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Exact difference $a - $b."""
    return _EXACT_CONTEXT.subtract(as_decimal(a), as_decimal(b))


def multiply(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Exact product of $a and $b."""
    return _EXACT_CONTEXT.multiply(as_decimal(a), as_decimal(b))


def divide(
    dividend: DecimalLike,
    divisor: DecimalLike,
    scale: int | None = None,
    rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
) -> Decimal:
    """Divide $dividend by $divisor.

    Without $scale the exact quotient is returned whenever it terminates. A quotient like 10/3
    needs a $rounding_mode; it is then rounded to the scale of $dividend.

    Args:
        dividend: The number to divide.
        divisor: The number to divide by.
        scale: Optional number of fractional digits of the result.
        rounding_mode: How to round when the quotient does not fit.

    Returns:
        The quotient as Decimal.

    Raises:
        DivisionByZeroError: If $divisor is zero.
        RoundingRequiredError: If the quotient is inexact and $rounding_mode is UNNECESSARY.
    """
    dividend_exact = as_exact(dividend)
    divisor_exact = as_exact(divisor)

    # Raise: division by zero is undefined
    if divisor_exact == 0:
        raise DivisionByZeroError(f"Cannot call `divide` because $divisor is zero (dividend {dividend})")

    quotient = Fraction(dividend_exact) / Fraction(divisor_exact)

    if scale is None:
        exact = _fraction_to_exact(quotient)
        if isinstance(exact, Decimal):
            return exact

        # Raise: non-terminating quotient cannot be represented without rounding
        if rounding_mode is RoundingMode.UNNECESSARY:
            raise RoundingRequiredError(f"Cannot call `divide` because {dividend} / {divisor} does not terminate; provide a rounding mode")

        scale = get_scale(dividend_exact) if isinstance(dividend_exact, Decimal) else 0

    return to_scale(quotient, scale, rounding_mode)


def compare(a: DecimalLike, b: DecimalLike) -> int:
    """Compare $a with $b.

    Returns:
        -1 if $a < $b, 0 if equal, 1 if $a > $b.
    """
    left = as_decimal(a)
    right = as_decimal(b)
    return (left > right) - (left < right)


def negate(value: Decimal) -> Decimal:
    """Exact negation, zero stays unsigned."""
    if value.is_zero():
        return value.copy_abs()
    return value.copy_negate()


def absolute(value: Decimal) -> Decimal:
    """Exact absolute value."""
    return value.copy_abs()


def is_zero(value: Decimal) -> bool:
    return value.is_zero()


def is_positive(value: Decimal) -> bool:
    return value > 0


def is_negative(value: Decimal) -> bool:
    return value < 0


def get_scale(value: Decimal) -> int:
    """Number of fractional digits of $value, never negative (`Decimal("1E+2")` has scale 0)."""
    return max(0, -value.as_tuple().exponent)


def to_scale(value: ExactNumber, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> Decimal:
    """Rescale $value to exactly $scale fractional digits.

    Args:
        value: Decimal or Fraction to rescale.
        scale: Number of fractional digits of the result (>= 0).
        rounding_mode: How to resolve a value that does not fit into $scale digits.

    Returns:
        Decimal with exponent exactly -$scale.

    Raises:
        ValueError: If $scale is negative.
        RoundingRequiredError: If rounding is needed and $rounding_mode is UNNECESSARY.

    Examples:
        >>> to_scale(Decimal("9.995"), 2, RoundingMode.HALF_UP)
        Decimal('10.00')
        >>> to_scale(Decimal("9.995"), 2, RoundingMode.HALF_DOWN)
        Decimal('9.99')
        >>> to_scale(Decimal("1.5"), 3)
        Decimal('1.500')
    """
    # Raise: a negative scale would mean rounding to tens, hundreds, ... which is not a currency concept
    if scale < 0:
        raise ValueError(f"Cannot call `to_scale` because $scale ({scale}) is negative")

    if isinstance(value, Decimal):
        return _quantize(value, scale, rounding_mode)

    scaled = Fraction(value) * 10**scale
    floor, remainder = divmod(scaled.numerator, scaled.denominator)

    if remainder == 0:
        return _EXACT_CONTEXT.scaleb(Decimal(floor), -scale)

    # Raise: the value does not fit into $scale digits and rounding is not allowed
    if rounding_mode is RoundingMode.UNNECESSARY:
        raise RoundingRequiredError(f"Cannot rescale {value} to {scale} decimal place(s) without rounding; provide a rounding mode")

    result = _pick_neighbour(floor, 2 * remainder, scaled.denominator, scaled > 0, rounding_mode)
    return _EXACT_CONTEXT.scaleb(Decimal(result), -scale)


def shorten_for_rounding(value: Decimal, scale: int) -> Decimal:
    """Cut $value to $scale + 1 fractional digits without moving it across any half of 10**-$scale.

    Uses `ROUND_05UP`: a dropped non-zero tail leaves a last digit other than 0 or 5, so the
    shortened value rounds to any multiple of 10**-$scale (in any mode) exactly as $value does.
    Values that already fit are returned unchanged in value.
    """
    return value.quantize(_unit(scale + 1), rounding=ROUND_05UP, context=_ROUNDING_CONTEXT)


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """Smallest-scale exact representation of $value (`1.500` -> `1.5`, `1E+2` -> `100`)."""
    if value.is_zero():
        return Decimal(0)

    normalized = _EXACT_CONTEXT.normalize(value)
    if normalized.as_tuple().exponent > 0:
        normalized = _EXACT_CONTEXT.quantize(normalized, Decimal(1))
    return normalized


def to_plain_string(value: Decimal) -> str:
    """Exact string without scientific notation (`1E-7` -> `0.0000001`)."""
    return format(value, "f")


def to_float_approximation(value: Decimal) -> float:
    """Lossy conversion for display purposes only; never feed the result back into arithmetic."""
    return float(value)


def _parse_rational(text: str) -> Fraction:
    try:
        return Fraction(text)
    except ZeroDivisionError as e:
        raise DivisionByZeroError(f"Cannot parse amount because $value ('{text}') has a zero denominator") from e
    except ValueError as e:
        raise InvalidAmountError(f"Cannot parse amount because $value ('{text}') is not a rational number") from e


def _fraction_to_exact(value: Fraction) -> ExactNumber:
    """Convert $value to Decimal if its denominator has no prime factors other than 2 and 5."""
    denominator = value.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1

    if denominator != 1:
        return value

    digits = max(twos, fives)
    coefficient = value.numerator * (10**digits // value.denominator)
    return _EXACT_CONTEXT.scaleb(Decimal(coefficient), -digits)


def _unit(scale: int) -> Decimal:
    """`Decimal("1E-<scale>")`, the exponent template for `quantize`."""
    return Decimal((0, (1,), -scale))


def _quantize(value: Decimal, scale: int, rounding_mode: RoundingMode) -> Decimal:
    """Rescale a Decimal with `quantize`; runs in time proportional to the digits kept, not to the exponent."""
    if rounding_mode is RoundingMode.UNNECESSARY:
        try:
            result = _EXACT_CONTEXT.quantize(value, _unit(scale))
        except Inexact as e:
            # Raise: the value does not fit into $scale digits and rounding is not allowed
            raise RoundingRequiredError(f"Cannot rescale {value} to {scale} decimal place(s) without rounding; provide a rounding mode") from e
    else:
        result = value.quantize(_unit(scale), rounding=_decimal_rounding(rounding_mode, value.is_signed()), context=_ROUNDING_CONTEXT)

    # Normalize negative zero (e.g. -0.001 rounded towards zero)
    if result.is_zero() and result.is_signed():
        result = result.copy_abs()
    return result


def _decimal_rounding(rounding_mode: RoundingMode, negative: bool) -> str:
    # `decimal` has no half-ceiling / half-floor; for a fixed sign they are half-up or half-down
    if rounding_mode is RoundingMode.HALF_CEILING:
        return ROUND_HALF_DOWN if negative else ROUND_HALF_UP
    if rounding_mode is RoundingMode.HALF_FLOOR:
        return ROUND_HALF_UP if negative else ROUND_HALF_DOWN

    try:
        return _DECIMAL_ROUNDINGS[rounding_mode]
    except KeyError as e:
        raise ValueError(f"Unsupported $rounding_mode: {rounding_mode}") from e


def _pick_neighbour(floor: int, twice_remainder: int, denominator: int, positive: bool, rounding_mode: RoundingMode) -> int:
    """Choose between $floor and $floor + 1 for a value strictly between them."""
    ceiling = floor + 1
    away_from_zero = ceiling if positive else floor
    towards_zero = floor if positive else ceiling

    if rounding_mode is RoundingMode.UP:
        return away_from_zero
    if rounding_mode is RoundingMode.DOWN:
        return towards_zero
    if rounding_mode is RoundingMode.CEILING:
        return ceiling
    if rounding_mode is RoundingMode.FLOOR:
        return floor

    # Half modes: $twice_remainder compared to $denominator tells the distance to $floor relative to 0.5
    if twice_remainder < denominator:
        return floor
    if twice_remainder > denominator:
        return ceiling

    if rounding_mode is RoundingMode.HALF_UP:
        return away_from_zero
    if rounding_mode is RoundingMode.HALF_DOWN:
        return towards_zero
    if rounding_mode is RoundingMode.HALF_CEILING:
        return ceiling
    if rounding_mode is RoundingMode.HALF_FLOOR:
        return floor
    if rounding_mode is RoundingMode.HALF_EVEN:
        return floor if floor % 2 == 0 else ceiling

    raise ValueError(f"Unsupported $rounding_mode: {rounding_mode}")
