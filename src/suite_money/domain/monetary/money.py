from __future__ import annotations

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict

from suite_money.domain.monetary.context import Context, DefaultContext
from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.exceptions import CurrencyMismatchError
from suite_money.utils import decimal_tools
from suite_money.utils.decimal_tools import DecimalLike, RoundingMode, as_decimal, as_exact

logger = logging.getLogger(__name__)

# Rounding used by `Money.rounded` when no mode is given
DEFAULT_ROUNDING_MODE = RoundingMode.HALF_UP


class Money:
    """Immutable monetary amount in a given currency.

    The amount is an exact `Decimal`; arithmetic never rounds silently. Scale is only
    constrained when a Money is created via `Money.of` (through its `Context`) or explicitly
    via `rounded`. Every operation returns a new instance sharing the same `Currency` object.

    Example:
        >>> price = Money.of("19.99", USD)
        >>> (price * 3).format()
        '$59.97'
        >>> Money.of("10", USD).divide(3, RoundingMode.HALF_EVEN)
        Money(3.33, USD)
    """

    __slots__ = ("_amount", "_currency", "_context")

    # region Init

    def __init__(self, amount: DecimalLike, currency: Currency, context: Context | None = None):
        """Initialize Money with an already constrained amount.

        The $context is stored but not applied; use `Money.of` to constrain the amount.

        Args:
            amount: Exact amount (Decimal-like scalar).
            currency (Currency): Currency object.
            context: Context the amount was created with. Defaults to `DefaultContext`.

        Raises:
            InvalidAmountError: If $amount is not a finite number.
            RoundingRequiredError: If $amount has no finite decimal expansion (e.g. 1/3).
            TypeError: If $currency is not Currency instance.
        """
        _check_currency(currency, "Money.__init__")

        self._amount = as_decimal(amount)
        self._currency = currency
        self._context = context if context is not None else DefaultContext()

    @classmethod
    def of(
        cls,
        amount: DecimalLike,
        currency: Currency,
        context: Context | None = None,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """Create Money, constraining $amount with $context.

        Args:
            amount: Amount as Decimal, int, str ("12.34", "1/3"), float or Fraction.
            currency: Currency of the amount.
            context: Scale policy; defaults to `DefaultContext` (the currency's decimal places).
            rounding_mode: How to round when $amount does not fit $context. The default
                refuses any rounding.

        Returns:
            Money: New instance.

        Raises:
            InvalidAmountError: If $amount cannot be parsed as an exact number.
            RoundingRequiredError: If $amount does not fit $context and $rounding_mode is UNNECESSARY.
        """
        _check_currency(currency, "Money.of")

        if context is None:
            context = DefaultContext()

        constrained_amount = context.apply_to(as_exact(amount), currency, rounding_mode)
        return cls(constrained_amount, currency, context)

    @classmethod
    def of_minor(
        cls,
        minor_amount: DecimalLike,
        currency: Currency,
        context: Context | None = None,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """Create Money from an amount in minor units (e.g. cents: 1234 -> 12.34 USD)."""
        _check_currency(currency, "Money.of_minor")

        amount = Fraction(as_exact(minor_amount)) / 10**currency.decimal_places
        return cls.of(amount, currency, context, rounding_mode)

    @classmethod
    def zero(cls, currency: Currency, context: Context | None = None) -> Money:
        """Create a zero amount in $currency."""
        return cls.of(0, currency, context)

    # endregion

    # region Properties

    @property
    def amount(self) -> Decimal:
        """Get the exact amount."""
        return self._amount

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    @property
    def context(self) -> Context:
        """Get the context this Money was created with."""
        return self._context

    def get_minor_amount(self) -> Decimal:
        """Amount expressed in minor units (12.34 USD -> 1234); fractional if finer than a minor unit."""
        minor_amount = decimal_tools.multiply(self._amount, 10**self._currency.decimal_places)
        return decimal_tools.strip_trailing_zeros(minor_amount)

    def is_zero(self) -> bool:
        return decimal_tools.is_zero(self._amount)

    def is_positive(self) -> bool:
        return decimal_tools.is_positive(self._amount)

    def is_negative(self) -> bool:
        return decimal_tools.is_negative(self._amount)

    # endregion

    # region Arithmetic

    def add(self, other: Money) -> Money:
        """Add another Money of the same currency.

        The result keeps this Money's currency and context; its scale is not constrained.

        Raises:
            CurrencyMismatchError: If $other has a different currency.
        """
        self._check_same_currency(other, "add")
        return self._with_amount(decimal_tools.add(self._amount, other.amount))

    def subtract(self, other: Money) -> Money:
        """Subtract another Money of the same currency.

        Raises:
            CurrencyMismatchError: If $other has a different currency.
        """
        self._check_same_currency(other, "subtract")
        return self._with_amount(decimal_tools.subtract(self._amount, other.amount))

    def multiply(self, factor: DecimalLike) -> Money:
        """Multiply the amount by a plain number; the result is exact."""
        # Raise: Money * Money has no meaning
        if isinstance(factor, Money):
            raise TypeError("Cannot call `multiply` because $factor is Money; multiply by a plain number")

        return self._with_amount(decimal_tools.multiply(self._amount, factor))

    def divide(self, divisor: DecimalLike, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY, scale: int | None = None) -> Money:
        """Divide the amount by a plain number.

        Without $rounding_mode the quotient must be exact (10 / 4 works, 10 / 3 raises).
        With a $rounding_mode and no $scale, the quotient is rounded to the scale of the
        amount, but to no fewer digits than the currency's decimal places.

        Args:
            divisor: Plain number to divide by.
            rounding_mode: How to round an inexact quotient.
            scale: Optional explicit number of fractional digits of the result.

        Returns:
            Money: New instance with the quotient.

        Raises:
            DivisionByZeroError: If $divisor is zero.
            RoundingRequiredError: If the quotient is inexact and $rounding_mode is UNNECESSARY.
        """
        # Raise: Money / Money would be a ratio, not Money
        if isinstance(divisor, Money):
            raise TypeError("Cannot call `divide` because $divisor is Money; divide by a plain number")

        if scale is None and rounding_mode is not RoundingMode.UNNECESSARY:
            scale = max(self._currency.decimal_places, decimal_tools.get_scale(self._amount))

        return self._with_amount(decimal_tools.divide(self._amount, divisor, scale, rounding_mode))

    def abs(self) -> Money:
        """Return Money with the absolute value of the amount."""
        return self._with_amount(decimal_tools.absolute(self._amount))

    def negated(self) -> Money:
        """Return Money with the negated amount."""
        return self._with_amount(decimal_tools.negate(self._amount))

    def rounded(self, rounding_mode: RoundingMode = DEFAULT_ROUNDING_MODE) -> Money:
        """Return Money rescaled to the currency's decimal places.

        Args:
            rounding_mode: Rounding policy; half-up by default.

        Returns:
            Money: New instance with exactly `currency.decimal_places` fractional digits.
        """
        return self._with_amount(decimal_tools.to_scale(self._amount, self._currency.decimal_places, rounding_mode))

    def convert_to(self, target_currency: Currency, rate: DecimalLike) -> Money:
        """Convert to $target_currency by multiplying with $rate.

        This is a stub: $rate is taken as given, with no check of its sign, magnitude or
        freshness. Production code should obtain rates from a real exchange-rate provider.
        The result is not rescaled to the target's decimal places; call `rounded` for that.

        Args:
            target_currency: Currency of the result.
            rate: Units of $target_currency per one unit of this currency.

        Returns:
            Money: Converted amount in $target_currency, same context.
        """
        _check_currency(target_currency, "convert_to")

        logger.debug(f"Converting {self} to {target_currency.code} at caller-supplied $rate {rate}")
        converted_amount = decimal_tools.multiply(self._amount, rate)
        return self.__class__(converted_amount, target_currency, self._context)

    # endregion

    # region Comparison

    def equals(self, other: Money) -> bool:
        """Check if currency codes match and amounts are numerically equal (1.50 equals 1.5).

        Never raises for different currencies; they are simply not equal.
        """
        if not isinstance(other, Money):
            return False
        return self._currency.code == other.currency.code and decimal_tools.compare(self._amount, other.amount) == 0

    def compare_to(self, other: Money) -> int:
        """Compare with another Money of the same currency.

        Returns:
            -1, 0 or 1 if this amount is less than, equal to or greater than $other's amount.

        Raises:
            CurrencyMismatchError: If $other has a different currency.
        """
        self._check_same_currency(other, "compare_to")
        return decimal_tools.compare(self._amount, other.amount)

    def greater_than(self, other: Money) -> bool:
        return self.compare_to(other) > 0

    def greater_than_or_equal(self, other: Money) -> bool:
        return self.compare_to(other) >= 0

    def less_than(self, other: Money) -> bool:
        return self.compare_to(other) < 0

    def less_than_or_equal(self, other: Money) -> bool:
        return self.compare_to(other) <= 0

    def min(self, other: Money) -> Money:
        """Return the smaller of the two instances (same currency); $other on a tie."""
        self._check_same_currency(other, "min")
        return self if self._amount < other.amount else other

    def max(self, other: Money) -> Money:
        """Return the greater of the two instances (same currency); $other on a tie."""
        self._check_same_currency(other, "max")
        return self if self._amount > other.amount else other

    # endregion

    # region Formatting & serialization

    def format(self) -> str:
        """Format the amount with the currency's display rules, e.g. "$1,234.50"."""
        return self._currency.format(self._amount)

    def to_dict(self) -> Dict[str, Any]:
        """Structural representation for serialization.

        The amount is an exact decimal string (never a float). Only the currency's identity
        fields are included; separators and symbol position are presentation-only.

        Returns:
            Dict like `{"amount": "12.50", "currency": {"id": 1, "code": "USD", "name": "US Dollar", "symbol": "$"}}`.
        """
        return {
            "amount": decimal_tools.to_plain_string(self._amount),
            "currency": {
                "id": self._currency.id,
                "code": self._currency.code,
                "name": self._currency.name,
                "symbol": self._currency.symbol,
            },
        }

    # endregion

    # region Magic

    def __eq__(self, other) -> bool:
        """Check equality with another Money object."""
        return self.equals(other)

    def __hash__(self) -> int:
        """Hash based on currency code and numeric value."""
        return hash((self._currency.code, self._amount))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __add__(self, other):
        """Add two Money objects (same currency)."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        """Subtract two Money objects (same currency)."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        """Multiply Money by number (returns Money)."""
        if isinstance(other, Money):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide Money by number; the quotient must be exact."""
        if isinstance(other, Money):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> Money:
        return self.negated()

    def __abs__(self) -> Money:
        return self.abs()

    def __str__(self) -> str:
        """Return string like '1000.50 USD'."""
        return f"{decimal_tools.to_plain_string(self._amount)} {self._currency.code}"

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, USD)'."""
        return f"{self.__class__.__name__}({decimal_tools.to_plain_string(self._amount)}, {self._currency.code})"

    # endregion

    # region Internal

    def _with_amount(self, amount: Decimal) -> Money:
        return self.__class__(amount, self._currency, self._context)

    def _check_same_currency(self, other: Money, operation: str) -> None:
        """Check if two Money objects have the same currency.

        Raises:
            TypeError: If $other is not Money.
            CurrencyMismatchError: If currencies don't match.
        """
        # Raise: binary operations are defined between Money objects only
        if not isinstance(other, Money):
            raise TypeError(f"Cannot call `{operation}` because $other is not Money (got type '{type(other).__name__}')")

        # Raise: amounts in different currencies cannot be combined or compared
        if not self._currency.is_same_as(other.currency):
            raise CurrencyMismatchError(f"Cannot call `{operation}` on different currencies: {self._currency!r} and {other.currency!r}")

    # endregion


def _check_currency(currency: Currency, caller: str) -> None:
    # Raise: currency must be an instance of Currency
    if not isinstance(currency, Currency):
        raise TypeError(f"Cannot call `{caller}` because $currency is not Currency (got type '{type(currency).__name__}')")
