from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Protocol, TYPE_CHECKING

from suite_money.utils.decimal_tools import ExactNumber, RoundingMode, as_decimal, shorten_for_rounding, strip_trailing_zeros, to_scale

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import Currency


# region Interface


class Context(Protocol):
    """Policy deciding which scale a Money amount is constrained to when it is created.

    A context is applied once, in `Money.of`; arithmetic results are not re-constrained.
    """

    @property
    def step(self) -> int:
        """Step in minor units the amount must be a multiple of (1 means any minor unit)."""
        ...

    @property
    def is_fixed_scale(self) -> bool:
        """True if every amount produced by this context has the same scale."""
        ...

    def apply_to(self, amount: ExactNumber, currency: Currency, rounding_mode: RoundingMode) -> Decimal:
        """Constrain $amount for $currency.

        Args:
            amount: Exact amount to constrain.
            currency: Currency the amount belongs to.
            rounding_mode: How to round when $amount does not fit.

        Returns:
            The constrained amount.

        Raises:
            RoundingRequiredError: If rounding is needed and $rounding_mode is UNNECESSARY.
        """
        ...


# endregion

# region Implementations


class DefaultContext:
    """Constrain amounts to the currency's canonical scale (`Currency.decimal_places`)."""

    __slots__ = ()

    @property
    def step(self) -> int:
        return 1

    @property
    def is_fixed_scale(self) -> bool:
        return True

    def apply_to(self, amount: ExactNumber, currency: Currency, rounding_mode: RoundingMode) -> Decimal:
        return to_scale(amount, currency.decimal_places, rounding_mode)

    def __eq__(self, other) -> bool:
        return isinstance(other, DefaultContext)

    def __hash__(self) -> int:
        return hash(DefaultContext)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CustomContext:
    """Constrain amounts to a fixed $scale, optionally in increments of $step minor units.

    Example: `CustomContext(2, step=5)` allows 0.00, 0.05, 0.10, ...
    """

    __slots__ = ("_scale", "_step")

    def __init__(self, scale: int, step: int = 1) -> None:
        # Raise: $scale must be a non-negative int
        if not isinstance(scale, int) or isinstance(scale, bool) or scale < 0:
            raise ValueError(f"Cannot call `CustomContext.__init__` because $scale ({scale!r}) is not a non-negative int")

        _check_step(step, "CustomContext.__init__")

        self._scale = scale
        self._step = step

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def step(self) -> int:
        return self._step

    @property
    def is_fixed_scale(self) -> bool:
        return True

    def apply_to(self, amount: ExactNumber, currency: Currency, rounding_mode: RoundingMode) -> Decimal:
        return _to_scale_with_step(amount, self._scale, self._step, rounding_mode)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CustomContext):
            return False
        return self._scale == other.scale and self._step == other.step

    def __hash__(self) -> int:
        return hash((CustomContext, self._scale, self._step))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(scale={self._scale}, step={self._step})"


class CashContext:
    """Constrain amounts to the currency's scale, in increments of the smallest cash unit.

    Example: `CashContext(5)` for CHF, where the smallest coin is 0.05.
    """

    __slots__ = ("_step",)

    def __init__(self, step: int) -> None:
        _check_step(step, "CashContext.__init__")
        self._step = step

    @property
    def step(self) -> int:
        return self._step

    @property
    def is_fixed_scale(self) -> bool:
        return True

    def apply_to(self, amount: ExactNumber, currency: Currency, rounding_mode: RoundingMode) -> Decimal:
        return _to_scale_with_step(amount, currency.decimal_places, self._step, rounding_mode)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CashContext):
            return False
        return self._step == other.step

    def __hash__(self) -> int:
        return hash((CashContext, self._step))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(step={self._step})"


class AutoContext:
    """Keep the exact amount, whatever its scale; trailing zeros are removed.

    Rounding is never performed, so only `RoundingMode.UNNECESSARY` is accepted.
    """

    __slots__ = ()

    @property
    def step(self) -> int:
        return 1

    @property
    def is_fixed_scale(self) -> bool:
        return False

    def apply_to(self, amount: ExactNumber, currency: Currency, rounding_mode: RoundingMode) -> Decimal:
        # Raise: a rounding mode has no meaning when the scale is not constrained
        if rounding_mode is not RoundingMode.UNNECESSARY:
            raise ValueError(f"Cannot apply `AutoContext` with $rounding_mode {rounding_mode.name}; only UNNECESSARY is supported")

        return strip_trailing_zeros(as_decimal(amount))

    def __eq__(self, other) -> bool:
        return isinstance(other, AutoContext)

    def __hash__(self) -> int:
        return hash(AutoContext)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# endregion

# region Utilities


def _check_step(step: int, caller: str) -> None:
    # Raise: $step must be a positive int
    if not isinstance(step, int) or isinstance(step, bool) or step < 1:
        raise ValueError(f"Cannot call `{caller}` because $step ({step!r}) is not a positive int")


def _to_scale_with_step(amount: ExactNumber, scale: int, step: int, rounding_mode: RoundingMode) -> Decimal:
    """Round $amount to a multiple of $step units of 10**-$scale, returned with exactly $scale digits."""
    if step == 1:
        return to_scale(amount, scale, rounding_mode)

    if isinstance(amount, Decimal):
        amount = shorten_for_rounding(amount, scale)

    increment = Fraction(step, 10**scale)
    steps = to_scale(Fraction(amount) / increment, 0, rounding_mode)
    return to_scale(Fraction(steps) * increment, scale)


# endregion
