"""Exceptions raised by monetary operations.

Each exception also derives from the builtin that callers would naturally catch
for the same situation (`ValueError`, `ZeroDivisionError`, `ArithmeticError`).
"""


class MoneyError(Exception):
    """Base class for all monetary errors."""


class CurrencyMismatchError(MoneyError, ValueError):
    """Raised when a binary operation combines two different currencies."""


class RoundingRequiredError(MoneyError, ArithmeticError):
    """Raised when a result cannot be represented without rounding, and no rounding mode allows it."""


class DivisionByZeroError(MoneyError, ZeroDivisionError):
    """Raised when dividing by zero."""


class InvalidAmountError(MoneyError, ValueError):
    """Raised when an amount cannot be parsed as an exact number."""
