__version__ = "0.0.1"

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_position import CurrencyPosition
from suite_money.domain.monetary.context import AutoContext, CashContext, CustomContext, DefaultContext
from suite_money.domain.monetary.exceptions import CurrencyMismatchError, DivisionByZeroError, InvalidAmountError, MoneyError, RoundingRequiredError
from suite_money.domain.monetary.money import Money
from suite_money.utils.decimal_tools import RoundingMode

__all__ = [
    "AutoContext",
    "CashContext",
    "Currency",
    "CurrencyMismatchError",
    "CurrencyPosition",
    "CustomContext",
    "DefaultContext",
    "DivisionByZeroError",
    "InvalidAmountError",
    "Money",
    "MoneyError",
    "RoundingMode",
    "RoundingRequiredError",
]
