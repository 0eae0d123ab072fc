"""Predefined currencies.

Plain module constants; nothing is registered globally. Applications with their own
currency records should load descriptors through a `CurrencyStore` instead.
"""

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_position import CurrencyPosition


# Fiat currencies
USD = Currency(1, "USD", "US Dollar", "$", 2)
EUR = Currency(2, "EUR", "Euro", "€", 2, decimal_separator=",", group_separator=".", symbol_position=CurrencyPosition.RIGHT_WITH_SPACE)
GBP = Currency(3, "GBP", "British Pound", "£", 2)
JPY = Currency(4, "JPY", "Japanese Yen", "¥", 0)
CHF = Currency(5, "CHF", "Swiss Franc", "CHF", 2, group_separator="'", symbol_position=CurrencyPosition.LEFT_WITH_SPACE)
IRR = Currency(6, "IRR", "Iranian Rial", "﷼", 0, decimal_separator="/", group_separator="٬", symbol_position=CurrencyPosition.RIGHT_WITH_SPACE)

# Crypto currencies
BTC = Currency(7, "BTC", "Bitcoin", "₿", 8, symbol_position=CurrencyPosition.LEFT_WITH_SPACE)

PREDEFINED_CURRENCIES = (USD, EUR, GBP, JPY, CHF, IRR, BTC)
