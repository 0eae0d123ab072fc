from __future__ import annotations

from suite_money.domain.monetary.currency_position import CurrencyPosition
from suite_money.domain.monetary.formatter import apply_symbol_position, format_number
from suite_money.utils.decimal_tools import DecimalLike


class Currency:
    """Immutable description of a currency: its identity and display conventions.

    Two currencies are the same if they are the same object, or if both $id and $code match.
    Display fields (symbol, separators, position) play no role in that comparison.

    Attributes:
        id (int): Stable numeric identifier (e.g. the primary key of a stored record).
        code (str): Currency code, always upper-case (e.g., "USD", "EUR", "IRR").
        name (str): Display name (e.g., "US Dollar").
        symbol (str): Display symbol (e.g., "$", "€", "﷼"); not required to be unique.
        decimal_places (int): Canonical number of fractional digits (e.g., 2 for USD, 0 for JPY).
        decimal_separator (str): Separator between integer and fractional digits.
        group_separator (str): Separator between groups of three integer digits.
        symbol_position (CurrencyPosition): Where the symbol goes relative to the number.
    """

    __slots__ = (
        "_id",
        "_code",
        "_name",
        "_symbol",
        "_decimal_places",
        "_decimal_separator",
        "_group_separator",
        "_symbol_position",
    )

    def __init__(
        self,
        id: int,
        code: str,
        name: str,
        symbol: str,
        decimal_places: int,
        decimal_separator: str = ".",
        group_separator: str = ",",
        symbol_position: CurrencyPosition | str = CurrencyPosition.LEFT,
    ):
        """Initialize a Currency instance.

        Args:
            id (int): Stable numeric identifier.
            code (str): Currency code; stored upper-case.
            name (str): Display name.
            symbol (str): Display symbol.
            decimal_places (int): Number of fractional digits (>= 0).
            decimal_separator (str): Fractional separator, e.g. "." or ",".
            group_separator (str): Thousands separator, e.g. "," or ".".
            symbol_position (CurrencyPosition | str): Position rule or its string value (e.g. "left-with-space").

        Raises:
            ValueError: If parameters are invalid.
            TypeError: If $id or $decimal_places is not an int.
        """
        # Raise: $id must be an int (bool is excluded on purpose)
        if not isinstance(id, int) or isinstance(id, bool):
            raise TypeError(f"$id must be an int, but provided value is: {id!r}")

        # Raise: $code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: $decimal_places must be a non-negative int
        if not isinstance(decimal_places, int) or isinstance(decimal_places, bool):
            raise TypeError(f"$decimal_places must be an int, but provided value is: {decimal_places!r}")
        if decimal_places < 0:
            raise ValueError(f"$decimal_places must be >= 0, but provided value is: {decimal_places}")

        # Raise: separators must be strings, the decimal one non-empty when fractions are shown
        if not isinstance(decimal_separator, str) or not isinstance(group_separator, str):
            raise TypeError(f"Separators must be strings, but provided values are: {decimal_separator!r}, {group_separator!r}")
        if decimal_places > 0 and decimal_separator == "":
            raise ValueError(f"$decimal_separator must not be empty for currency '{code}' with {decimal_places} decimal place(s)")

        self._id = id
        self._code = code.strip().upper()
        self._name = name
        self._symbol = symbol
        self._decimal_places = decimal_places
        self._decimal_separator = decimal_separator
        self._group_separator = group_separator
        self._symbol_position = CurrencyPosition(symbol_position)

    @property
    def id(self) -> int:
        """Get the numeric identifier."""
        return self._id

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def symbol(self) -> str:
        """Get the currency symbol."""
        return self._symbol

    @property
    def decimal_places(self) -> int:
        """Get the canonical number of fractional digits."""
        return self._decimal_places

    @property
    def decimal_separator(self) -> str:
        return self._decimal_separator

    @property
    def group_separator(self) -> str:
        return self._group_separator

    @property
    def symbol_position(self) -> CurrencyPosition:
        return self._symbol_position

    def format(self, amount: DecimalLike) -> str:
        """Format $amount according to this currency's display rules.

        The number always shows exactly `decimal_places` fractional digits, grouped with
        `group_separator`, and the symbol is placed according to `symbol_position`.

        Args:
            amount: Amount to format (Decimal-like scalar).

        Returns:
            str: Formatted amount, e.g. "$1,234.50" or "1.234,50 €".

        Raises:
            InvalidAmountError: If $amount is not a finite number.
        """
        number = format_number(amount, self._decimal_places, self._decimal_separator, self._group_separator)
        return apply_symbol_position(number, self._symbol, self._symbol_position)

    def is_same_as(self, other: Currency) -> bool:
        """Check whether $other denotes the same currency.

        True for the very same object, or when both $id and $code are equal. The check is
        symmetric, so it does not matter which side is a stored or an ad-hoc descriptor.

        Args:
            other (Currency): Currency to compare with.

        Returns:
            bool: True if both describe the same currency; False for anything that is not a Currency.
        """
        if self is other:
            return True
        if not isinstance(other, Currency):
            return False
        return self._id == other.id and self._code == other.code

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.is_same_as(other)

    def __hash__(self) -> int:
        """Hash based on id and code."""
        return hash((self._id, self._code))

    def __str__(self) -> str:
        """Return string representation."""
        return self._code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}({self._id}, '{self._code}', '{self._name}', '{self._symbol}', {self._decimal_places}, {self._symbol_position})"
