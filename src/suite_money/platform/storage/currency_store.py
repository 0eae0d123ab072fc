from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Protocol

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_position import CurrencyPosition

logger = logging.getLogger(__name__)


# region Record


@dataclass(frozen=True)
class CurrencyRecord:
    """Storage row of a currency, one column per field of the `currencies` table.

    The record is a persistence-layer type; domain code works with `Currency`. Convert at the
    boundary with `to_currency` / `from_currency`.

    Attributes:
        id: Primary key; None for a record that was not saved yet.
        code: Currency code, e.g. "USD".
        name: Display name.
        symbol: Display symbol.
        decimal: Number of decimal places.
        decimal_separator: Fractional separator.
        group_separator: Thousands separator.
        currency_position: Stored string value of `CurrencyPosition`, e.g. "left-with-space".
    """

    id: Optional[int]
    code: str
    name: str
    symbol: str
    decimal: int
    decimal_separator: str = "."
    group_separator: str = ","
    currency_position: str = CurrencyPosition.LEFT.value

    def __post_init__(self) -> None:
        # Raise: $code must be a non-empty string
        if not isinstance(self.code, str) or not self.code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{self.code}'")

        # Codes are stored in capital letters
        object.__setattr__(self, "code", self.code.strip().upper())

    def to_currency(self) -> Currency:
        """Build the domain descriptor for this record.

        Raises:
            ValueError: If the record was not saved yet (no $id) or holds invalid values.
        """
        # Raise: a descriptor needs a stable id for currency comparisons
        if self.id is None:
            raise ValueError(f"Cannot call `to_currency` because record for '{self.code}' has no $id (save it first)")

        return Currency(
            id=self.id,
            code=self.code,
            name=self.name,
            symbol=self.symbol,
            decimal_places=self.decimal,
            decimal_separator=self.decimal_separator,
            group_separator=self.group_separator,
            symbol_position=CurrencyPosition(self.currency_position),
        )

    @classmethod
    def from_currency(cls, currency: Currency) -> CurrencyRecord:
        """Build a storage row from a domain descriptor."""
        return cls(
            id=currency.id,
            code=currency.code,
            name=currency.name,
            symbol=currency.symbol,
            decimal=currency.decimal_places,
            decimal_separator=currency.decimal_separator,
            group_separator=currency.group_separator,
            currency_position=currency.symbol_position.value,
        )


# endregion

# region Interface


class CurrencyStore(Protocol):
    """Source of currency descriptors, keyed by numeric id and by code.

    Implementations may be backed by a database table, a file or memory. They always hand
    out `Currency` objects, never storage rows.
    """

    def get_by_id(self, currency_id: int) -> Currency:
        """Get the currency with $currency_id.

        Raises:
            KeyError: If no such currency exists.
        """
        ...

    def get_by_code(self, code: str) -> Currency:
        """Get the currency with $code (case-insensitive).

        Raises:
            KeyError: If no such currency exists.
        """
        ...

    def save(self, record: CurrencyRecord) -> Currency:
        """Insert or update $record and return the stored currency.

        Raises:
            ValueError: If another currency already uses the same code.
        """
        ...

    def all(self) -> Iterator[Currency]:
        """Iterate over all stored currencies, ordered by id."""
        ...


# endregion

# region In-memory implementation


class InMemoryCurrencyStore:
    """Dictionary-backed `CurrencyStore`.

    Ids are assigned incrementally for records saved with `id=None`. Not thread-safe;
    populate it before sharing.
    """

    __slots__ = ("_records_by_id", "_currencies_by_id", "_next_id")

    def __init__(self) -> None:
        self._records_by_id: Dict[int, CurrencyRecord] = {}
        self._currencies_by_id: Dict[int, Currency] = {}
        self._next_id = 1

    def get_by_id(self, currency_id: int) -> Currency:
        currency = self._currencies_by_id.get(currency_id)
        if currency is None:
            logger.debug(f"Currency with $currency_id {currency_id} not found")
            raise KeyError(f"Currency with id {currency_id} not found. Available ids: {sorted(self._currencies_by_id)}")
        return currency

    def get_by_code(self, code: str) -> Currency:
        normalized_code = code.strip().upper()
        for currency in self._currencies_by_id.values():
            if currency.code == normalized_code:
                return currency

        logger.debug(f"Currency with $code '{normalized_code}' not found")
        raise KeyError(f"Currency with code '{normalized_code}' not found. Available codes: {[c.code for c in self.all()]}")

    def save(self, record: CurrencyRecord) -> Currency:
        if record.id is None:
            record = replace(record, id=self._next_id)

        # Raise: codes must stay unique across records
        for existing in self._records_by_id.values():
            if existing.code == record.code and existing.id != record.id:
                raise ValueError(f"Cannot call `save` because currency with code '{record.code}' already exists with id {existing.id}")

        currency = record.to_currency()
        self._records_by_id[record.id] = record
        self._currencies_by_id[record.id] = currency
        self._next_id = max(self._next_id, record.id + 1)

        logger.info(f"Saved currency '{currency.code}' with id {currency.id}")
        return currency

    def get_record(self, currency_id: int) -> CurrencyRecord:
        """Get the raw storage row with $currency_id.

        Raises:
            KeyError: If no such record exists.
        """
        return self._records_by_id[currency_id]

    def all(self) -> Iterator[Currency]:
        for currency_id in sorted(self._currencies_by_id):
            yield self._currencies_by_id[currency_id]

    def __len__(self) -> int:
        return len(self._currencies_by_id)

    def __contains__(self, code: str) -> bool:
        normalized_code = code.strip().upper()
        return any(currency.code == normalized_code for currency in self._currencies_by_id.values())


# endregion
