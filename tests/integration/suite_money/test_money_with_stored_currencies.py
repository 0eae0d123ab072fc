from decimal import Decimal

import pytest

from suite_money import CurrencyMismatchError, Money, RoundingMode
from suite_money.domain.monetary.currency_registry import USD
from suite_money.platform.storage.currency_store import CurrencyRecord, InMemoryCurrencyStore


@pytest.fixture
def store() -> InMemoryCurrencyStore:
    store = InMemoryCurrencyStore()
    store.save(CurrencyRecord(id=None, code="usd", name="US Dollar", symbol="$", decimal=2))
    store.save(CurrencyRecord(id=None, code="eur", name="Euro", symbol="€", decimal=2, decimal_separator=",", group_separator=".", currency_position="right-with-space"))
    store.save(CurrencyRecord(id=None, code="irr", name="Iranian Rial", symbol="﷼", decimal=0, currency_position="hidden"))
    return store


def test_invoice_total_from_stored_currency(store):
    usd = store.get_by_code("USD")

    lines = [Money.of("19.99", usd) * 3, Money.of("5.49", usd), Money.of("0.01", usd)]
    total = lines[0]
    for line in lines[1:]:
        total = total + line

    tax = total.multiply("0.0825").rounded(RoundingMode.HALF_EVEN)
    grand_total = total + tax

    assert total.format() == "$65.47"
    assert tax.amount == Decimal("5.40")
    assert grand_total.format() == "$70.87"
    assert grand_total.to_dict()["currency"] == {"id": 1, "code": "USD", "name": "US Dollar", "symbol": "$"}


def test_stored_and_predefined_descriptors_mix(store):
    stored_usd = store.get_by_id(1)

    total = Money.of(1, stored_usd).add(Money.of(2, USD))

    assert total == Money.of(3, USD)
    assert total.currency is stored_usd


def test_stored_currencies_do_not_mix(store):
    with pytest.raises(CurrencyMismatchError):
        Money.of(1, store.get_by_code("USD")).add(Money.of(1, store.get_by_code("EUR")))


def test_conversion_then_display(store):
    eur = store.get_by_code("EUR")
    irr = store.get_by_code("IRR")

    converted = Money.of("1234.56", eur).convert_to(irr, "48500.5")

    assert converted.amount == Decimal("59876777.28")
    assert converted.format() == "59,876,777"
    assert converted.rounded().format() == "59,876,777"
    assert Money.of("1234.56", eur).format() == "1.234,56 €"
