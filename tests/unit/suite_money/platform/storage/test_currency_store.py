import logging

import pytest

from suite_money.domain.monetary.currency_position import CurrencyPosition
from suite_money.domain.monetary.currency_registry import EUR, USD
from suite_money.platform.storage.currency_store import CurrencyRecord, InMemoryCurrencyStore


def _usd_record(id=None) -> CurrencyRecord:
    return CurrencyRecord(id=id, code="usd", name="US Dollar", symbol="$", decimal=2)


def test_record_stores_code_upper_case():
    assert _usd_record().code == "USD"


def test_record_round_trip_keeps_same_currency():
    record = CurrencyRecord.from_currency(EUR)
    currency = record.to_currency()

    assert currency is not EUR
    assert currency.is_same_as(EUR)
    assert currency.decimal_separator == ","
    assert currency.symbol_position is CurrencyPosition.RIGHT_WITH_SPACE
    assert record.currency_position == "right-with-space"


@pytest.mark.parametrize("code", [None, 840, "", "   "])
def test_record_rejects_invalid_code(code):
    with pytest.raises(ValueError):
        CurrencyRecord(id=None, code=code, name="US Dollar", symbol="$", decimal=2)


def test_unsaved_record_cannot_become_currency():
    with pytest.raises(ValueError):
        _usd_record().to_currency()


def test_save_assigns_incremental_ids():
    store = InMemoryCurrencyStore()

    usd = store.save(_usd_record())
    eur = store.save(CurrencyRecord(id=None, code="EUR", name="Euro", symbol="€", decimal=2))

    assert usd.id == 1
    assert eur.id == 2
    assert len(store) == 2
    assert [c.code for c in store.all()] == ["USD", "EUR"]


def test_save_keeps_explicit_id_and_continues_after_it():
    store = InMemoryCurrencyStore()

    store.save(_usd_record(id=10))
    eur = store.save(CurrencyRecord(id=None, code="EUR", name="Euro", symbol="€", decimal=2))

    assert eur.id == 11


def test_save_updates_existing_record():
    store = InMemoryCurrencyStore()
    store.save(_usd_record(id=1))

    updated = store.save(CurrencyRecord(id=1, code="USD", name="US Dollar", symbol="US$", decimal=2, currency_position="left-with-space"))

    assert store.get_by_id(1) is updated
    assert updated.format("5") == "US$ 5.00"
    assert store.get_record(1).symbol == "US$"


def test_save_rejects_duplicate_code():
    store = InMemoryCurrencyStore()
    store.save(_usd_record())

    with pytest.raises(ValueError):
        store.save(_usd_record())


def test_lookup_by_id_and_code():
    store = InMemoryCurrencyStore()
    usd = store.save(_usd_record())

    assert store.get_by_id(usd.id) is usd
    assert store.get_by_code(" usd ") is usd
    assert "Usd" in store
    assert "EUR" not in store


def test_lookup_of_unknown_currency_raises_key_error():
    store = InMemoryCurrencyStore()

    with pytest.raises(KeyError):
        store.get_by_id(1)
    with pytest.raises(KeyError):
        store.get_by_code("XYZ")


def test_stored_currency_is_same_as_predefined_one():
    store = InMemoryCurrencyStore()
    stored_usd = store.save(_usd_record())

    assert stored_usd.is_same_as(USD)
    assert USD.is_same_as(stored_usd)


def test_save_is_logged(caplog):
    store = InMemoryCurrencyStore()

    with caplog.at_level(logging.INFO, logger="suite_money.platform.storage.currency_store"):
        store.save(_usd_record())

    assert "Saved currency 'USD' with id 1" in caplog.text
