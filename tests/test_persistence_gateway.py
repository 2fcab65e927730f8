"""Tests for the persistence gateway."""

import logging
from datetime import date

import pytest

from milk_tracker.domain.codec import MarkedDatesDecodeError
from milk_tracker.domain.ledger import DeliveryLedger
from milk_tracker.domain.settings import DeliverySettings
from milk_tracker.services.persistence import (
    MARKED_DATES_KEY,
    PRICE_KEY,
    QUANTITY_KEY,
    PersistenceGateway,
)
from tests.conftest import InMemoryPreferenceRepository


def test_load_uses_defaults_when_store_empty() -> None:
    gateway = PersistenceGateway(InMemoryPreferenceRepository())

    settings = gateway.load_settings(DeliverySettings(3, 40))
    ledger = gateway.load_ledger()

    assert settings == DeliverySettings(3, 40)
    assert ledger.marked_dates == {}


def test_load_reads_stored_values() -> None:
    repository = InMemoryPreferenceRepository(
        values={
            QUANTITY_KEY: "2",
            PRICE_KEY: "55",
            MARKED_DATES_KEY: "2024-06-01:true,2024-06-02:false",
        }
    )
    gateway = PersistenceGateway(repository)

    settings = gateway.load_settings(DeliverySettings())
    ledger = gateway.load_ledger()

    assert settings == DeliverySettings(daily_quantity_liters=2, price_per_liter=55)
    assert ledger.marked_dates == {date(2024, 6, 1): True, date(2024, 6, 2): False}


def test_invalid_stored_setting_falls_back_to_default(caplog) -> None:
    repository = InMemoryPreferenceRepository(values={QUANTITY_KEY: "lots"})
    gateway = PersistenceGateway(repository)

    with caplog.at_level(logging.WARNING, logger="milk_tracker"):
        settings = gateway.load_settings(DeliverySettings())

    assert settings.daily_quantity_liters == 1
    assert "daily_quantity" in caplog.text


def test_corrupt_ledger_falls_back_to_empty(caplog) -> None:
    repository = InMemoryPreferenceRepository(
        values={MARKED_DATES_KEY: "2024-13-40:true"}
    )
    gateway = PersistenceGateway(repository)

    with caplog.at_level(logging.WARNING, logger="milk_tracker"):
        ledger = gateway.load_ledger()

    assert ledger.marked_dates == {}
    assert "Discarding stored marked dates" in caplog.text


def test_decode_ledger_surfaces_typed_failure() -> None:
    gateway = PersistenceGateway(InMemoryPreferenceRepository())

    with pytest.raises(MarkedDatesDecodeError):
        gateway.decode_ledger("2024-01-01:maybe")


def test_save_writes_expected_keys() -> None:
    repository = InMemoryPreferenceRepository()
    gateway = PersistenceGateway(repository)

    gateway.save_quantity(2)
    gateway.save_price(60)
    gateway.save_marked_dates(DeliveryLedger({date(2024, 6, 1): True}))

    assert repository.values == {
        QUANTITY_KEY: "2",
        PRICE_KEY: "60",
        MARKED_DATES_KEY: "2024-06-01:true",
    }
