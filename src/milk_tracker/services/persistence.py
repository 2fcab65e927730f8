"""Persistence gateway between the session and a key-value store."""

import logging
from dataclasses import dataclass
from typing import Protocol

from milk_tracker.domain.codec import (
    MarkedDatesDecodeError,
    parse_marked_dates,
    serialize_marked_dates,
)
from milk_tracker.domain.ledger import DeliveryLedger
from milk_tracker.domain.settings import DeliverySettings, parse_non_negative_int

_logger = logging.getLogger(__name__)

QUANTITY_KEY = "daily_quantity"
PRICE_KEY = "price_per_liter"
MARKED_DATES_KEY = "marked_dates"


class PreferenceRepository(Protocol):
    """Persistence interface for string preferences."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""


@dataclass
class PersistenceGateway:
    """Loads and saves ledger and settings snapshots."""

    repository: PreferenceRepository

    def load_settings(self, defaults: DeliverySettings) -> DeliverySettings:
        """Return stored settings, falling back to defaults per field."""
        quantity = self._load_int(QUANTITY_KEY, defaults.daily_quantity_liters)
        price = self._load_int(PRICE_KEY, defaults.price_per_liter)
        return DeliverySettings(daily_quantity_liters=quantity, price_per_liter=price)

    def load_ledger(self) -> DeliveryLedger:
        """Return the stored ledger, or an empty one if it cannot be decoded."""
        raw = self.repository.get(MARKED_DATES_KEY)
        if raw is None:
            return DeliveryLedger()
        try:
            return self.decode_ledger(raw)
        except MarkedDatesDecodeError as exc:
            _logger.warning("Discarding stored marked dates: %s", exc)
            return DeliveryLedger()

    def decode_ledger(self, raw: str) -> DeliveryLedger:
        """Decode a stored ledger, raising MarkedDatesDecodeError on bad input."""
        return DeliveryLedger(parse_marked_dates(raw))

    def save_quantity(self, value: int) -> None:
        self.repository.set(QUANTITY_KEY, str(value))

    def save_price(self, value: int) -> None:
        self.repository.set(PRICE_KEY, str(value))

    def save_marked_dates(self, ledger: DeliveryLedger) -> None:
        """Persist the full ledger encoding."""
        encoded = serialize_marked_dates(ledger.marked_dates)
        self.repository.set(MARKED_DATES_KEY, encoded)

    def _load_int(self, key: str, default: int) -> int:
        raw = self.repository.get(key)
        if raw is None:
            return default
        value = parse_non_negative_int(raw)
        if value is None:
            _logger.warning("Ignoring invalid stored value for %s: %r", key, raw)
            return default
        return value
