"""Session state for a household's delivery tracking."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from milk_tracker.domain.calendar import CalendarMonth, build_calendar_month
from milk_tracker.domain.ledger import DeliveryLedger, MonthlyAggregate, YearMonth
from milk_tracker.domain.settings import DeliverySettings, parse_non_negative_int
from milk_tracker.services.persistence import PersistenceGateway

_logger = logging.getLogger(__name__)


class TrackerSession:
    """Owns the in-memory ledger and settings for one household.

    Mutations apply immediately and schedule a background write of the full
    current state through the gateway. Writes run one at a time and read the
    state when they start, so the last write to finish holds the newest
    snapshot. Reads never touch storage.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        ledger: DeliveryLedger | None = None,
        settings: DeliverySettings | None = None,
    ) -> None:
        self.gateway = gateway
        self._ledger = DeliveryLedger() if ledger is None else ledger
        self._settings = DeliverySettings() if settings is None else settings
        self._pending: set[asyncio.Task[None]] = set()
        self._write_lock = asyncio.Lock()

    @classmethod
    def load(
        cls, gateway: PersistenceGateway, defaults: DeliverySettings
    ) -> "TrackerSession":
        """Create a session from the gateway's stored state."""
        return cls(
            gateway=gateway,
            ledger=gateway.load_ledger(),
            settings=gateway.load_settings(defaults),
        )

    @property
    def ledger(self) -> DeliveryLedger:
        return self._ledger

    @property
    def settings(self) -> DeliverySettings:
        return self._settings

    def is_delivered(self, day: date) -> bool:
        return self._ledger.is_delivered(day)

    def summary(self, year_month: YearMonth) -> MonthlyAggregate:
        """Return delivered days and cost for a month."""
        return self._ledger.aggregate(year_month, self._settings)

    def calendar(self, year_month: YearMonth) -> CalendarMonth:
        return build_calendar_month(year_month, self._ledger)

    async def toggle(self, day: date) -> DeliveryLedger:
        """Flip the delivered flag for a date and persist the ledger."""
        self._ledger = self._ledger.toggle(day)
        self._schedule_write(
            lambda: self.gateway.save_marked_dates(self._ledger), "marked dates"
        )
        return self._ledger

    async def set_quantity(self, value: int) -> None:
        """Set the daily quantity. Raises ValueError for negative values."""
        self._settings = self._settings.with_quantity(value)
        self._schedule_write(
            lambda: self.gateway.save_quantity(self._settings.daily_quantity_liters),
            "daily quantity",
        )

    async def set_price(self, value: int) -> None:
        """Set the price per liter. Raises ValueError for negative values."""
        self._settings = self._settings.with_price(value)
        self._schedule_write(
            lambda: self.gateway.save_price(self._settings.price_per_liter),
            "price per liter",
        )

    async def update_quantity_from_text(self, raw: str) -> bool:
        """Apply a typed quantity; invalid input leaves the quantity unchanged."""
        value = parse_non_negative_int(raw)
        if value is None:
            return False
        await self.set_quantity(value)
        return True

    async def update_price_from_text(self, raw: str) -> bool:
        """Apply a typed price; invalid input leaves the price unchanged."""
        value = parse_non_negative_int(raw)
        if value is None:
            return False
        await self.set_price(value)
        return True

    async def flush(self) -> None:
        """Wait for all scheduled writes to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _schedule_write(self, write: Callable[[], None], description: str) -> None:
        task = asyncio.create_task(self._run_write(write, description))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_write(self, write: Callable[[], None], description: str) -> None:
        async with self._write_lock:
            try:
                await asyncio.to_thread(write)
            except Exception:
                _logger.exception("Failed to persist %s", description)
