"""Domain models for the delivery ledger."""

import calendar
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

from milk_tracker.domain.settings import DeliverySettings

DECEMBER = 12
JANUARY = 1


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month without a day component."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not JANUARY <= self.month <= DECEMBER:
            raise ValueError(f"Invalid month: {self.month}")
        if not date.min.year <= self.year <= date.max.year:
            raise ValueError(f"Invalid year: {self.year}")

    @classmethod
    def from_date(cls, day: date) -> "YearMonth":
        """Return the month containing a date."""
        return cls(day.year, day.month)

    @classmethod
    def today(cls) -> "YearMonth":
        """Return the current month."""
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, raw: str) -> "YearMonth":
        """Parse a `YYYY-MM` string."""
        year_raw, sep, month_raw = raw.strip().partition("-")
        if not sep or not year_raw.isdigit() or not month_raw.isdigit():
            raise ValueError(f"Invalid year-month: {raw!r}")
        return cls(int(year_raw), int(month_raw))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def day(self, number: int) -> date:
        """Return the given day of this month."""
        return date(self.year, self.month, number)

    def contains(self, day: date) -> bool:
        """Return True when the date falls inside this month."""
        return day.year == self.year and day.month == self.month

    @property
    def is_first(self) -> bool:
        """True for the earliest representable month, 0001-01."""
        return self.year == date.min.year and self.month == JANUARY

    @property
    def is_last(self) -> bool:
        """True for the latest representable month, 9999-12."""
        return self.year == date.max.year and self.month == DECEMBER

    def previous(self) -> "YearMonth":
        if self.month == JANUARY:
            return YearMonth(self.year - 1, DECEMBER)
        return YearMonth(self.year, self.month - 1)

    def next(self) -> "YearMonth":
        if self.month == DECEMBER:
            return YearMonth(self.year + 1, JANUARY)
        return YearMonth(self.year, self.month + 1)

    def label(self) -> str:
        """Human readable label such as `June 2024`."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class MonthlyAggregate:
    """Delivered days and cost for one month."""

    year_month: YearMonth
    delivered_day_count: int
    total_cost: int


@dataclass(frozen=True)
class DeliveryLedger:
    """Delivered flag per calendar date.

    Dates missing from `marked_dates` are treated as not delivered. Toggling a
    date off stores an explicit `False` instead of dropping the entry, so the
    ledger only ever grows.
    """

    marked_dates: Mapping[date, bool] = field(default_factory=dict)

    def is_delivered(self, day: date) -> bool:
        """Return the delivered flag for a date."""
        return self.marked_dates.get(day, False)

    def toggle(self, day: date) -> "DeliveryLedger":
        """Return a new ledger with the flag for `day` flipped."""
        updated = dict(self.marked_dates)
        updated[day] = not updated.get(day, False)
        return DeliveryLedger(updated)

    def count_delivered(self, year_month: YearMonth) -> int:
        """Count delivered dates inside a month."""
        return sum(
            1
            for day, delivered in self.marked_dates.items()
            if delivered and year_month.contains(day)
        )

    def monthly_cost(self, year_month: YearMonth, settings: DeliverySettings) -> int:
        """Return delivered days times daily quantity times price per liter."""
        return (
            self.count_delivered(year_month)
            * settings.daily_quantity_liters
            * settings.price_per_liter
        )

    def aggregate(
        self, year_month: YearMonth, settings: DeliverySettings
    ) -> MonthlyAggregate:
        """Compute the monthly aggregate for the given settings."""
        return MonthlyAggregate(
            year_month=year_month,
            delivered_day_count=self.count_delivered(year_month),
            total_cost=self.monthly_cost(year_month, settings),
        )
