"""Calendar grid view model for a single month."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

from milk_tracker.domain.ledger import DeliveryLedger, YearMonth

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DAYS_PER_WEEK = len(WEEKDAY_LABELS)


@dataclass(frozen=True)
class CalendarDay:
    """A day cell with its delivered flag."""

    day: date
    delivered: bool


@dataclass(frozen=True)
class CalendarMonth:
    """Monday-first grid for one month."""

    year_month: YearMonth
    leading_blanks: int
    days: list[CalendarDay]
    weekday_labels: tuple[str, ...] = WEEKDAY_LABELS

    def weeks(self) -> Iterator[list[CalendarDay | None]]:
        """Yield 7-column rows, padding the first and last rows with None."""
        cells: list[CalendarDay | None] = [None] * self.leading_blanks
        cells.extend(self.days)
        remainder = len(cells) % DAYS_PER_WEEK
        if remainder:
            cells.extend([None] * (DAYS_PER_WEEK - remainder))
        for start in range(0, len(cells), DAYS_PER_WEEK):
            yield cells[start : start + DAYS_PER_WEEK]


def build_calendar_month(
    year_month: YearMonth, ledger: DeliveryLedger
) -> CalendarMonth:
    """Build the grid for a month, flagging delivered days from the ledger."""
    days = []
    for number in range(1, year_month.days_in_month + 1):
        day = year_month.day(number)
        days.append(CalendarDay(day=day, delivered=ledger.is_delivered(day)))
    return CalendarMonth(
        year_month=year_month,
        leading_blanks=year_month.first_day.weekday(),
        days=days,
    )
