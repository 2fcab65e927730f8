"""Pydantic models for the tracker HTTP API."""

from datetime import date

from pydantic import BaseModel


class SettingsUpdate(BaseModel):
    """Raw text typed into a settings field."""

    value: str


class SettingsPayload(BaseModel):
    """Current delivery settings."""

    daily_quantity_liters: int
    price_per_liter: int


class SettingsUpdateResult(BaseModel):
    """Outcome of a settings edit."""

    applied: bool
    settings: SettingsPayload


class MonthSummary(BaseModel):
    """Delivered days and cost for a month."""

    month: str
    delivered_day_count: int
    total_cost: int


class CalendarDayPayload(BaseModel):
    """A single calendar cell."""

    day: date
    delivered: bool


class CalendarPayload(BaseModel):
    """Month grid with its summary."""

    month: str
    label: str
    previous_month: str | None
    next_month: str | None
    weekday_labels: list[str]
    leading_blanks: int
    days: list[CalendarDayPayload]
    summary: MonthSummary


class ToggleResult(BaseModel):
    """Delivered state of a toggled date."""

    day: date
    delivered: bool
    summary: MonthSummary
