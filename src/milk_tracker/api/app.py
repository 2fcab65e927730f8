"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request

from milk_tracker.api.models import (
    CalendarDayPayload,
    CalendarPayload,
    MonthSummary,
    SettingsPayload,
    SettingsUpdate,
    SettingsUpdateResult,
    ToggleResult,
)
from milk_tracker.app_logging import configure_logging
from milk_tracker.containers import AppContainer
from milk_tracker.domain.ledger import MonthlyAggregate, YearMonth
from milk_tracker.domain.settings import DeliverySettings
from milk_tracker.services.tracker import TrackerSession


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to flush pending writes")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/calendar")
    async def current_calendar(request: Request) -> CalendarPayload:
        """Return the grid for the current month."""
        return _calendar_payload(_session(request), YearMonth.today())

    @app.get("/calendar/{year}/{month}")
    async def month_calendar(
        year: int, month: int, request: Request
    ) -> CalendarPayload:
        """Return the grid for a given month."""
        try:
            year_month = YearMonth(year, month)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _calendar_payload(_session(request), year_month)

    @app.post("/deliveries/{day}/toggle")
    async def toggle_delivery(day: date, request: Request) -> ToggleResult:
        """Flip the delivered flag for a date."""
        session = _session(request)
        ledger = await session.toggle(day)
        delivered = ledger.is_delivered(day)
        logger.info("Toggled %s delivered=%s", day.isoformat(), delivered)
        return ToggleResult(
            day=day,
            delivered=delivered,
            summary=_summary_payload(session.summary(YearMonth.from_date(day))),
        )

    @app.get("/settings")
    async def get_settings(request: Request) -> SettingsPayload:
        """Return the current delivery settings."""
        return _settings_payload(_session(request).settings)

    @app.put("/settings/quantity")
    async def update_quantity(
        update: SettingsUpdate, request: Request
    ) -> SettingsUpdateResult:
        """Apply a typed daily quantity when it parses as a whole number."""
        session = _session(request)
        applied = await session.update_quantity_from_text(update.value)
        return SettingsUpdateResult(
            applied=applied, settings=_settings_payload(session.settings)
        )

    @app.put("/settings/price")
    async def update_price(
        update: SettingsUpdate, request: Request
    ) -> SettingsUpdateResult:
        """Apply a typed price per liter when it parses as a whole number."""
        session = _session(request)
        applied = await session.update_price_from_text(update.value)
        return SettingsUpdateResult(
            applied=applied, settings=_settings_payload(session.settings)
        )

    return app


def _session(request: Request) -> TrackerSession:
    container: AppContainer = request.app.state.container
    return container.session


def _settings_payload(settings: DeliverySettings) -> SettingsPayload:
    return SettingsPayload(
        daily_quantity_liters=settings.daily_quantity_liters,
        price_per_liter=settings.price_per_liter,
    )


def _summary_payload(aggregate: MonthlyAggregate) -> MonthSummary:
    return MonthSummary(
        month=str(aggregate.year_month),
        delivered_day_count=aggregate.delivered_day_count,
        total_cost=aggregate.total_cost,
    )


def _calendar_payload(
    session: TrackerSession, year_month: YearMonth
) -> CalendarPayload:
    grid = session.calendar(year_month)
    return CalendarPayload(
        month=str(year_month),
        label=year_month.label(),
        previous_month=None if year_month.is_first else str(year_month.previous()),
        next_month=None if year_month.is_last else str(year_month.next()),
        weekday_labels=list(grid.weekday_labels),
        leading_blanks=grid.leading_blanks,
        days=[
            CalendarDayPayload(day=cell.day, delivered=cell.delivered)
            for cell in grid.days
        ],
        summary=_summary_payload(session.summary(year_month)),
    )
