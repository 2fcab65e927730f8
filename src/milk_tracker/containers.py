"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from milk_tracker.adapters.file_preference_repository import FilePreferenceRepository
from milk_tracker.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)
from milk_tracker.config import Settings
from milk_tracker.domain.settings import DeliverySettings
from milk_tracker.services.persistence import PersistenceGateway, PreferenceRepository
from milk_tracker.services.tracker import TrackerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session: TrackerSession
    close_resources: Callable[[], Awaitable[None]]


def build_preference_repository(settings: Settings) -> PreferenceRepository:
    """Create the key-value store selected by configuration."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise RuntimeError(
                "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabasePreferenceRepository(
            client=client,
            household_id=settings.household_id,
            table=settings.preferences_table,
        )
    return FilePreferenceRepository(settings.preferences_path)


def build_container(
    settings: Settings | None = None,
    repository: PreferenceRepository | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_repository = repository or build_preference_repository(resolved_settings)
    gateway = PersistenceGateway(resolved_repository)
    defaults = DeliverySettings(
        daily_quantity_liters=resolved_settings.default_daily_quantity,
        price_per_liter=resolved_settings.default_price_per_liter,
    )
    session = TrackerSession.load(gateway, defaults)

    async def close_resources() -> None:
        await session.flush()

    return AppContainer(
        settings=resolved_settings,
        session=session,
        close_resources=close_resources,
    )
