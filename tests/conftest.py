"""Shared test fixtures."""

import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from milk_tracker.config import Settings
from milk_tracker.containers import AppContainer, build_container
from milk_tracker.services.persistence import PreferenceRepository


@dataclass
class InMemoryPreferenceRepository(PreferenceRepository):
    """In-memory preference store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes.append((key, value))


@dataclass
class FailingPreferenceRepository(InMemoryPreferenceRepository):
    """Preference store whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise RuntimeError("storage unavailable")


@dataclass
class SlowFirstWritePreferenceRepository(InMemoryPreferenceRepository):
    """Preference store whose first write stalls before landing."""

    delay_seconds: float = 0.3
    calls: int = 0

    def set(self, key: str, value: str) -> None:
        self.calls += 1
        if self.calls == 1:
            time.sleep(self.delay_seconds)
        super().set(key, value)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name)
        return self.tables[name]


@pytest.fixture(autouse=True)
def _reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("milk_tracker")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="file",
        preferences_path=tmp_path / "preferences.json",
        default_daily_quantity=1,
        default_price_per_liter=50,
    )


@pytest.fixture
def preference_repository() -> InMemoryPreferenceRepository:
    return InMemoryPreferenceRepository()


@pytest.fixture
def container(
    settings: Settings,
    preference_repository: InMemoryPreferenceRepository,
) -> AppContainer:
    return build_container(settings, repository=preference_repository)
