"""Supabase repository for household preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from milk_tracker.services.persistence import PreferenceRepository


@dataclass
class SupabasePreferenceRepository(PreferenceRepository):
    """Supabase implementation of the preference key-value store."""

    client: Client
    household_id: str
    table: str = "preferences"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("household_id", self.household_id)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        self.client.table(self.table).upsert(
            {
                "household_id": self.household_id,
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="household_id,key",
        ).execute()
