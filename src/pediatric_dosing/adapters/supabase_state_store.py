"""Supabase-backed key-value store for persisted collections."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.services.persistence import KeyValueStore


@dataclass
class SupabaseStateStore(KeyValueStore):
    """Stores documents in a ``key``/``value`` table."""

    client: Client
    table_name: str = "app_state"

    def get(self, key: str) -> str | None:
        """Return the stored document for a key."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise PersistenceError(f"Failed to read {key} from Supabase") from exc
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the document for a key."""
        try:
            response = (
                self.client.table(self.table_name)
                .upsert(
                    {
                        "key": key,
                        "value": value,
                        "updated_at": datetime.now(tz=UTC).isoformat(),
                    }
                )
                .execute()
            )
        except Exception as exc:
            raise PersistenceError(f"Failed to write {key} to Supabase") from exc
        if not response.data:
            raise PersistenceError(f"Failed to write {key} to Supabase")
