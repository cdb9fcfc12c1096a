"""Tests for key-value store adapters."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from pediatric_dosing.adapters.json_file_store import JsonFileKeyValueStore
from pediatric_dosing.adapters.supabase_state_store import SupabaseStateStore
from pediatric_dosing.domain.children import ChildProfile
from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.services.persistence import PersistenceGateway


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    fail: bool = False

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self._payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.fail:
            raise ConnectionError("supabase unavailable")
        if self._action == "upsert":
            self.rows[self._payload["key"]] = self._payload
            return FakeResponse(data=[self._payload])
        key = self.last_filters[-1][1]
        row = self.rows.get(key)
        return FakeResponse(data=[row] if row else [])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_json_file_store_missing_key(tmp_path) -> None:
    store = JsonFileKeyValueStore(tmp_path / "state")

    assert store.get("children") is None


def test_json_file_store_round_trip(tmp_path) -> None:
    directory = tmp_path / "state"
    store = JsonFileKeyValueStore(directory)

    store.set("children", "[]")
    store.set("children", '[{"name": "Ola"}]')

    assert store.get("children") == '[{"name": "Ola"}]'
    assert sorted(path.name for path in directory.iterdir()) == ["children.json"]


def test_json_file_store_write_failure(tmp_path) -> None:
    blocker = tmp_path / "state"
    blocker.write_text("not a directory")
    store = JsonFileKeyValueStore(blocker)

    with pytest.raises(PersistenceError):
        store.set("children", "[]")


def test_gateway_over_json_files_survives_restart(tmp_path) -> None:
    child = ChildProfile(name="Ola", birth_date=date(2020, 1, 2), weight_kg=14.0)
    PersistenceGateway(JsonFileKeyValueStore(tmp_path)).save_children([child])

    reloaded = PersistenceGateway(JsonFileKeyValueStore(tmp_path)).load_children()

    assert reloaded == [child]


def test_supabase_state_store_roundtrip() -> None:
    client = FakeSupabaseClient()
    store = SupabaseStateStore(client)

    assert store.get("dose_history") is None
    store.set("dose_history", "[]")

    assert store.get("dose_history") == "[]"
    row = client.table("app_state").rows["dose_history"]
    assert row["value"] == "[]"
    assert "updated_at" in row


def test_supabase_state_store_custom_table() -> None:
    client = FakeSupabaseClient()
    store = SupabaseStateStore(client, table_name="dosing_state")

    store.set("children", "[]")

    assert "dosing_state" in client.tables


def test_supabase_state_store_wraps_client_errors() -> None:
    client = FakeSupabaseClient()
    client.table("app_state").fail = True
    store = SupabaseStateStore(client)

    with pytest.raises(PersistenceError):
        store.get("children")
    with pytest.raises(PersistenceError):
        store.set("children", "[]")
