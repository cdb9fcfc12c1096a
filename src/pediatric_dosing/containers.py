"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from pediatric_dosing.adapters.json_file_store import JsonFileKeyValueStore
from pediatric_dosing.adapters.supabase_state_store import SupabaseStateStore
from pediatric_dosing.app_logging import configure_logging
from pediatric_dosing.config import Settings
from pediatric_dosing.services.assistant import DosingAssistant
from pediatric_dosing.services.catalog import MedicationCatalog
from pediatric_dosing.services.children import ChildProfileStore
from pediatric_dosing.services.dosing import DoseEngine
from pediatric_dosing.services.history import HistoryStore
from pediatric_dosing.services.persistence import KeyValueStore, PersistenceGateway
from pediatric_dosing.services.temperature import TemperatureLog


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    gateway: PersistenceGateway
    assistant: DosingAssistant


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by settings."""
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(settings.data_dir)
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateStore(client, table_name=settings.supabase_state_table)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_assistant(
    gateway: PersistenceGateway, engine: DoseEngine | None = None
) -> DosingAssistant:
    """Wire the stores around a gateway."""
    history = HistoryStore(gateway)
    temperatures = TemperatureLog(gateway)
    children = ChildProfileStore(
        gateway=gateway, history=history, temperatures=temperatures
    )
    return DosingAssistant(
        gateway=gateway,
        catalog=MedicationCatalog(),
        children=children,
        history=history,
        temperatures=temperatures,
        engine=engine or DoseEngine(),
    )


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container and load persisted state."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    resolved_store = store or build_store(resolved_settings)
    gateway = PersistenceGateway(resolved_store)
    assistant = build_assistant(gateway)
    assistant.load()
    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        gateway=gateway,
        assistant=assistant,
    )
