"""Persistence gateway between in-memory collections and key-value storage."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter

from pediatric_dosing import storage_models
from pediatric_dosing.domain.children import ChildProfile
from pediatric_dosing.domain.doses import DoseCalculation
from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.domain.temperature import TemperatureEntry

CHILDREN_KEY = "children"
HISTORY_KEY = "dose_history"
TEMPERATURE_KEY = "temperature_log"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable storage for encoded documents under fixed keys."""

    def get(self, key: str) -> str | None:
        """Return the stored document, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a document under a key, replacing any previous value."""


@dataclass
class PersistenceGateway:
    """Saves and loads the persisted collections.

    Saves are skipped while a bulk load is in progress. Failures on either
    side are logged and never raised; a failed load yields an empty list.
    """

    store: KeyValueStore
    is_loading: bool = False

    @contextmanager
    def bulk_load(self) -> Iterator[None]:
        """Suppress saves for the duration of the block."""
        self.is_loading = True
        try:
            yield
        finally:
            self.is_loading = False

    def save_children(self, children: list[ChildProfile]) -> None:
        """Persist child profiles."""
        self._save(CHILDREN_KEY, storage_models.CHILDREN_ADAPTER, children)

    def save_history(self, history: list[DoseCalculation]) -> None:
        """Persist the dose history."""
        self._save(HISTORY_KEY, storage_models.HISTORY_ADAPTER, history)

    def save_temperatures(self, entries: list[TemperatureEntry]) -> None:
        """Persist the temperature log."""
        self._save(TEMPERATURE_KEY, storage_models.TEMPERATURE_ADAPTER, entries)

    def load_children(self) -> list[ChildProfile]:
        """Load child profiles."""
        return self._load(CHILDREN_KEY, storage_models.CHILDREN_ADAPTER)

    def load_history(self) -> list[DoseCalculation]:
        """Load the dose history."""
        return self._load(HISTORY_KEY, storage_models.HISTORY_ADAPTER)

    def load_temperatures(self) -> list[TemperatureEntry]:
        """Load the temperature log."""
        return self._load(TEMPERATURE_KEY, storage_models.TEMPERATURE_ADAPTER)

    def _save(self, key: str, adapter: TypeAdapter, items: list) -> None:
        if self.is_loading:
            return
        try:
            self.store.set(key, storage_models.encode(adapter, list(items)))
        except PersistenceError:
            _logger.exception("Failed to save %s", key)

    def _load(self, key: str, adapter: TypeAdapter) -> list:
        try:
            payload = self.store.get(key)
            if payload is None:
                return []
            items = storage_models.decode(adapter, payload)
        except PersistenceError:
            _logger.exception("Failed to load %s", key)
            return []
        _logger.info("Loaded %s: %s entries", key, len(items))
        return items
