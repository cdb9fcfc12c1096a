"""Temperature log keyed by child."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pediatric_dosing.domain.temperature import TemperatureEntry
from pediatric_dosing.services.persistence import PersistenceGateway


@dataclass
class TemperatureLog:
    """Append-only series of temperature readings."""

    gateway: PersistenceGateway
    _entries: list[TemperatureEntry] = field(default_factory=list)

    @property
    def entries(self) -> list[TemperatureEntry]:
        """Return a snapshot of every reading."""
        return list(self._entries)

    def record(self, child_id: UUID, value_c: float, at: datetime) -> TemperatureEntry:
        """Create and append a reading for a child."""
        entry = TemperatureEntry(child_id=child_id, date=at, value_c=value_c)
        self.add(entry)
        return entry

    def add(self, entry: TemperatureEntry) -> None:
        """Append a reading."""
        self._entries.append(entry)
        self.gateway.save_temperatures(self._entries)

    def entries_for_child(self, child_id: UUID) -> list[TemperatureEntry]:
        """Return a child's readings in ascending date order."""
        return sorted(
            (entry for entry in self._entries if entry.child_id == child_id),
            key=lambda entry: entry.date,
        )

    def remove_for_child(self, child_id: UUID) -> int:
        """Drop every reading that belongs to a child."""
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.child_id != child_id]
        self.gateway.save_temperatures(self._entries)
        return before - len(self._entries)

    def replace_all(self, entries: list[TemperatureEntry]) -> None:
        """Replace every reading."""
        self._entries = list(entries)
        self.gateway.save_temperatures(self._entries)
