"""Dose calculation history."""

from dataclasses import dataclass, field
from uuid import UUID

from pediatric_dosing.domain.doses import DoseCalculation
from pediatric_dosing.services.persistence import PersistenceGateway


@dataclass
class HistoryStore:
    """Most-recent-first log of dose calculations."""

    gateway: PersistenceGateway
    _entries: list[DoseCalculation] = field(default_factory=list)

    @property
    def entries(self) -> list[DoseCalculation]:
        """Return a snapshot of the full history."""
        return list(self._entries)

    def add(self, calculation: DoseCalculation) -> None:
        """Insert a calculation at the front of the history."""
        self._entries.insert(0, calculation)
        self.gateway.save_history(self._entries)

    def filter_by_child(self, child_id: UUID | None) -> list[DoseCalculation]:
        """Return entries for a child, or the whole history when no child is given."""
        if child_id is None:
            return list(self._entries)
        return [entry for entry in self._entries if entry.child_id == child_id]

    def clear(self, child_id: UUID | None = None) -> int:
        """Remove a child's entries, or everything when no child is given."""
        before = len(self._entries)
        if child_id is None:
            self._entries.clear()
        else:
            self._entries = [
                entry for entry in self._entries if entry.child_id != child_id
            ]
        self.gateway.save_history(self._entries)
        return before - len(self._entries)

    def replace_all(self, entries: list[DoseCalculation]) -> None:
        """Replace the history, keeping the given order."""
        self._entries = list(entries)
        self.gateway.save_history(self._entries)
