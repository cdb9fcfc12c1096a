"""Child profile management."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID

from pediatric_dosing.domain.children import ChildListing, ChildProfile
from pediatric_dosing.domain.errors import ValidationError
from pediatric_dosing.services.history import HistoryStore
from pediatric_dosing.services.persistence import PersistenceGateway
from pediatric_dosing.services.temperature import TemperatureLog
from pediatric_dosing.services.units import parse_positive_number

_logger = logging.getLogger(__name__)


@dataclass
class ChildProfileStore:
    """Holds child profiles and the active selection.

    Removing a child also removes its history and temperature entries.
    """

    gateway: PersistenceGateway
    history: HistoryStore
    temperatures: TemperatureLog
    _profiles: list[ChildProfile] = field(default_factory=list)
    _active_id: UUID | None = None

    @property
    def profiles(self) -> list[ChildProfile]:
        """Return a snapshot of all profiles."""
        return list(self._profiles)

    @property
    def active(self) -> ChildProfile | None:
        """Return the active child, if any."""
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, child_id: UUID) -> ChildProfile | None:
        """Return a profile by id, if present."""
        for profile in self._profiles:
            if profile.id == child_id:
                return profile
        return None

    def listing(self) -> list[ChildListing]:
        """Return profiles with their active flag."""
        return [
            ChildListing(profile=profile, is_active=profile.id == self._active_id)
            for profile in self._profiles
        ]

    def add(self, name: str, birth_date: date, weight_kg: str | float) -> ChildProfile:
        """Create a profile and append it."""
        profile = ChildProfile(
            name=_validate_name(name),
            birth_date=birth_date,
            weight_kg=_validate_weight(weight_kg),
        )
        self._profiles.append(profile)
        self.gateway.save_children(self._profiles)
        return profile

    def edit(
        self, index: int, name: str, birth_date: date, weight_kg: str | float
    ) -> ChildProfile:
        """Replace the profile at an index, keeping its id."""
        if not 0 <= index < len(self._profiles):
            raise ValidationError("Please select a child profile to edit.")
        updated = replace(
            self._profiles[index],
            name=_validate_name(name),
            birth_date=birth_date,
            weight_kg=_validate_weight(weight_kg),
        )
        self._profiles[index] = updated
        self.gateway.save_children(self._profiles)
        return updated

    def remove(self, child_id: UUID) -> None:
        """Remove a profile and everything recorded for it."""
        remaining = [profile for profile in self._profiles if profile.id != child_id]
        if len(remaining) == len(self._profiles):
            return
        self._profiles = remaining
        if self._active_id == child_id:
            self._active_id = None
        self.gateway.save_children(self._profiles)
        removed_history = self.history.clear(child_id)
        removed_readings = self.temperatures.remove_for_child(child_id)
        _logger.info(
            "Removed child %s with %s history and %s temperature entries",
            child_id,
            removed_history,
            removed_readings,
        )

    def select_active(self, index: int | None) -> ChildProfile | None:
        """Select the active child by index; out of range clears the selection."""
        if index is None or not 0 <= index < len(self._profiles):
            self._active_id = None
            return None
        profile = self._profiles[index]
        self._active_id = profile.id
        return profile

    def replace_all(self, profiles: list[ChildProfile]) -> None:
        """Replace every profile, dropping a selection that no longer exists."""
        self._profiles = list(profiles)
        if self._active_id is not None and self.get(self._active_id) is None:
            self._active_id = None
        self.gateway.save_children(self._profiles)


def _validate_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Please enter the child's name.")
    return cleaned


def _validate_weight(weight_kg: str | float | None) -> float:
    return parse_positive_number(weight_kg, message="Please enter a valid weight.")
