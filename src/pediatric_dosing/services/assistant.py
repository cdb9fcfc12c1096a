"""Dosing assistant facade used by the presentation layer."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from pediatric_dosing.domain.children import ChildListing, ChildProfile
from pediatric_dosing.domain.doses import DoseCalculation, DoseOutcome
from pediatric_dosing.domain.errors import ValidationError
from pediatric_dosing.domain.medications import Medication, WeightUnit
from pediatric_dosing.domain.temperature import TemperatureEntry
from pediatric_dosing.services.catalog import MedicationCatalog
from pediatric_dosing.services.children import ChildProfileStore
from pediatric_dosing.services.dosing import (
    DoseEngine,
    daily_schedule,
    display_message,
    next_dose_time,
    resolve_weight,
)
from pediatric_dosing.services.history import HistoryStore
from pediatric_dosing.services.persistence import PersistenceGateway
from pediatric_dosing.services.temperature import TemperatureLog
from pediatric_dosing.services.units import parse_optional_number

SELECT_MEDICATION_MESSAGE = "Please select a medication."

_logger = logging.getLogger(__name__)


@dataclass
class DosingAssistant:
    """Owns the collections and routes every user action through them."""

    gateway: PersistenceGateway
    catalog: MedicationCatalog
    children: ChildProfileStore
    history: HistoryStore
    temperatures: TemperatureLog
    engine: DoseEngine
    current_calculation: DoseCalculation | None = None

    def load(self) -> None:
        """Replace persisted collections from storage without re-saving them."""
        with self.gateway.bulk_load():
            self.children.replace_all(self.gateway.load_children())
            self.history.replace_all(self.gateway.load_history())
            self.temperatures.replace_all(self.gateway.load_temperatures())

    def calculate_dose(
        self,
        weight_text: str | float | None,
        unit: WeightUnit | str = WeightUnit.KG,
        temperature_text: str | float | None = None,
    ) -> DoseOutcome:
        """Compute a dose, record it and return the message to display."""
        medication = self.catalog.selected
        if medication is None:
            return DoseOutcome(ok=False, message=SELECT_MEDICATION_MESSAGE)
        active_child = self.children.active
        try:
            weight = resolve_weight(weight_text, unit, active_child)
        except ValidationError as exc:
            return DoseOutcome(ok=False, message=str(exc))

        temperature = parse_optional_number(temperature_text)
        child_id = active_child.id if active_child is not None else None
        calculation = self.engine.calculate(
            medication,
            weight.kg,
            temperature=temperature,
            child_id=child_id,
            weight=weight.value,
            weight_unit=weight.unit,
        )
        schedule = daily_schedule(calculation)
        self.current_calculation = calculation
        self.history.add(calculation)
        if temperature is not None and child_id is not None:
            self.temperatures.record(child_id, temperature, calculation.timestamp)
        _logger.debug(
            "Calculated %s for %s kg", calculation.calculated_dose, weight.kg
        )
        return DoseOutcome(
            ok=True,
            message=display_message(calculation),
            calculation=calculation,
            schedule=schedule,
        )

    def current_schedule(self) -> list[datetime]:
        """Return today's schedule for the latest calculation."""
        if self.current_calculation is None:
            return []
        return daily_schedule(self.current_calculation)

    def next_dose_time(self) -> datetime | None:
        """Return when the next dose of the latest calculation is due."""
        if self.current_calculation is None:
            return None
        return next_dose_time(self.current_calculation)

    @property
    def medications(self) -> list[Medication]:
        """Return the sorted medication list."""
        return self.catalog.medications

    def select_medication(self, index: int | None) -> Medication | None:
        """Select a medication by its position in the sorted list."""
        return self.catalog.select(index)

    def add_medication(
        self,
        name: str,
        dose_per_kg: str | float,
        times_per_day: int = 3,
        hours_interval: int = 8,
    ) -> Medication:
        """Add a medication; raises ValidationError with a user-facing message."""
        return self.catalog.add_medication(
            name, dose_per_kg, times_per_day, hours_interval
        )

    def children_listing(self) -> list[ChildListing]:
        """Return child profiles with the active flag."""
        return self.children.listing()

    def add_child(
        self, name: str, birth_date: date, weight_kg: str | float
    ) -> ChildProfile:
        """Create a child profile."""
        return self.children.add(name, birth_date, weight_kg)

    def edit_child(
        self, index: int, name: str, birth_date: date, weight_kg: str | float
    ) -> ChildProfile:
        """Edit the child profile at an index."""
        return self.children.edit(index, name, birth_date, weight_kg)

    def remove_child(self, child_id: UUID) -> None:
        """Delete a child profile with its history and temperature readings."""
        self.children.remove(child_id)
        if (
            self.current_calculation is not None
            and self.current_calculation.child_id == child_id
        ):
            self.current_calculation = None

    def select_child(self, index: int | None) -> ChildProfile | None:
        """Select the active child by index; None clears the selection."""
        return self.children.select_active(index)

    def visible_history(self) -> list[DoseCalculation]:
        """Return history for the active child, or all history without one."""
        active = self.children.active
        return self.history.filter_by_child(active.id if active else None)

    def clear_history(self) -> int:
        """Clear the active child's history, or all history without one."""
        active = self.children.active
        return self.history.clear(active.id if active else None)

    def temperature_series(self) -> list[TemperatureEntry]:
        """Return the active child's readings in date order."""
        active = self.children.active
        if active is None:
            return []
        return self.temperatures.entries_for_child(active.id)
