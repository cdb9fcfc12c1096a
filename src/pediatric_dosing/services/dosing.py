"""Dose computation and same-day scheduling."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from pediatric_dosing.domain.children import ChildProfile
from pediatric_dosing.domain.doses import DoseCalculation
from pediatric_dosing.domain.medications import Medication, WeightUnit
from pediatric_dosing.services.units import parse_positive_number, to_kg

DOSE_UNIT = "ml"
TEMPERATURE_UNIT = "°C"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class ResolvedWeight:
    """Weight as recorded on the calculation plus its value in kilograms."""

    value: float
    unit: str
    kg: float


def resolve_weight(
    weight_text: str | float | None,
    unit: WeightUnit | str,
    active_child: ChildProfile | None,
) -> ResolvedWeight:
    """Pick the weight to dose by.

    An active child's stored weight always wins over the typed value.
    """
    if active_child is not None:
        return ResolvedWeight(
            value=active_child.weight_kg,
            unit=WeightUnit.KG.value,
            kg=active_child.weight_kg,
        )
    value = parse_positive_number(weight_text)
    kg = to_kg(value, unit)
    return ResolvedWeight(value=value, unit=WeightUnit(unit).value, kg=kg)


def format_dose(dose: float) -> str:
    """Format a dose volume with two decimals."""
    return f"{dose:.2f} {DOSE_UNIT}"


@dataclass
class DoseEngine:
    """Pure dose computation with an injectable clock."""

    clock: Callable[[], datetime] = field(default=_utc_now)

    def calculate(  # noqa: PLR0913
        self,
        medication: Medication,
        effective_weight_kg: float,
        temperature: float | None = None,
        child_id: UUID | None = None,
        *,
        weight: float | None = None,
        weight_unit: str = WeightUnit.KG.value,
    ) -> DoseCalculation:
        """Compute a dose and snapshot the medication's schedule fields."""
        dose = effective_weight_kg * medication.dose_per_kg
        return DoseCalculation(
            medication_name=medication.name,
            weight=effective_weight_kg if weight is None else weight,
            weight_unit=weight_unit,
            calculated_dose=format_dose(dose),
            times_per_day=medication.times_per_day,
            hours_interval=medication.hours_interval,
            timestamp=self.clock(),
            temperature=temperature,
            temp_unit=TEMPERATURE_UNIT if temperature is not None else None,
            child_id=child_id,
        )


def display_message(calculation: DoseCalculation) -> str:
    """Return the user-facing result line, e.g. 'Ibuprofen 4.00 ml'."""
    return f"{calculation.medication_name} {calculation.calculated_dose}"


def daily_schedule(calculation: DoseCalculation) -> list[datetime]:
    """Return dose times starting at the calculation timestamp."""
    schedule = []
    for index in range(calculation.times_per_day):
        try:
            schedule.append(
                calculation.timestamp
                + timedelta(hours=index * calculation.hours_interval)
            )
        except OverflowError:
            continue
    return schedule


def next_dose_time(calculation: DoseCalculation) -> datetime:
    """Return when the next dose is due."""
    try:
        return calculation.timestamp + timedelta(hours=calculation.hours_interval)
    except OverflowError:
        return calculation.timestamp
