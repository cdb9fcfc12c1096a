"""Medication catalog with selection tracking."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from pediatric_dosing.domain.errors import InvalidInputError, ValidationError
from pediatric_dosing.domain.medications import Medication
from pediatric_dosing.services.units import parse_positive_number

MIN_TIMES_PER_DAY = 1
MAX_TIMES_PER_DAY = 12
MIN_HOURS_INTERVAL = 1
MAX_HOURS_INTERVAL = 24

_logger = logging.getLogger(__name__)


def default_medications() -> list[Medication]:
    """Return the built-in medication list."""
    return [
        Medication(
            name="Paracetamol 100mg/5ml",
            dose_per_kg=0.375,
            times_per_day=4,
            hours_interval=6,
        ),
        Medication(
            name="Paracetamol 200mg/5ml",
            dose_per_kg=0.375,
            times_per_day=4,
            hours_interval=6,
        ),
        Medication(
            name="Ibuprofen 200mg/5ml",
            dose_per_kg=10.0,
            times_per_day=3,
            hours_interval=8,
        ),
        Medication(
            name="Ibuprofen 100mg/5ml",
            dose_per_kg=10.0,
            times_per_day=3,
            hours_interval=8,
        ),
    ]


@dataclass
class MedicationCatalog:
    """Ordered medication list kept sorted by name."""

    _medications: list[Medication] = field(default_factory=default_medications)
    _selected_index: int | None = None

    def __post_init__(self) -> None:
        self.sort(preserve_selection=False)

    @property
    def medications(self) -> list[Medication]:
        """Return a snapshot in display order."""
        return list(self._medications)

    @property
    def selected_index(self) -> int | None:
        """Return the index of the selected medication, if any."""
        return self._selected_index

    @property
    def selected(self) -> Medication | None:
        """Return the selected medication, if any."""
        index = self._selected_index
        if index is None or not 0 <= index < len(self._medications):
            return None
        return self._medications[index]

    def find(self, medication_id: UUID) -> Medication | None:
        """Return a medication by id, if present."""
        for medication in self._medications:
            if medication.id == medication_id:
                return medication
        return None

    def select(self, index: int | None) -> Medication | None:
        """Select by index; an absent or out-of-range index clears the selection."""
        if index is None or not 0 <= index < len(self._medications):
            self._selected_index = None
            return None
        self._selected_index = index
        return self._medications[index]

    def add(self, medication: Medication) -> Medication:
        """Validate and insert a medication, then re-sort."""
        _validate(medication)
        self._medications.append(medication)
        self.sort(preserve_selection=True)
        _logger.info("Added medication %s", medication.name)
        return medication

    def add_medication(
        self,
        name: str,
        dose_per_kg: str | float,
        times_per_day: int = 3,
        hours_interval: int = 8,
    ) -> Medication:
        """Build a medication from form fields and add it."""
        cleaned = name.strip()
        if not cleaned:
            raise ValidationError("Please enter the medication name.")
        dose = parse_positive_number(
            dose_per_kg, message="Please enter a valid dose per kg."
        )
        return self.add(
            Medication(
                name=cleaned,
                dose_per_kg=dose,
                times_per_day=times_per_day,
                hours_interval=hours_interval,
            )
        )

    def sort(self, preserve_selection: bool = True) -> None:
        """Sort by case-insensitive name, optionally keeping the selection."""
        selected = self.selected if preserve_selection else None
        self._medications.sort(key=lambda medication: medication.name.casefold())
        if selected is None:
            self._selected_index = None
            return
        self._selected_index = next(
            (
                index
                for index, medication in enumerate(self._medications)
                if medication.id == selected.id
            ),
            None,
        )


def _validate(medication: Medication) -> None:
    if not medication.name.strip():
        raise ValidationError("Please enter the medication name.")
    try:
        parse_positive_number(medication.dose_per_kg)
    except InvalidInputError as exc:
        raise ValidationError("Please enter a valid dose per kg.") from exc
    if not _is_whole_number(medication.times_per_day) or not _is_whole_number(
        medication.hours_interval
    ):
        raise ValidationError(
            "Doses per day and hours between doses must be whole numbers."
        )
    if not MIN_TIMES_PER_DAY <= medication.times_per_day <= MAX_TIMES_PER_DAY:
        raise ValidationError(
            f"Doses per day must be between {MIN_TIMES_PER_DAY} "
            f"and {MAX_TIMES_PER_DAY}."
        )
    if not MIN_HOURS_INTERVAL <= medication.hours_interval <= MAX_HOURS_INTERVAL:
        raise ValidationError(
            f"Hours between doses must be between {MIN_HOURS_INTERVAL} "
            f"and {MAX_HOURS_INTERVAL}."
        )


def _is_whole_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
