"""Domain models for dose calculations."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DoseCalculation:
    """Snapshot of a single dose calculation.

    Medication fields are copied at calculation time so later catalog
    changes never alter recorded history.
    """

    medication_name: str
    weight: float
    weight_unit: str
    calculated_dose: str
    times_per_day: int
    hours_interval: int
    timestamp: datetime
    temperature: float | None = None
    temp_unit: str | None = None
    child_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class DoseOutcome:
    """Result of a dose request as shown to the user."""

    ok: bool
    message: str
    calculation: DoseCalculation | None = None
    schedule: list[datetime] = field(default_factory=list)
