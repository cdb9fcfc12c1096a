"""Domain models for temperature readings."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class TemperatureEntry:
    """Temperature reading in degrees Celsius for a child."""

    child_id: UUID
    date: datetime
    value_c: float
    id: UUID = field(default_factory=uuid4)
