"""Domain models for medications."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID, uuid4


class WeightUnit(str, Enum):
    """Weight units accepted from the user."""

    KG = "kg"
    LB = "lb"


@dataclass(frozen=True)
class Medication:
    """A catalog entry with its per-kilogram dosing rate."""

    name: str
    dose_per_kg: float
    times_per_day: int
    hours_interval: int
    unit: str = "ml/kg"
    id: UUID = field(default_factory=uuid4)
