"""Domain models for child profiles."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ChildProfile:
    """A named child with the weight used for dosing."""

    name: str
    birth_date: date
    weight_kg: float
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class ChildListing:
    """Child profile paired with its active-selection flag."""

    profile: ChildProfile
    is_active: bool
