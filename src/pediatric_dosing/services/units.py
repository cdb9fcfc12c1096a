"""Weight unit conversion and numeric input parsing."""

import math

from pediatric_dosing.domain.errors import InvalidInputError
from pediatric_dosing.domain.medications import WeightUnit

KG_PER_LB = 0.45359237

INVALID_WEIGHT_MESSAGE = "Please enter a valid weight."


def to_kg(value: float, unit: WeightUnit | str) -> float:
    """Convert a positive weight in the given unit to kilograms."""
    resolved = _resolve_unit(unit)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(INVALID_WEIGHT_MESSAGE)
    if resolved is WeightUnit.LB:
        return value * KG_PER_LB
    return value


def parse_positive_number(
    text: str | float | None, message: str = INVALID_WEIGHT_MESSAGE
) -> float:
    """Parse free text into a finite, strictly positive number."""
    value = parse_optional_number(text)
    if value is None or value <= 0:
        raise InvalidInputError(message)
    return value


def parse_optional_number(text: str | float | None) -> float | None:
    """Parse free text into a finite number, or None when it isn't one."""
    if text is None:
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        cleaned = text.strip()
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def _resolve_unit(unit: WeightUnit | str) -> WeightUnit:
    try:
        return WeightUnit(unit)
    except ValueError as exc:
        raise InvalidInputError(f"Unsupported weight unit: {unit}") from exc
