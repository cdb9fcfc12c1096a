"""Tests for weight conversion and number parsing."""

import math

import pytest

from pediatric_dosing.domain.errors import InvalidInputError, ValidationError
from pediatric_dosing.domain.medications import WeightUnit
from pediatric_dosing.services.units import (
    KG_PER_LB,
    parse_optional_number,
    parse_positive_number,
    to_kg,
)


def test_kg_is_identity() -> None:
    assert to_kg(12.5, WeightUnit.KG) == 12.5
    assert to_kg(12.5, "kg") == 12.5


@pytest.mark.parametrize("pounds", [1.0, 22.0, 44.5])
def test_pounds_convert_with_avoirdupois_factor(pounds: float) -> None:
    assert math.isclose(to_kg(pounds, "lb"), pounds * 0.45359237)
    assert KG_PER_LB == 0.45359237


@pytest.mark.parametrize("value", [0.0, -5.0, math.inf, math.nan])
def test_non_positive_or_non_finite_weight_rejected(value: float) -> None:
    with pytest.raises(InvalidInputError):
        to_kg(value, "kg")


def test_unknown_unit_rejected() -> None:
    with pytest.raises(InvalidInputError):
        to_kg(10.0, "stone")


def test_invalid_input_is_a_validation_error() -> None:
    assert issubclass(InvalidInputError, ValidationError)


def test_parse_positive_number_strips_whitespace() -> None:
    assert parse_positive_number(" 20 ") == 20.0


@pytest.mark.parametrize("text", ["", "abc", "-5", "0", "nan", None])
def test_parse_positive_number_rejects_bad_text(text: str | None) -> None:
    with pytest.raises(InvalidInputError, match="valid weight"):
        parse_positive_number(text)


def test_parse_optional_number() -> None:
    assert parse_optional_number("38.5") == 38.5
    assert parse_optional_number("  ") is None
    assert parse_optional_number("warm") is None
    assert parse_optional_number("inf") is None
    assert parse_optional_number(None) is None
