"""Pydantic codecs for persisted collections."""

import pydantic
from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from pediatric_dosing.domain.children import ChildProfile
from pediatric_dosing.domain.doses import DoseCalculation
from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.domain.temperature import TemperatureEntry

CHILDREN_ADAPTER = TypeAdapter(list[ChildProfile])
HISTORY_ADAPTER = TypeAdapter(list[DoseCalculation])
TEMPERATURE_ADAPTER = TypeAdapter(list[TemperatureEntry])


def encode(adapter: TypeAdapter, items: list) -> str:
    """Encode a collection as a JSON array of field-named objects."""
    try:
        return adapter.dump_json(items).decode("utf-8")
    except PydanticSerializationError as exc:
        raise PersistenceError(f"Failed to encode collection: {exc}") from exc


def decode(adapter: TypeAdapter, payload: str) -> list:
    """Decode a JSON array; optional fields missing from old records become None."""
    try:
        return adapter.validate_json(payload)
    except pydantic.ValidationError as exc:
        raise PersistenceError(f"Failed to decode collection: {exc}") from exc
