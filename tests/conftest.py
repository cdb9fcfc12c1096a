"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from pediatric_dosing.config import Settings
from pediatric_dosing.containers import build_assistant
from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.services.assistant import DosingAssistant
from pediatric_dosing.services.dosing import DoseEngine
from pediatric_dosing.services.persistence import KeyValueStore, PersistenceGateway

START = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.values[key] = value


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose reads and writes always fail."""

    attempts: int = 0

    def get(self, key: str) -> str | None:
        self.attempts += 1
        raise PersistenceError(f"cannot read {key}")

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        raise PersistenceError(f"cannot write {key}")


@dataclass
class SteppingClock:
    """Clock that advances by a fixed step on every call."""

    now: datetime = START
    step: timedelta = timedelta(minutes=5)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="file", data_dir=tmp_path / "state")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def gateway(store: InMemoryKeyValueStore) -> PersistenceGateway:
    return PersistenceGateway(store)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def assistant(gateway: PersistenceGateway, clock: SteppingClock) -> DosingAssistant:
    return build_assistant(gateway, engine=DoseEngine(clock=clock))


@pytest.fixture(autouse=True)
def _reset_app_logger():
    logger = logging.getLogger("pediatric_dosing")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
