"""Pytest fixtures for Gallon Logger tests."""

from datetime import datetime, timedelta, timezone

import pytest

from gallon_logger.config import GallonLoggerConfig
from gallon_logger.ledger import Ledger
from gallon_logger.models.event import WeatherConditions
from gallon_logger.paths import DataPaths
from gallon_logger.store import InMemoryEventStore, SqliteEventStore


class StepClock:
    """Clock that advances one minute per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 5, 4, 8, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def data_root(tmp_path):
    """Create a temporary data directory for testing.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary data root
    """
    root = tmp_path / "gallon_data"
    root.mkdir()
    return root


@pytest.fixture
def config(data_root):
    """GallonLoggerConfig pointing to the temporary data directory."""
    return GallonLoggerConfig(data_path=data_root, operator_id="op-1")


@pytest.fixture
def data_paths(config):
    paths = DataPaths.from_config(config)
    for directory in paths.get_all_directories():
        directory.mkdir(parents=True, exist_ok=True)
    return paths


@pytest.fixture
def memory_store():
    return InMemoryEventStore(clock=StepClock())


@pytest.fixture
def sqlite_store(data_paths):
    return SqliteEventStore(data_paths.db_file)


@pytest.fixture
def ledger(memory_store, config):
    """Ledger opened for operator op-1 on an in-memory store."""
    return Ledger(memory_store, config).open("op-1")


@pytest.fixture
def conditions():
    return WeatherConditions(weather="Sunny", temperature=72, wind_direction="South West", wind_speed=5)
