"""Shared test fixtures for all tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "nws"


@pytest.fixture
def load_fixture() -> Callable[[str], dict]:
    """Load a JSON fixture from the NWS fixtures directory."""

    def _load(name: str) -> dict:
        return json.loads((FIXTURES_DIR / name).read_text())

    return _load


@pytest.fixture
def sample_station_id() -> str:
    """Sample NWS station identifier for testing."""
    return "KBOS"


@pytest.fixture
def sample_station_ref() -> str:
    """Full resource URL of the sample station."""
    return "https://api.weather.gov/stations/KBOS"
