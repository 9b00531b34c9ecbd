"""Unit test fixtures - mocks and sample data."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from prometheus_client import CollectorRegistry

from nws_exporter.clients import NWSClient
from nws_exporter.metrics import ForecastMetrics
from nws_exporter.schemas import Observation, Station


@pytest.fixture
def station_data(load_fixture: Callable[[str], dict]) -> dict:
    """Station response for KBOS."""
    return load_fixture("station_KBOS.json")


@pytest.fixture
def observation_data(load_fixture: Callable[[str], dict]) -> dict:
    """Latest observation response for KBOS with most fields reported."""
    return load_fixture("observation_KBOS.json")


@pytest.fixture
def partial_observation_data(load_fixture: Callable[[str], dict]) -> dict:
    """Latest observation response for KBOS with most fields missing."""
    return load_fixture("observation_partial.json")


@pytest.fixture
def sample_station(station_data: dict) -> Station:
    """Decoded KBOS station."""
    return Station.model_validate(station_data)


@pytest.fixture
def sample_observation(observation_data: dict) -> Observation:
    """Decoded KBOS observation."""
    return Observation.model_validate(observation_data)


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fresh, non-global metrics registry."""
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> ForecastMetrics:
    """Forecast metrics registered with the test registry."""
    return ForecastMetrics(registry)


@pytest.fixture
def mock_client() -> AsyncMock:
    """Mock NWS client."""
    return AsyncMock(spec=NWSClient)


@pytest.fixture
def make_observation() -> Callable[..., Observation]:
    """Factory for observations with the given measurement values.

    Keyword names are API field names (e.g. ``temperature``, ``windSpeed``);
    ``None`` produces a reported-but-empty measurement.
    """

    def _make(
        station: str = "https://api.weather.gov/stations/KBOS",
        observation_id: str = "https://api.weather.gov/stations/KBOS/observations/1",
        **measurements: float | None,
    ) -> Observation:
        properties: dict = {"station": station, "timestamp": "2024-01-15T12:00:00+00:00"}
        for field, value in measurements.items():
            properties[field] = {"unitCode": "wmoUnit:degC", "value": value}
        return Observation.model_validate({"id": observation_id, "properties": properties})

    return _make
