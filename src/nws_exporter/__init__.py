"""NWS Exporter - Prometheus metrics for api.weather.gov observations.

Fetches the latest observation for one or more NWS stations on a fixed
interval and exposes the reported values as Prometheus gauges:

- NWSClient: station metadata and latest observations from api.weather.gov
- ForecastMetrics: gauges keyed by station, updated only when a value is reported
- RefreshScheduler: startup validation and the periodic refresh loop

Usage:
    from prometheus_client import CollectorRegistry
    from nws_exporter import ForecastMetrics, NWSClient, RefreshScheduler

    registry = CollectorRegistry()
    scheduler = RefreshScheduler(["KBOS"], ForecastMetrics(registry), NWSClient(), 300)
"""

__version__ = "0.5.1"

from .clients import (
    ClientError,
    InvalidStationError,
    MalformedResponseError,
    NWSClient,
    TransportError,
    UnexpectedStatusError,
)
from .config import Settings, get_settings
from .metrics import ForecastMetrics
from .scheduler import RefreshScheduler
from .schemas import Measurement, Observation, Station

__all__ = [
    "ClientError",
    "ForecastMetrics",
    "InvalidStationError",
    "MalformedResponseError",
    "Measurement",
    "NWSClient",
    "Observation",
    "RefreshScheduler",
    "Settings",
    "Station",
    "TransportError",
    "UnexpectedStatusError",
    "get_settings",
]
