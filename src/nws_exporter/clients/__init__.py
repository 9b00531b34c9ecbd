"""HTTP client for the api.weather.gov API."""

from .exceptions import (
    ClientError,
    InvalidStationError,
    MalformedResponseError,
    TransportError,
    UnexpectedStatusError,
)
from .nws import NWSClient

__all__ = [
    "ClientError",
    "InvalidStationError",
    "MalformedResponseError",
    "NWSClient",
    "TransportError",
    "UnexpectedStatusError",
]
