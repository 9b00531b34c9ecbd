"""NWS API response schemas.

Pydantic models for decoding api.weather.gov GeoJSON responses.
"""

from .measurement import Measurement
from .observation import CloudLayer, Observation, ObservationProperties, Weather
from .station import Station, StationProperties

__all__ = [
    "CloudLayer",
    "Measurement",
    "Observation",
    "ObservationProperties",
    "Station",
    "StationProperties",
    "Weather",
]
