"""Observation schema for `/stations/{id}/observations/latest` responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from .measurement import Measurement


class Weather(BaseModel):
    """A present weather entry (e.g. light rain, mist)."""

    weather: str | None = None
    raw_string: str | None = Field(default=None, alias="rawString")
    intensity: str | None = None
    modifier: str | None = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class CloudLayer(BaseModel):
    """A reported cloud layer with its base height and coverage code."""

    base: Measurement | None = None
    amount: str

    model_config = {"populate_by_name": True, "extra": "ignore"}


class ObservationProperties(BaseModel):
    """The `properties` object of an observation feature.

    Every measurement is optional: the API omits or nulls out whatever a
    station did not report for this observation.
    """

    ref: str | None = Field(default=None, alias="@id")
    station: str = Field(min_length=1)
    timestamp: datetime
    raw_message: str | None = Field(default=None, alias="rawMessage")
    description: str | None = Field(default=None, alias="textDescription")
    icon: str | None = None
    present_weather: list[Weather] = Field(default_factory=list, alias="presentWeather")
    cloud_layers: list[CloudLayer] = Field(default_factory=list, alias="cloudLayers")

    # Measurements
    elevation: Measurement | None = None
    temperature: Measurement | None = None
    dewpoint: Measurement | None = None
    wind_direction: Measurement | None = Field(default=None, alias="windDirection")
    wind_speed: Measurement | None = Field(default=None, alias="windSpeed")
    wind_gust: Measurement | None = Field(default=None, alias="windGust")
    barometric_pressure: Measurement | None = Field(default=None, alias="barometricPressure")
    sea_level_pressure: Measurement | None = Field(default=None, alias="seaLevelPressure")
    visibility: Measurement | None = None
    max_temperature_last_24_hours: Measurement | None = Field(
        default=None, alias="maxTemperatureLast24Hours"
    )
    min_temperature_last_24_hours: Measurement | None = Field(
        default=None, alias="minTemperatureLast24Hours"
    )
    precipitation_last_hour: Measurement | None = Field(
        default=None, alias="precipitationLastHour"
    )
    precipitation_last_3_hours: Measurement | None = Field(
        default=None, alias="precipitationLast3Hours"
    )
    precipitation_last_6_hours: Measurement | None = Field(
        default=None, alias="precipitationLast6Hours"
    )
    relative_humidity: Measurement | None = Field(default=None, alias="relativeHumidity")
    wind_chill: Measurement | None = Field(default=None, alias="windChill")
    heat_index: Measurement | None = Field(default=None, alias="heatIndex")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Observation(BaseModel):
    """Latest observation feature for a station."""

    id: str = Field(min_length=1)
    properties: ObservationProperties

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def station(self) -> str:
        """Resource URL of the station that made this observation."""
        return self.properties.station

    @property
    def timestamp(self) -> datetime:
        """When the observation was taken."""
        return self.properties.timestamp
