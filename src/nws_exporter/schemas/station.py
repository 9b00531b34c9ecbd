"""Station metadata schema for `/stations/{id}` responses."""

from pydantic import BaseModel, Field

from .measurement import Measurement


class StationProperties(BaseModel):
    """The `properties` object of a station feature."""

    ref: str | None = Field(default=None, alias="@id")
    station_identifier: str = Field(alias="stationIdentifier", min_length=1)
    name: str
    elevation: Measurement | None = None
    timezone: str | None = Field(default=None, alias="timeZone")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Station(BaseModel):
    """Station feature returned by the NWS API.

    `id` is the full resource URL (e.g. `https://api.weather.gov/stations/KBOS`)
    and is the same value observations use to refer back to their station.
    """

    id: str = Field(min_length=1)
    properties: StationProperties

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def station_identifier(self) -> str:
        """Short station code, e.g. "KBOS"."""
        return self.properties.station_identifier

    @property
    def name(self) -> str:
        """Display name of the station."""
        return self.properties.name

    @property
    def ref(self) -> str:
        """Station resource URL, preferring `properties.@id` when present."""
        return self.properties.ref or self.id
