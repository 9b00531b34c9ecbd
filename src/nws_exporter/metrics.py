"""Prometheus gauges populated from NWS stations and observations."""

from prometheus_client import CollectorRegistry, Gauge

from .schemas import Measurement, Observation, Station

NAMESPACE = "nws"
LABEL_STATION = "station"
LABEL_STATION_ID = "station_id"
LABEL_STATION_NAME = "station_name"

# (metric name, help text, observation field)
OBSERVATION_GAUGES: tuple[tuple[str, str, str], ...] = (
    ("elevation_meters", "Elevation in meters", "elevation"),
    ("temperature_degrees", "Temperature in celsius", "temperature"),
    ("dewpoint_degrees", "Dewpoint in celsius", "dewpoint"),
    ("barometric_pressure_pascals", "Barometric pressure in pascals", "barometric_pressure"),
    ("sea_level_pressure_pascals", "Sea level pressure in pascals", "sea_level_pressure"),
    ("visibility_meters", "Visibility in meters", "visibility"),
    ("relative_humidity", "Relative humidity in percent (0-100)", "relative_humidity"),
    ("wind_chill_degrees", "Temperature with wind chill in celsius", "wind_chill"),
    ("heat_index_degrees", "Heat index in celsius", "heat_index"),
    ("wind_direction_degrees", "Wind direction in degrees (angle)", "wind_direction"),
    ("wind_speed_kph", "Wind speed in kilometers per hour", "wind_speed"),
    ("wind_gust_kph", "Wind gust speed in kilometers per hour", "wind_gust"),
    (
        "max_temperature_last_24_hours_degrees",
        "Maximum temperature over the last 24 hours in celsius",
        "max_temperature_last_24_hours",
    ),
    (
        "min_temperature_last_24_hours_degrees",
        "Minimum temperature over the last 24 hours in celsius",
        "min_temperature_last_24_hours",
    ),
    (
        "precipitation_last_hour_millimeters",
        "Precipitation over the last hour in millimeters",
        "precipitation_last_hour",
    ),
    (
        "precipitation_last_3_hours_millimeters",
        "Precipitation over the last 3 hours in millimeters",
        "precipitation_last_3_hours",
    ),
    (
        "precipitation_last_6_hours_millimeters",
        "Precipitation over the last 6 hours in millimeters",
        "precipitation_last_6_hours",
    ),
)


class ForecastMetrics:
    """Holder for gauges set from `Station` and `Observation` responses.

    All gauges are created and registered with the given registry when the
    object is constructed. Names share the "nws_" prefix and carry a "station"
    label set to the full ID of the station, e.g.
    `{station="https://api.weather.gov/stations/KBOS"}`, so the number of
    series is bounded by the number of configured stations.

    Registering twice into the same registry raises `ValueError` from
    prometheus_client. That is a programming error and is not handled here.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry
        self.station = Gauge(
            "station",
            "Station metadata",
            [LABEL_STATION, LABEL_STATION_ID, LABEL_STATION_NAME],
            namespace=NAMESPACE,
            registry=registry,
        )
        self.gauges: dict[str, Gauge] = {}
        for name, documentation, field in OBSERVATION_GAUGES:
            self.gauges[field] = Gauge(
                name,
                documentation,
                [LABEL_STATION],
                namespace=NAMESPACE,
                registry=registry,
            )

    def record_station_info(self, station: Station) -> None:
        """Set station metadata as labels on a single gauge."""
        self.station.labels(
            station.ref,
            station.station_identifier,
            station.name,
        ).set(1)

    def record_observation(self, observation: Observation) -> None:
        """Set gauges from the observation where a value was reported.

        If the observation doesn't contain a value for a particular gauge, the
        gauge is not updated and keeps whatever it last reported.
        """
        station = observation.station
        for field, gauge in self.gauges.items():
            self._set_from_measurement(station, gauge, getattr(observation.properties, field))

    @staticmethod
    def _set_from_measurement(station: str, gauge: Gauge, measurement: Measurement | None) -> None:
        if measurement is None or not measurement.present:
            return
        gauge.labels(station).set(measurement.value)
