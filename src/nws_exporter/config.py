"""Configuration settings loaded from environment variables."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

InitPolicy = Literal["strict", "lenient"]


class NWSConfig(BaseSettings):
    """NOAA NWS API configuration."""

    base_url: str = "https://api.weather.gov"
    user_agent: str = "NWS Prometheus Exporter (https://github.com/56quarters/nws_exporter)"
    timeout_seconds: float = Field(default=5.0, gt=0)

    model_config = {"env_prefix": "NWS_"}


class ExporterConfig(BaseSettings):
    """Polling and metrics endpoint configuration."""

    station_ids: str = ""  # Comma-separated NWS station IDs (e.g., "KBOS,KJFK")
    refresh_seconds: int = Field(default=300, gt=0)  # 5 minutes
    bind_host: str = "0.0.0.0"
    bind_port: int = 9782
    # strict: any station lookup failure at startup is fatal
    # lenient: only unknown stations are fatal, other failures are logged
    init_policy: InitPolicy = "strict"

    model_config = {"env_prefix": "EXPORTER_"}

    def get_station_ids_list(self) -> list[str]:
        """Parse station_ids string into list, preserving order."""
        if not self.station_ids.strip():
            return []
        return [s.strip() for s in self.station_ids.split(",") if s.strip()]


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    nws: NWSConfig = Field(default_factory=NWSConfig)
    exporter: ExporterConfig = Field(default_factory=ExporterConfig)


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
