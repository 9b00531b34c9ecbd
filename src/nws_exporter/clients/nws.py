"""NOAA NWS (National Weather Service) API client."""

import logging
from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..config import NWSConfig
from ..schemas import Observation, Station
from .exceptions import (
    InvalidStationError,
    MalformedResponseError,
    TransportError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)

GEO_JSON = "application/geo+json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class NWSClient:
    """HTTP client for station metadata and latest observations.

    The client does not retry. Each call either returns a decoded model or
    raises a `ClientError` subclass describing why it could not.
    """

    def __init__(
        self,
        config: NWSConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize NWS client.

        Args:
            config: NWS configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or NWSConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client with required User-Agent."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": GEO_JSON,
                },
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def station_url(self, station_id: str) -> str:
        """URL of the metadata resource for a station.

        The identifier is percent-encoded in full, so characters such as
        `/`, `?` or `#` cannot change the shape of the path. Dots are encoded
        too, otherwise "." and ".." would be removed as dot segments.
        """
        base = self.config.base_url.rstrip("/")
        return f"{base}/stations/{quote(station_id, safe='').replace('.', '%2E')}"

    def observation_url(self, station_id: str) -> str:
        """URL of the latest observation resource for a station."""
        return f"{self.station_url(station_id)}/observations/latest"

    async def get_station(self, station_id: str) -> Station:
        """Fetch metadata for a station.

        Args:
            station_id: NWS station identifier (e.g., "KBOS").

        Returns:
            Decoded Station.

        Raises:
            ClientError: If the station is unknown, the API misbehaves, or
                the request could not be made.
        """
        url = self.station_url(station_id)
        logger.debug("Making station information request: %s", url)
        return await self._get_model(station_id, url, Station)

    async def get_latest_observation(self, station_id: str) -> Observation:
        """Fetch the latest observation for a station.

        Args:
            station_id: NWS station identifier (e.g., "KBOS").

        Returns:
            Decoded Observation.

        Raises:
            ClientError: If the station is unknown, the API misbehaves, or
                the request could not be made.
        """
        url = self.observation_url(station_id)
        logger.debug("Making latest observation request: %s", url)
        return await self._get_model(station_id, url, Observation)

    async def _get_model(self, station_id: str, url: str, model: type[ModelT]) -> ModelT:
        response = await self._get(station_id, url)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(url, _describe_validation_error(e)) from e

    async def _get(self, station_id: str, url: str) -> httpx.Response:
        """Make a GET request and classify the response status."""
        try:
            response = await self.http_client.get(
                url,
                headers={"User-Agent": self.config.user_agent, "Accept": GEO_JSON},
            )
        except httpx.HTTPError as e:
            raise TransportError(url, e) from e

        if response.status_code == 200:
            return response
        if response.status_code == 404:
            raise InvalidStationError(station_id)
        raise UnexpectedStatusError(response.status_code, url)


def _describe_validation_error(error: ValidationError) -> str:
    """Summarize a pydantic error as `field.path: message` pairs."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<body>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
