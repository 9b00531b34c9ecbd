"""Periodic refresh of station metadata and observation metrics."""

import asyncio
import logging

from .clients import ClientError, InvalidStationError, NWSClient
from .config import InitPolicy
from .metrics import ForecastMetrics

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Task for periodically updating forecast metrics for multiple stations.

    Performs one-time initialization of station metadata metrics and then
    updates the observation metrics for every station on a fixed interval
    until shutdown. A failing station is logged and skipped; the next tick is
    the retry.
    """

    def __init__(
        self,
        stations: list[str],
        metrics: ForecastMetrics,
        client: NWSClient,
        interval_seconds: float,
        init_policy: InitPolicy = "strict",
    ) -> None:
        """Initialize the scheduler.

        Args:
            stations: NWS station identifiers, polled in this order.
            metrics: Gauges to record into.
            client: NWS API client.
            interval_seconds: Delay between the start of one sweep and the next.
            init_policy: "strict" aborts startup on any station lookup error,
                "lenient" only on unknown stations.
        """
        self.stations = list(stations)
        self.metrics = metrics
        self.client = client
        self.interval_seconds = interval_seconds
        self.init_policy = init_policy
        self._sweep_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Set station metadata metrics for every configured station.

        Raises:
            InvalidStationError: If a station does not exist, regardless of policy.
            ClientError: For any other failure when the policy is "strict".
        """
        for station_id in self.stations:
            try:
                station = await self.client.get_station(station_id)
            except InvalidStationError:
                raise
            except ClientError as e:
                if self.init_policy == "strict":
                    raise
                logger.warning(
                    "Unable to fetch station information for %s, continuing: %s",
                    station_id,
                    e,
                )
                continue

            self.metrics.record_station_info(station)
            logger.info(
                "Loaded station %s (%s)", station.station_identifier, station.name
            )

    async def refresh(self) -> int:
        """Fetch and record the latest observation for every station once.

        Sweeps never overlap: a call made while another sweep is running waits
        for it to finish first.

        Returns:
            Number of stations whose observation was recorded.
        """
        recorded = 0
        async with self._sweep_lock:
            for station_id in self.stations:
                try:
                    observation = await self.client.get_latest_observation(station_id)
                except ClientError as e:
                    logger.error("Failed to fetch observation for %s: %s", station_id, e)
                    continue

                self.metrics.record_observation(observation)
                recorded += 1
                logger.info(
                    "Fetched new observation for %s: %s", station_id, observation.id
                )
        return recorded

    async def run_forever(self, shutdown_event: asyncio.Event) -> None:
        """Refresh all stations on the configured interval until shutdown."""
        logger.info(
            "Refreshing %d station(s) every %ss",
            len(self.stations),
            self.interval_seconds,
        )
        loop = asyncio.get_running_loop()
        while not shutdown_event.is_set():
            started = loop.time()
            await self.refresh()

            # Wait for next interval or shutdown
            delay = max(0.0, self.interval_seconds - (loop.time() - started))
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                continue
        logger.info("Refresh loop stopped")
