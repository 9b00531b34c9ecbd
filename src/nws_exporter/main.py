"""Main entry point for running the NWS Prometheus exporter."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from prometheus_client import CollectorRegistry
from pydantic import ValidationError

from . import __version__
from .clients import ClientError, InvalidStationError, NWSClient
from .config import Settings, get_settings
from .metrics import ForecastMetrics
from .scheduler import RefreshScheduler
from .server import create_app, start_server

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx and per-request access logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def handle_shutdown(signum: int, shutdown_event: asyncio.Event) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    shutdown_event.set()


def parse_bind(value: str) -> tuple[str, int]:
    """Parse a `host:port` bind address."""
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid bind address {value!r}, expected host:port")
    return host.strip("[]") or "0.0.0.0", int(port)


def positive_int(value: str) -> int:
    """Parse an integer greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="nws-exporter",
        description="Export National Weather Service observations as Prometheus metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export observations for Boston Logan airport
  nws-exporter KBOS

  # Multiple stations, refreshed every minute
  nws-exporter KBOS KJFK --refresh-secs 60

  # Start even if station metadata can't be fetched (unknown stations still fail)
  nws-exporter KBOS --init-policy lenient

Environment Variables:
  EXPORTER_STATION_IDS     Comma-separated station IDs, used when none are given
  EXPORTER_REFRESH_SECONDS Refresh interval in seconds (default: 300)
  EXPORTER_BIND_HOST       Address to bind to (default: 0.0.0.0)
  EXPORTER_BIND_PORT       Port to bind to (default: 9782)
  EXPORTER_INIT_POLICY     strict or lenient (default: strict)
  NWS_BASE_URL             Base URL for the Weather.gov API
  NWS_TIMEOUT_SECONDS      Request timeout in seconds (default: 5)
        """,
    )

    parser.add_argument(
        "station",
        nargs="*",
        help="NWS weather station ID to fetch observations for, may be given multiple times",
    )

    parser.add_argument(
        "--api-url",
        help="Base URL for the Weather.gov API",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--refresh-secs",
        type=positive_int,
        help="Fetch observations from the Weather.gov API at this interval, in seconds",
    )

    parser.add_argument(
        "--timeout-millis",
        type=positive_int,
        help="Timeout for requests to the Weather.gov API, in milliseconds",
    )

    parser.add_argument(
        "--bind",
        type=parse_bind,
        help="Address to serve metrics on, as host:port (default: 0.0.0.0:9782)",
    )

    parser.add_argument(
        "--init-policy",
        choices=["strict", "lenient"],
        help="Whether any startup station lookup failure is fatal (strict) "
        "or only unknown stations are (lenient)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Override environment settings with command line flags that were given."""
    if args.station:
        settings.exporter.station_ids = ",".join(args.station)
    if args.api_url is not None:
        settings.nws.base_url = args.api_url
    if args.log_level is not None:
        settings.log_level = args.log_level
    if args.refresh_secs is not None:
        settings.exporter.refresh_seconds = args.refresh_secs
    if args.timeout_millis is not None:
        settings.nws.timeout_seconds = args.timeout_millis / 1000
    if args.bind is not None:
        settings.exporter.bind_host, settings.exporter.bind_port = args.bind
    if args.init_policy is not None:
        settings.exporter.init_policy = args.init_policy
    return settings


async def run_exporter(
    settings: Settings,
    client: NWSClient | None = None,
    shutdown_event: asyncio.Event | None = None,
) -> int:
    """Validate stations, then serve metrics and refresh them until shutdown.

    Args:
        settings: Application settings.
        client: Optional NWSClient for testing.
        shutdown_event: Optional event to signal shutdown, set by SIGTERM or SIGINT.

    Returns:
        Process exit status.
    """
    shutdown_event = shutdown_event or asyncio.Event()

    # Set up signal handlers
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_shutdown, sig, shutdown_event)

    client = client or NWSClient(settings.nws)
    registry = CollectorRegistry()
    metrics = ForecastMetrics(registry)
    scheduler = RefreshScheduler(
        stations=settings.exporter.get_station_ids_list(),
        metrics=metrics,
        client=client,
        interval_seconds=settings.exporter.refresh_seconds,
        init_policy=settings.exporter.init_policy,
    )

    try:
        # Verify that the stations are valid and the API is available before
        # starting the HTTP server and running indefinitely.
        try:
            await scheduler.initialize()
        except InvalidStationError as e:
            logger.error("Station %s does not exist, check the configured station IDs", e.station_id)
            return 1
        except ClientError as e:
            logger.error("Failed to fetch initial station information: %s", e)
            return 1

        app = create_app(registry)
        host, port = settings.exporter.bind_host, settings.exporter.bind_port
        try:
            runner = await start_server(app, host, port)
        except OSError as e:
            logger.error("Error starting server on %s:%d: %s", host, port, e)
            return 1

        refresh_task = asyncio.create_task(scheduler.run_forever(shutdown_event), name="refresh")
        shutdown_task = asyncio.create_task(shutdown_event.wait(), name="shutdown")
        try:
            await asyncio.wait({refresh_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # Stop accepting scrapes and drain in-flight requests
            await runner.cleanup()
            for task in (refresh_task, shutdown_task):
                if not task.done():
                    task.cancel()
                    try:
                        await task
                    except asyncio.CancelledError:
                        pass
            logger.info("Server shutdown")

        if not shutdown_event.is_set() and refresh_task.exception() is not None:
            logger.error("Refresh loop crashed", exc_info=refresh_task.exception())
            return 1
        return 0
    finally:
        await client.close()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.remove_signal_handler(sig)


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load settings, command line flags take precedence
    try:
        settings = apply_args(get_settings(), args)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e}")
    if not settings.exporter.get_station_ids_list():
        parser.error("at least one station is required (or set EXPORTER_STATION_IDS)")

    # Set up logging
    setup_logging(settings.log_level)
    logger.info("NWS exporter starting for stations: %s", settings.exporter.station_ids)

    try:
        status = asyncio.run(run_exporter(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        status = 0

    logger.info("Shutdown complete")
    sys.exit(status)


if __name__ == "__main__":
    main()
