"""End-to-end scenarios: mocked NWS API through to the /metrics output."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx
from aiohttp.test_utils import TestClient, TestServer
from prometheus_client import CollectorRegistry

from nws_exporter.clients import NWSClient
from nws_exporter.config import ExporterConfig, NWSConfig, Settings
from nws_exporter.main import run_exporter
from nws_exporter.metrics import ForecastMetrics
from nws_exporter.scheduler import RefreshScheduler
from nws_exporter.server import create_app

BASE_URL = "https://api.weather.gov"
KBOS = f"{BASE_URL}/stations/KBOS"
KJFK = f"{BASE_URL}/stations/KJFK"


def observation_response(station: str, tick: int, **measurements: float | None) -> httpx.Response:
    properties: dict = {
        "station": station,
        "timestamp": f"2024-01-15T{tick:02d}:00:00+00:00",
    }
    for field, value in measurements.items():
        properties[field] = {"unitCode": "wmoUnit:degC", "value": value, "qualityControl": "V"}
    return httpx.Response(
        200,
        json={"id": f"{station}/observations/{tick}", "type": "Feature", "properties": properties},
    )


@pytest.fixture
def nws_client() -> NWSClient:
    return NWSClient(config=NWSConfig(base_url=BASE_URL, timeout_seconds=1.0))


async def scrape(registry: CollectorRegistry) -> str:
    async with TestClient(TestServer(create_app(registry))) as client:
        resp = await client.get("/metrics")
        assert resp.status == 200
        return await resp.text()


class TestEndToEnd:
    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_value_keeps_last_published(self, nws_client: NWSClient):
        """Test a value that disappears keeps its last reading in the output."""
        route = respx.get(f"{KBOS}/observations/latest")
        route.side_effect = [
            observation_response(KBOS, 1, temperature=21.5, dewpoint=None),
            observation_response(KBOS, 2, temperature=None),
        ]
        registry = CollectorRegistry()
        scheduler = RefreshScheduler(["KBOS"], ForecastMetrics(registry), nws_client, 300)

        await scheduler.refresh()
        body = await scrape(registry)

        assert f'nws_temperature_degrees{{station="{KBOS}"}} 21.5' in body
        assert "nws_dewpoint_degrees{" not in body

        await scheduler.refresh()
        body = await scrape(registry)

        assert f'nws_temperature_degrees{{station="{KBOS}"}} 21.5' in body
        assert route.call_count == 2
        await nws_client.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_one_station_500_other_updates(
        self, nws_client: NWSClient, caplog: pytest.LogCaptureFixture
    ):
        """Test an upstream 500 for one station doesn't stop the other."""
        respx.get(f"{KBOS}/observations/latest").mock(return_value=httpx.Response(500))
        respx.get(f"{KJFK}/observations/latest").mock(
            return_value=observation_response(KJFK, 1, temperature=4.0)
        )
        registry = CollectorRegistry()
        scheduler = RefreshScheduler(["KBOS", "KJFK"], ForecastMetrics(registry), nws_client, 300)

        with caplog.at_level(logging.INFO, logger="nws_exporter.scheduler"):
            await scheduler.refresh()
        body = await scrape(registry)

        assert f'nws_temperature_degrees{{station="{KJFK}"}} 4.0' in body
        assert f'station="{KBOS}"' not in body
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "KBOS" in errors[0]
        assert "500" in errors[0]
        await nws_client.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_unknown_station_fails_startup_before_bind(self, nws_client: NWSClient):
        """Test a 404 during initialization exits non-zero without binding."""
        respx.get(f"{BASE_URL}/stations/BAD-ID").mock(return_value=httpx.Response(404))
        settings = Settings(
            nws=NWSConfig(base_url=BASE_URL),
            exporter=ExporterConfig(station_ids="BAD-ID", bind_host="127.0.0.1", bind_port=0),
        )

        with patch("nws_exporter.main.start_server", new=AsyncMock()) as start:
            status = await run_exporter(settings, client=nws_client)

        assert status == 1
        start.assert_not_awaited()

    @respx.mock
    @pytest.mark.asyncio
    async def test_serves_metrics_after_startup(self, nws_client: NWSClient, load_fixture):
        """Test the exporter validates, polls, serves, and shuts down."""
        respx.get(KBOS).mock(return_value=httpx.Response(200, json=load_fixture("station_KBOS.json")))
        respx.get(f"{KBOS}/observations/latest").mock(
            return_value=httpx.Response(200, json=load_fixture("observation_KBOS.json"))
        )
        settings = Settings(
            nws=NWSConfig(base_url=BASE_URL),
            exporter=ExporterConfig(
                station_ids="KBOS", refresh_seconds=3600, bind_host="127.0.0.1", bind_port=0
            ),
        )
        shutdown_event = asyncio.Event()
        started = {}

        async def fake_start_server(app, host, port):
            started["app"] = app
            runner = AsyncMock()
            return runner

        with patch("nws_exporter.main.start_server", new=fake_start_server):
            task = asyncio.create_task(
                run_exporter(settings, client=nws_client, shutdown_event=shutdown_event)
            )
            for _ in range(100):
                if "app" in started:
                    break
                await asyncio.sleep(0.01)

            async with TestClient(TestServer(started["app"])) as client:
                for _ in range(100):
                    resp = await client.get("/metrics")
                    body = await resp.text()
                    if "nws_temperature_degrees{" in body:
                        break
                    await asyncio.sleep(0.01)

            shutdown_event.set()
            status = await asyncio.wait_for(task, timeout=2)

        assert status == 0
        assert resp.status == 200
        assert 'station_id="KBOS"' in body
        assert f'nws_temperature_degrees{{station="{KBOS}"}} -2.2' in body
