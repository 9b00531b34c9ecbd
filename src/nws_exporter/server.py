"""HTTP endpoint exposing metrics in the Prometheus text format."""

import logging

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

logger = logging.getLogger(__name__)

REGISTRY_KEY = web.AppKey("registry", CollectorRegistry)


async def metrics_handler(request: web.Request) -> web.Response:
    """Encode every metric in the registry for a scrape.

    Only GET is allowed. Encoding is done inline with the request; a failure
    is reported as 503 with an empty body.
    """
    if request.method != "GET":
        return web.Response(status=405)

    registry = request.app[REGISTRY_KEY]
    try:
        body = generate_latest(registry)
    except Exception as e:
        logger.error("Error encoding metrics: %s", e, exc_info=True)
        return web.Response(status=503)

    logger.debug("Encoded prometheus metrics to text format: %d bytes", len(body))
    return web.Response(
        body=body,
        status=200,
        headers={"Content-Type": CONTENT_TYPE_LATEST},
    )


async def not_found_handler(request: web.Request) -> web.Response:
    return web.Response(status=404)


def create_app(registry: CollectorRegistry) -> web.Application:
    """Create the metrics application bound to an explicit registry."""
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.router.add_route("*", "/metrics", metrics_handler)
    # Registered last so /metrics is matched first
    app.router.add_route("*", "/{tail:.*}", not_found_handler)
    return app


async def start_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    """Bind and start serving the application.

    Raises:
        OSError: If the address cannot be bound.
    """
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    try:
        await site.start()
    except OSError:
        await runner.cleanup()
        raise
    logger.info("Starting server on %s:%d", host, port)
    return runner
