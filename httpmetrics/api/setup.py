"""Wire the metrics middlewares and scrape endpoint into an ASGI app."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Iterable

from prometheus_client import CollectorRegistry
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

from httpmetrics.api.middleware import HttpMetricsMiddleware, RecoveryMiddleware
from httpmetrics.core.config import Settings
from httpmetrics.core.logging import logger
from httpmetrics.core.metrics_service import PrometheusMetricsService
from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer
from httpmetrics.core.protocols.metrics_service import MetricsService


def metrics_endpoint(renderer: MetricsRenderer):
    """Build a Starlette endpoint serving the renderer's output."""

    async def handle_metrics(request: Request) -> Response:
        body, content_type = renderer.render(request.headers.get("accept"))
        return Response(content=body, headers={"Content-Type": content_type})

    return handle_metrics


def instrument_app(
    app: Starlette,
    service: MetricsService,
    *,
    metrics_path: str = "/metrics",
    excluded_paths: Iterable[str] = (),
) -> None:
    """Install both middlewares and mount ``GET metrics_path``.

    Works for FastAPI and plain Starlette apps.  Must be called before the
    app starts serving.  ``RecoveryMiddleware`` is added last so it ends up
    outermost.
    """
    app.add_middleware(
        HttpMetricsMiddleware,
        metrics=service.http,
        excluded_paths=tuple(excluded_paths),
    )
    app.add_middleware(RecoveryMiddleware, metrics=service.http)
    app.add_route(
        metrics_path,
        metrics_endpoint(service.renderer),
        methods=["GET"],
        include_in_schema=False,
    )
    logger.info(f"Instrumented app, metrics served at {metrics_path}")


@asynccontextmanager
async def metrics_lifespan(service: MetricsService, settings: Settings) -> AsyncIterator[None]:
    """Run the sidecar server for the app's lifetime when it is enabled.

    Usage inside a FastAPI lifespan::

        async with metrics_lifespan(service, settings):
            yield
    """
    if not settings.METRICS_SIDECAR_ENABLED:
        yield
        return

    await service.start(host=settings.METRICS_HOST, port=settings.METRICS_PORT)
    try:
        yield
    finally:
        await service.stop()


def setup_metrics(
    app: Starlette,
    settings: Settings,
    registry: CollectorRegistry | None = None,
) -> PrometheusMetricsService:
    """Build the metrics service from ``settings`` and instrument ``app`` with it.

    Call once per process.  Passing a ``registry`` that already holds the
    instruments fails with ``MetricsRegistrationError``.
    """
    service = PrometheusMetricsService.create(
        settings.METRICS_NAMESPACE,
        registry=registry,
        metrics_path=settings.METRICS_PATH,
    )
    instrument_app(
        app,
        service,
        metrics_path=settings.METRICS_PATH,
        excluded_paths=settings.METRICS_EXCLUDED_PATHS,
    )
    return service
